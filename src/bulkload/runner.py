"""Entry point wiring configuration, logging and the NJSON data loader."""

from __future__ import annotations

import logging
from typing import List, Optional

import requests

from .config import LoaderSettings, build_arg_parser, parse_args, resolve_settings
from .errors import BulkLoadError
from .loader import DataLoader

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def _build_loader(settings: LoaderSettings) -> DataLoader:
    loader = DataLoader(
        settings.es_url,
        settings.index,
        settings.auth_file,
        timeout=settings.timeout,
        verify_tls=settings.verify_tls,
    )
    loader.set_batch_size(settings.batch_size)
    loader.set_print_progress_size(settings.print_progress_size)
    return loader


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point; returns a process exit code."""

    args = parse_args(argv)
    try:
        settings = resolve_settings(args)
    except ValueError as exc:
        build_arg_parser().error(str(exc))
    configure_logging(settings.log_level)

    try:
        loader = _build_loader(settings)
        for path in settings.files:
            totals = loader.load_file(path)
            print(f"{path}: loaded={totals.total_records} failed={totals.errors} batches={totals.batches}")
    except (BulkLoadError, requests.RequestException, OSError) as exc:
        logger.error("Load failed: %s", exc)
        return 1
    return 0


__all__ = ["main", "configure_logging"]
