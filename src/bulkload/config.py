"""Configuration helpers for the NJSON bulk loading workflow."""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from src.secrets import load_local_secrets

logger = logging.getLogger(__name__)

_SECRETS = load_local_secrets()
_LOADER_SECRETS = _SECRETS.get("bulkload", {})

BULK_API = "_bulk?refresh=wait_for"
NDJSON_CONTENT_TYPE = "application/x-ndjson; charset=utf-8"
REQUEST_TIMEOUT = 60

DEFAULT_BATCH_SIZE = 100
DEFAULT_PRINT_PROGRESS_SIZE = 500

DEFAULT_ES_URL = os.getenv("BULKLOAD_ES_URL", _LOADER_SECRETS.get("url", "http://localhost:9200"))
DEFAULT_INDEX: Optional[str] = os.getenv("BULKLOAD_INDEX", _LOADER_SECRETS.get("index"))
DEFAULT_AUTH_FILE: Optional[str] = os.getenv("BULKLOAD_AUTH_FILE", _LOADER_SECRETS.get("auth_file"))
DEFAULT_VERIFY_TLS = bool(_LOADER_SECRETS.get("verify_tls", True))


def env_batch_size() -> int:
    """Default batch size from env or local secrets; falls back when not an integer."""

    raw = os.getenv("BULKLOAD_BATCH_SIZE", _LOADER_SECRETS.get("batch_size", DEFAULT_BATCH_SIZE))
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid batch size %r; using %d", raw, DEFAULT_BATCH_SIZE)
        return DEFAULT_BATCH_SIZE


@dataclass(frozen=True)
class LoaderSettings:
    """Resolved runtime settings for one loader invocation."""

    files: Tuple[Path, ...]
    es_url: str
    index: str
    auth_file: Optional[str]
    batch_size: int
    print_progress_size: int
    timeout: float
    verify_tls: bool
    log_level: str


def build_arg_parser() -> argparse.ArgumentParser:
    """Return the CLI parser used by the loader entry point."""

    parser = argparse.ArgumentParser(
        description="Bulk-load NJSON (two lines per record) files into an Elasticsearch index.",
    )
    parser.add_argument("files", nargs="+", help="NJSON files to load, in order.")
    parser.add_argument("--es-url", default=DEFAULT_ES_URL)
    parser.add_argument("--index", default=DEFAULT_INDEX)
    parser.add_argument("--auth-file", default=DEFAULT_AUTH_FILE)
    parser.add_argument("--batch-size", type=int, default=env_batch_size())
    parser.add_argument("--progress-size", type=int, default=DEFAULT_PRINT_PROGRESS_SIZE)
    parser.add_argument("--timeout", type=float, default=REQUEST_TIMEOUT)
    parser.add_argument("--no-verify-tls", dest="verify_tls", action="store_false", default=DEFAULT_VERIFY_TLS)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments; accepts argv overrides for testing."""

    parser = build_arg_parser()
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace) -> LoaderSettings:
    """Validate parsed arguments and return immutable settings."""

    if not args.index:
        raise ValueError("Index name is required (--index or BULKLOAD_INDEX)")
    if args.batch_size <= 0:
        raise ValueError("Batch size should be > 0")
    if args.progress_size <= 0:
        raise ValueError("Progress size should be > 0")

    return LoaderSettings(
        files=tuple(Path(name) for name in args.files),
        es_url=args.es_url,
        index=args.index,
        auth_file=args.auth_file or None,
        batch_size=int(args.batch_size),
        print_progress_size=int(args.progress_size),
        timeout=float(args.timeout),
        verify_tls=bool(args.verify_tls),
        log_level=args.log_level,
    )


__all__ = [
    "BULK_API",
    "NDJSON_CONTENT_TYPE",
    "REQUEST_TIMEOUT",
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_PRINT_PROGRESS_SIZE",
    "DEFAULT_ES_URL",
    "DEFAULT_INDEX",
    "DEFAULT_AUTH_FILE",
    "env_batch_size",
    "LoaderSettings",
    "build_arg_parser",
    "parse_args",
    "resolve_settings",
]
