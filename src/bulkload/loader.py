"""Loads NJSON (new-line-delimited JSON) data into Elasticsearch in batches.

An NJSON file has two lines per record: the action / primary key line and
the document line. This is the format the `_bulk` API expects, so lines are
forwarded as-is and never parsed here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

import requests

from .config import (
    BULK_API,
    DEFAULT_BATCH_SIZE,
    DEFAULT_PRINT_PROGRESS_SIZE,
    NDJSON_CONTENT_TYPE,
    REQUEST_TIMEOUT,
)
from .connection import HttpConnectionFactory
from .errors import InputContractError
from .http_utils import get_last_line, raise_for_transport_failure
from .reader import Record, RecordReader, pair_lines
from .response import count_errors

logger = logging.getLogger(__name__)


@dataclass
class LoadTotals:
    """Counters for one streaming load."""

    total_records: int = 0
    batches: int = 0
    errors: int = 0

    def add_batch(self, num_records: int, num_errors: int) -> None:
        self.total_records += num_records - num_errors
        self.errors += num_errors
        self.batches += 1


class DataLoader:
    """Sends NJSON records to the `_bulk` endpoint of one index.

    Args:
        es_url: Elasticsearch base URL.
        es_index: target index name.
        es_auth_file: optional JSON credentials file.
        connection_factory: prebuilt factory, mainly for tests.
    """

    def __init__(
        self,
        es_url: str,
        es_index: str,
        es_auth_file: Optional[str | Path] = None,
        *,
        connection_factory: Optional[HttpConnectionFactory] = None,
        timeout: float = REQUEST_TIMEOUT,
        verify_tls: bool = True,
    ) -> None:
        self.batch_size = DEFAULT_BATCH_SIZE
        self.print_progress_size = DEFAULT_PRINT_PROGRESS_SIZE
        self._factory = connection_factory or HttpConnectionFactory(
            es_url, es_index, BULK_API, timeout=timeout, verify_tls=verify_tls
        )
        self._factory.init_auth(es_auth_file)

    def set_batch_size(self, size: int) -> None:
        """Set the number of records per request; applies from the next batch on."""
        if size <= 0:
            raise ValueError("Batch size should be > 0")
        self.batch_size = size

    def set_print_progress_size(self, size: int) -> None:
        if size <= 0:
            raise ValueError("Progress size should be > 0")
        self.print_progress_size = size

    def load_batch(self, data: Optional[List[str]]) -> int:
        """Load a list of NJSON lines (two per record) in a single request.

        Returns the number of records actually saved.
        """
        if not data:
            return 0
        if len(data) % 2 != 0:
            raise InputContractError("Data list size should be an even number.")

        records = pair_lines(list(data))
        return len(records) - self._send_batch(records)

    def load_file(self, path: str | Path) -> LoadTotals:
        """Load an NJSON file batch by batch."""
        file_path = Path(path)
        logger.info("Loading data file: %s", file_path.resolve())
        handle = file_path.open("r", encoding="utf-8")
        return self._load_data(RecordReader(handle))

    def load_lines(self, lines: Iterable[str]) -> LoadTotals:
        """Load NJSON lines from any iterable batch by batch."""
        return self._load_data(RecordReader(lines))

    def _load_data(self, reader: RecordReader) -> LoadTotals:
        totals = LoadTotals()
        with reader:
            # Empty input
            if not reader.has_more():
                return totals

            while True:
                batch = reader.read_batch(self.batch_size)
                num_errors = self._send_batch(batch)
                totals.add_batch(len(batch), num_errors)

                if not reader.has_more():
                    break
                if totals.total_records and totals.total_records % self.print_progress_size == 0:
                    logger.info("Loaded %d document(s)", totals.total_records)

            logger.info("Loaded %d document(s)", totals.total_records)
        return totals

    def _send_batch(self, records: List[Record]) -> int:
        """POST one batch and return the number of records that were not saved."""
        payload = "".join(f"{rec.key_line}\n{rec.data_line}\n" for rec in records)

        session = self._factory.create_connection()
        try:
            response = session.post(
                self._factory.url,
                data=payload.encode("utf-8"),
                headers={"Content-Type": NDJSON_CONTENT_TYPE},
                timeout=self._factory.timeout,
            )
            response.raise_for_status()
            resp_json = get_last_line(response.text)
        except requests.RequestException as exc:
            raise_for_transport_failure(exc, self._factory.get_host_name())
            raise
        finally:
            session.close()

        logger.debug(resp_json)
        return count_errors(resp_json)


__all__ = ["DataLoader", "LoadTotals"]
