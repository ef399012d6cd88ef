"""Line-pair reader over NJSON sources with a single-line lookahead."""

from __future__ import annotations

from typing import Iterable, Iterator, List, NamedTuple, Optional

from .errors import InputContractError, PrematureEndError


class Record(NamedTuple):
    """One NJSON record: the action/primary key line and the document line."""

    key_line: str
    data_line: str


def pair_lines(lines: List[str]) -> List[Record]:
    """Pair an even-length list of lines into records."""
    return [Record(lines[i], lines[i + 1]) for i in range(0, len(lines) - 1, 2)]


class RecordReader:
    """Reads records from any iterable of lines (file object, list, generator).

    ``has_more()`` peeks one line ahead without consuming it; a missing line
    or trailing blank lines mark the end of the input, while a blank line with
    data after it is an input error. Used as a context manager the
    reader closes the underlying source when it has a ``close`` method.
    """

    def __init__(self, source: Iterable[str]) -> None:
        self._source = source
        self._lines: Iterator[str] = iter(source)
        self._lookahead: Optional[str] = None
        self._line_no = 0
        self._exhausted = False

    def __enter__(self) -> "RecordReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        close = getattr(self._source, "close", None)
        if callable(close):
            close()

    def _read_source(self) -> Optional[str]:
        if self._exhausted:
            return None
        line = next(self._lines, None)
        if line is None:
            self._exhausted = True
            return None
        self._line_no += 1
        return line.rstrip("\r\n")

    def _next_line(self) -> Optional[str]:
        if self._lookahead is not None:
            line, self._lookahead = self._lookahead, None
            return line
        return self._read_source()

    def has_more(self) -> bool:
        """Peek at the next line; True when it starts another record.

        Blank lines end the input only when nothing but blank lines follows.
        """
        if self._lookahead is None:
            self._lookahead = self._read_source()
        if self._lookahead != "":
            return self._lookahead is not None

        blank_line_no = self._line_no
        while True:
            line = self._read_source()
            if line is None:
                return False
            if line:
                raise InputContractError(
                    f"Blank line {blank_line_no} is followed by more data at line {self._line_no}"
                )

    def read_record(self) -> Optional[Record]:
        """Return the next record, or None once the input is exhausted."""
        if not self.has_more():
            return None
        key_line = self._next_line()
        data_line = self._next_line()
        if data_line is None:
            raise PrematureEndError()
        return Record(key_line, data_line)

    def read_batch(self, size: int) -> List[Record]:
        """Read up to ``size`` records; the whole batch is read before it is returned."""
        batch: List[Record] = []
        while len(batch) < size:
            record = self.read_record()
            if record is None:
                break
            batch.append(record)
        return batch


__all__ = ["Record", "RecordReader", "pair_lines"]
