"""Tests for src.bulkload.reader covering record pairing, lookahead and closing.

Run with coverage:
    pytest tests/test_bulkload_reader.py --maxfail=1 -v --cov=src.bulkload.reader --cov-report=term-missing
"""

import io

import pytest

from src.bulkload.errors import InputContractError, PrematureEndError
from src.bulkload.reader import Record, RecordReader, pair_lines


def test_pair_lines():
    assert pair_lines(["k1", "d1", "k2", "d2"]) == [Record("k1", "d1"), Record("k2", "d2")]


def test_read_batch_strips_newlines_and_respects_size():
    reader = RecordReader(io.StringIO("k1\nd1\r\nk2\nd2\nk3\nd3\n"))
    assert reader.read_batch(2) == [Record("k1", "d1"), Record("k2", "d2")]
    assert reader.has_more() is True
    assert reader.read_batch(2) == [Record("k3", "d3")]
    assert reader.has_more() is False


def test_has_more_does_not_consume_line():
    reader = RecordReader(["k1", "d1"])
    assert reader.has_more() is True
    assert reader.has_more() is True
    assert reader.read_record() == Record("k1", "d1")
    assert reader.read_record() is None


def test_trailing_blank_lines_end_input():
    reader = RecordReader(["k1\n", "d1\n", "\n", "\r\n", "\n"])
    assert reader.read_batch(10) == [Record("k1", "d1")]
    assert reader.has_more() is False
    assert reader.has_more() is False


def test_blank_line_before_more_records_is_rejected():
    reader = RecordReader(["k1", "d1", "", "", "k2", "d2", "k3", "d3"])
    with pytest.raises(InputContractError, match="Blank line 3 .* line 5"):
        reader.read_batch(10)


def test_missing_data_line_raises_premature_end():
    reader = RecordReader(["k1", "d1", "k2"])
    with pytest.raises(PrematureEndError, match="Premature end"):
        reader.read_batch(5)


def test_context_manager_closes_source_on_error():
    source = io.StringIO("k1\n")
    with pytest.raises(PrematureEndError):
        with RecordReader(source) as reader:
            reader.read_record()
    assert source.closed


def test_close_tolerates_sources_without_close():
    with RecordReader(iter(["k", "d"])) as reader:
        assert reader.read_record() == Record("k", "d")
