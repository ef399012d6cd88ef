"""Batch loader for NJSON files into an Elasticsearch `_bulk` endpoint."""

from .errors import BulkLoadError, InputContractError, PrematureEndError
from .loader import DataLoader, LoadTotals

__all__ = ["DataLoader", "LoadTotals", "BulkLoadError", "InputContractError", "PrematureEndError"]
