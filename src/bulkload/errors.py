"""Exception types raised by the NJSON bulk loader."""

from __future__ import annotations

from typing import Optional


class BulkLoadError(Exception):
    """Base class for fatal bulk load failures."""


class InputContractError(BulkLoadError):
    """Input data does not follow the two-lines-per-record layout."""


class PrematureEndError(InputContractError):
    """A primary key line was read but its data line is missing."""

    def __init__(self, message: str = "Premature end of input") -> None:
        super().__init__(message)


class AuthConfigError(BulkLoadError):
    """The credentials file is missing or cannot be interpreted."""


class UnknownHostError(BulkLoadError):
    """The search store host name could not be resolved."""

    def __init__(self, host: Optional[str]) -> None:
        super().__init__(f"Unknown host {host}")
        self.host = host


class BulkTransportError(BulkLoadError):
    """The bulk endpoint answered with an HTTP error."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "BulkLoadError",
    "InputContractError",
    "PrematureEndError",
    "AuthConfigError",
    "UnknownHostError",
    "BulkTransportError",
]
