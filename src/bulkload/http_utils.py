"""HTTP helpers shared by the bulk loader: response framing and error classification."""

from __future__ import annotations

import json
import socket
from typing import Any, Iterator, Optional

import requests

from .errors import BulkTransportError, UnknownHostError


def get_last_line(text: Optional[str]) -> Optional[str]:
    """Return the last non-blank line of a response body, or None when there is none."""
    if not text:
        return None
    for line in reversed(text.splitlines()):
        if line.strip():
            return line.strip()
    return None


def extract_reason_from_json(text: Optional[str]) -> Optional[str]:
    """Pull a human-readable reason out of an Elasticsearch error document."""
    if not text:
        return None
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None

    error = data.get("error")
    if isinstance(error, str):
        return error
    if isinstance(error, dict):
        root_cause = error.get("root_cause")
        if isinstance(root_cause, list) and root_cause and isinstance(root_cause[0], dict):
            reason = root_cause[0].get("reason")
            if reason:
                return str(reason)
        if error.get("reason"):
            return str(error["reason"])

    reason = data.get("reason")
    return str(reason) if reason else None


def get_response_code(response: Optional[requests.Response]) -> int:
    """Return the HTTP status code of a response, or -1 when none is available."""
    if response is None:
        return -1
    try:
        return int(response.status_code)
    except (TypeError, ValueError):
        return -1


def _walk_chain(exc: BaseException) -> Iterator[BaseException]:
    seen = set()
    pending = [exc]
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        # urllib3 keeps the underlying error on `reason`; requests wraps it in args.
        candidates: list[Any] = [current.__cause__, current.__context__, getattr(current, "reason", None)]
        candidates.extend(current.args)
        pending.extend(c for c in candidates if isinstance(c, BaseException))


def is_unknown_host(exc: BaseException) -> bool:
    """True when the failure was caused by DNS resolution of the target host."""
    return any(isinstance(err, socket.gaierror) for err in _walk_chain(exc))


def raise_for_transport_failure(exc: requests.RequestException, host: Optional[str]) -> None:
    """Raise an enriched error for a failed bulk exchange.

    Returns normally when nothing better than the original exception can be
    reported; the caller then re-raises the original.
    """
    if is_unknown_host(exc):
        raise UnknownHostError(host) from exc

    response = getattr(exc, "response", None)
    status_code = get_response_code(response)
    if status_code <= 0:
        return

    last_line = get_last_line(getattr(response, "text", None))
    if last_line is None:
        return

    message = extract_reason_from_json(last_line) or last_line
    raise BulkTransportError(message, status_code=status_code) from exc


__all__ = [
    "get_last_line",
    "extract_reason_from_json",
    "get_response_code",
    "is_unknown_host",
    "raise_for_transport_failure",
]
