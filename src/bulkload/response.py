"""Typed view of the `_bulk` response and per-item reconciliation.

The bulk endpoint answers with one JSON object per request. Only the
top-level ``errors`` flag and, when it is set, the ``items`` list matter
here: each item is keyed by its action (``index`` or ``create``) and may
carry an ``error`` object.

A ``create`` item with a 409 status means the document already exists.
Loading with ``create`` is how older definitions are inserted next to newer
ones without overwriting them, so that conflict is expected: it is counted
as not persisted but is never logged as a failure.
"""

from __future__ import annotations

import enum
import logging
from typing import List, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError

logger = logging.getLogger(__name__)

CONFLICT_STATUS_PREFIX = "409"


class ItemError(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: Optional[str] = None
    reason: Optional[str] = None


class BulkItemResult(BaseModel):
    """Result of one action inside a bulk request."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    doc_id: Optional[str] = Field(default=None, alias="_id")
    status: Optional[Union[int, float, str]] = None
    error: Optional[ItemError] = None


class BulkItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: Optional[BulkItemResult] = None
    create: Optional[BulkItemResult] = None


class BulkResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    errors: StrictBool = False
    items: List[BulkItem] = Field(default_factory=list)


class ItemOutcome(enum.Enum):
    SUCCESS = "success"
    TOLERATED_CONFLICT = "tolerated_conflict"
    ERROR = "error"


class ItemClassification(NamedTuple):
    outcome: ItemOutcome
    doc_id: Optional[str] = None
    reason: Optional[str] = None


def parse_response(body: Optional[str]) -> Optional[BulkResponse]:
    """Decode a bulk response body; None when it is not a usable response."""
    if body is None:
        return None
    try:
        return BulkResponse.model_validate_json(body)
    except ValidationError as exc:
        logger.debug("Unparseable bulk response (%d error(s)): %.200s", exc.error_count(), body)
        return None


def classify_item(item: BulkItem) -> ItemClassification:
    """Classify one response item as success, tolerated conflict or error."""
    action = item.index
    if action is None:
        action = item.create
        if action is not None and str(action.status).startswith(CONFLICT_STATUS_PREFIX):
            return ItemClassification(ItemOutcome.TOLERATED_CONFLICT, action.doc_id)

    if action is None or action.error is None:
        return ItemClassification(ItemOutcome.SUCCESS, action.doc_id if action else None)

    return ItemClassification(ItemOutcome.ERROR, action.doc_id, action.error.reason)


def count_errors(body: Optional[str]) -> int:
    """Return the number of records in a batch that were not persisted.

    An unparseable body counts as zero errors: the HTTP exchange already
    succeeded and the response is only used for counting.
    """
    response = parse_response(body)
    if response is None or not response.errors:
        return 0

    num_errors = 0
    for item in response.items:
        result = classify_item(item)
        if result.outcome is ItemOutcome.SUCCESS:
            continue
        if result.outcome is ItemOutcome.ERROR:
            logger.error("ID = %s, Message = %s", result.doc_id, result.reason)
        num_errors += 1
    return num_errors


__all__ = [
    "BulkItem",
    "BulkItemResult",
    "BulkResponse",
    "ItemError",
    "ItemOutcome",
    "ItemClassification",
    "parse_response",
    "classify_item",
    "count_errors",
]
