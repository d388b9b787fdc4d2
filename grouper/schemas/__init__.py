"""API schemas for request/response models."""

from .grouping_schemas import (
    GroupingRequest,
    GroupResponse,
    GroupingResponse,
    StatusResponse,
    HistoryEntry,
    HistoryResponse,
)

__all__ = [
    "GroupingRequest",
    "GroupResponse",
    "GroupingResponse",
    "StatusResponse",
    "HistoryEntry",
    "HistoryResponse",
]
