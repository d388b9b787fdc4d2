"""Service layer shared by the HTTP routes."""

from .grouping_service import GroupingService
from .singleton import get_grouping_service, reset_grouping_service

__all__ = ["GroupingService", "get_grouping_service", "reset_grouping_service"]
