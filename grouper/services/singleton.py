"""Singleton pattern for shared service instances."""

from typing import Optional

from .grouping_service import GroupingService

# Global service instance (singleton pattern)
_grouping_service: Optional[GroupingService] = None


def get_grouping_service() -> GroupingService:
    """
    Get or create the singleton grouping service instance.

    Returns:
        GroupingService instance
    """
    global _grouping_service
    if _grouping_service is None:
        _grouping_service = GroupingService()
    return _grouping_service


def reset_grouping_service() -> None:
    """Drop the shared instance (used by tests)."""
    global _grouping_service
    _grouping_service = None
