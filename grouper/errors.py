"""Exception types raised by the grouping engine."""

from typing import Dict, Optional


class GrouperError(Exception):
    """Base class for errors raised before a search starts."""

    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(message)
        self.details = details or {}


class SchemaError(GrouperError):
    """Raised when input individuals do not match the declared trait schema."""


class ConfigError(GrouperError, ValueError):
    """Raised when search parameters are out of range for the population."""
