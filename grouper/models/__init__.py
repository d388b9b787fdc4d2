"""Grouper models package."""

from .individual import Individual
from .catalogue import TraitCatalogue, build_catalogue, describe_catalogue

__all__ = [
    "Individual",
    "TraitCatalogue",
    "build_catalogue",
    "describe_catalogue",
]
