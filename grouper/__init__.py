"""Grouper: balanced group partitioning with a genetic algorithm."""

__version__ = "1.0.0"

from .errors import GrouperError, SchemaError, ConfigError
from .models import Individual, TraitCatalogue, build_catalogue
from .genetic import EvolutionDriver, EvolutionResult, GeneticConfig, evolve, score_assignment

__all__ = [
    "GrouperError",
    "SchemaError",
    "ConfigError",
    "Individual",
    "TraitCatalogue",
    "build_catalogue",
    "EvolutionDriver",
    "EvolutionResult",
    "GeneticConfig",
    "evolve",
    "score_assignment",
]
