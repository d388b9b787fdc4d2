"""Genetic algorithm modules."""

from grouper.genetic.config import GeneticConfig, FAST_CONFIG, ACCURATE_CONFIG, PRESETS
from grouper.genetic.types import Assignment, ScoredAssignment, GenerationStats
from grouper.genetic.fitness import GroupProfile, profile_groups, score_assignment
from grouper.genetic.population import Population
from grouper.genetic.strategy import (
    DriverState,
    EvolutionDriver,
    EvolutionResult,
    evolve,
)

__all__ = [
    "GeneticConfig",
    "FAST_CONFIG",
    "ACCURATE_CONFIG",
    "PRESETS",
    "Assignment",
    "ScoredAssignment",
    "GenerationStats",
    "GroupProfile",
    "profile_groups",
    "score_assignment",
    "Population",
    "DriverState",
    "EvolutionDriver",
    "EvolutionResult",
    "evolve",
]
