"""Type definitions for genetic algorithm.

An assignment (chromosome) is a tuple of group labels, one per individual,
indexed like the population. Tuples are immutable, so operators always build
new assignments and parents can never be changed through a child.
"""

from dataclasses import dataclass
from typing import Tuple


Assignment = Tuple[int, ...]


@dataclass(frozen=True)
class ScoredAssignment:
    """An assignment paired with its fitness.

    Attributes:
        assignment: Group label per individual
        score: Fitness score (higher is better)
        order: Position in the generation before ranking, used to break ties
    """

    assignment: Assignment
    score: float
    order: int

    def __repr__(self) -> str:
        return f"ScoredAssignment(order={self.order}, score={self.score:.4f})"


@dataclass(frozen=True)
class GenerationStats:
    """Summary of one evaluated generation.

    Attributes:
        generation: 0 for the initial generation, then one per reproduction round
        best_score: Best score in this generation
        mean_score: Mean score in this generation
        best_ever_score: Best score seen so far across all generations
    """

    generation: int
    best_score: float
    mean_score: float
    best_ever_score: float
