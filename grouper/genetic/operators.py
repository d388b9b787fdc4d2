"""Genetic operators: selection, crossover, mutation, reproduction.

Implements the core evolutionary operators for the genetic algorithm. Every
operator returns a new assignment; parents are never modified.
"""

import math
import random
from typing import List, Sequence

from grouper.genetic.config import GeneticConfig
from grouper.genetic.types import Assignment, ScoredAssignment


def selection_count(selection_rate: float, generation_size: int) -> int:
    """Number of survivors kept as breeding pool (at least one)."""
    # round() guards against float noise such as 0.1 * 30 = 3.0000000000000004
    return max(1, math.ceil(round(selection_rate * generation_size, 9)))


def truncation_selection(
    ranked: Sequence[ScoredAssignment],
    selection_rate: float,
) -> List[Assignment]:
    """Keep the top ceil(selection_rate * size) assignments of a ranked generation.

    Deterministic truncation: the breeding pool is exactly the best members,
    in rank order.
    """
    count = selection_count(selection_rate, len(ranked))
    return [member.assignment for member in ranked[:count]]


def single_point_crossover(parent_a: Assignment, parent_b: Assignment, cut: int) -> Assignment:
    """Take positions [0, cut) from parent_a and [cut, L) from parent_b."""
    if len(parent_a) != len(parent_b):
        raise ValueError(
            f"Parents differ in length: {len(parent_a)} != {len(parent_b)}"
        )
    return tuple(parent_a[:cut]) + tuple(parent_b[cut:])


def crossover(
    parent_a: Assignment,
    parent_b: Assignment,
    crossover_rate: float,
    rng: random.Random,
) -> Assignment:
    """Perform single-point crossover with probability crossover_rate.

    The cut point is uniform in [1, L-1], so the child always takes at least
    one gene from each parent. Otherwise parent_a is copied unchanged.

    Returns:
        Child assignment
    """
    if rng.random() < crossover_rate and len(parent_a) > 1:
        cut = rng.randint(1, len(parent_a) - 1)
        return single_point_crossover(parent_a, parent_b, cut)
    return tuple(parent_a)


def mutate(
    assignment: Assignment,
    mutation_rate: float,
    group_count: int,
    rng: random.Random,
) -> Assignment:
    """Relabel one random position with probability mutation_rate.

    The new label is uniform over the other group_count - 1 labels, so a
    mutation always changes the assignment.

    Accepts any sequence of labels.

    Returns:
        Mutated copy as a tuple, or the labels unchanged (as a tuple) when no
        mutation happens
    """
    if group_count < 2 or not assignment:
        return tuple(assignment)
    if rng.random() >= mutation_rate:
        return tuple(assignment)

    position = rng.randrange(len(assignment))
    current = assignment[position]
    label = rng.randrange(group_count - 1)
    if label >= current:
        label += 1

    return tuple(assignment[:position]) + (label,) + tuple(assignment[position + 1:])


def reproduce(
    ranked: Sequence[ScoredAssignment],
    config: GeneticConfig,
    rng: random.Random,
) -> List[Assignment]:
    """Build the next generation from a ranked one.

    Args:
        ranked: Current generation, best first
        config: Search parameters
        rng: Random source (reproduction is sequential)

    Returns:
        generation_size new assignments
    """
    breeding_pool = truncation_selection(ranked, config.selection_rate)
    return breed(breeding_pool, ranked[0].assignment, config, rng)


def breed(
    breeding_pool: Sequence[Assignment],
    elite: Assignment,
    config: GeneticConfig,
    rng: random.Random,
) -> List[Assignment]:
    """Fill a generation from a breeding pool.

    - Elitism: the elite assignment is carried over unchanged
    - Parents are drawn uniformly, with replacement, from the breeding pool
    - Each child is crossed over, then mutated

    Returns:
        generation_size new assignments
    """
    next_generation: List[Assignment] = []

    if config.elitism:
        next_generation.append(elite)

    while len(next_generation) < config.generation_size:
        parent_a = rng.choice(breeding_pool)
        parent_b = rng.choice(breeding_pool)

        child = crossover(parent_a, parent_b, config.crossover_rate, rng)
        child = mutate(child, config.mutation_rate, config.group_count, rng)

        next_generation.append(child)

    return next_generation
