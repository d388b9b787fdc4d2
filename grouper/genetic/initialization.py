"""Population initialization for genetic algorithm.

Creates the first generation:
- Seed assignments (e.g. a hand-made grouping to improve on) go first
- Remaining slots get labels drawn uniformly from [0, group_count)

Randomness comes from an injected random.Random so runs are reproducible.
"""

import logging
import random
from typing import List, Sequence

from grouper.errors import ConfigError
from grouper.genetic.types import Assignment

logger = logging.getLogger(__name__)


def random_assignment(population_size: int, group_count: int, rng: random.Random) -> Assignment:
    """Create one assignment with uniformly random labels."""
    return tuple(rng.randrange(group_count) for _ in range(population_size))


def validate_seed(seed: Sequence[int], population_size: int, group_count: int) -> Assignment:
    """Check a seed assignment and return it as a tuple.

    Raises:
        ConfigError: If the length or any label does not fit the problem
    """
    if len(seed) != population_size:
        raise ConfigError(
            f"Seed assignment has {len(seed)} labels, expected {population_size}"
        )
    for label in seed:
        if not 0 <= label < group_count:
            raise ConfigError(f"Seed assignment label {label} outside [0, {group_count})")
    return tuple(seed)


def initialize_population(
    generation_size: int,
    population_size: int,
    group_count: int,
    rng: random.Random,
    seeds: Sequence[Sequence[int]] = (),
) -> List[Assignment]:
    """Generate the initial generation.

    Args:
        generation_size: Number of assignments to create
        population_size: Number of individuals (assignment length)
        group_count: Number of groups
        rng: Random source
        seeds: Assignments to include as-is (at most generation_size are used)

    Returns:
        List of generation_size assignments
    """
    generation = [
        validate_seed(seed, population_size, group_count)
        for seed in seeds[:generation_size]
    ]
    if len(seeds) > generation_size:
        logger.warning(
            f"Ignoring {len(seeds) - generation_size} seed assignments beyond generation size"
        )

    while len(generation) < generation_size:
        generation.append(random_assignment(population_size, group_count, rng))

    return generation
