"""Configuration for genetic algorithm.

Contains the search hyperparameters. Defaults follow the parameters the
grouping tool has always run with: 9 groups, 150 candidates per generation,
300 generations, 20% survivors, 50% crossover and 50% mutation.

## TUNING NOTES:

Speed vs quality tradeoff:
- FAST: gen=60, gens=100 - quick look at a new roster
- DEFAULT: gen=150, gens=300
- ACCURATE: gen=300, gens=1000 with stagnation cutoff - final grouping

Presets are applied with GeneticConfig.with_preset("fast"|"accurate"), or
`grouper --preset fast` on the command line.

Fitness evaluation is O(individuals x traits) per candidate and dominates the
run time; evaluation_workers > 1 spreads it over a thread pool.
"""

from dataclasses import dataclass, replace
from typing import Optional

from grouper.config import Config, SIZE_WEIGHT
from grouper.errors import ConfigError


@dataclass(frozen=True)
class GeneticConfig:
    """Immutable configuration threaded through the evolution driver.

    - group_count: number of groups to form
    - generation_size: candidate assignments per generation
    - selection_rate: share of the ranked generation kept as breeding pool
    - crossover_rate: probability a child is recombined from two parents
    - mutation_rate: probability a child gets one relabelled position
    - max_generations: reproduction rounds to run (0 = score the first generation only)
    - stagnation_limit: stop after this many rounds without improvement (None = off)
    """
    group_count: int = 9
    generation_size: int = 150
    selection_rate: float = 0.2
    crossover_rate: float = 0.5
    mutation_rate: float = 0.5
    max_generations: int = 300

    # Early stopping
    stagnation_limit: Optional[int] = None
    improvement_tolerance: float = 1e-9

    # Carry the best assignment unchanged into the next generation
    elitism: bool = True

    size_weight: float = SIZE_WEIGHT
    evaluation_workers: int = 1
    random_seed: Optional[int] = None

    # Log a progress line every N generations
    log_every: int = 10

    def __post_init__(self):
        """Reject parameters that are invalid for any population."""
        if self.group_count <= 0:
            raise ConfigError(f"group_count must be positive, got {self.group_count}")
        if self.generation_size < 1:
            raise ConfigError(f"generation_size must be at least 1, got {self.generation_size}")
        if not 0.0 < self.selection_rate <= 1.0:
            raise ConfigError(f"selection_rate must be in (0, 1], got {self.selection_rate}")
        if not 0.0 <= self.crossover_rate <= 1.0:
            raise ConfigError(f"crossover_rate must be in [0, 1], got {self.crossover_rate}")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ConfigError(f"mutation_rate must be in [0, 1], got {self.mutation_rate}")
        if self.max_generations < 0:
            raise ConfigError(f"max_generations must be non-negative, got {self.max_generations}")
        if self.stagnation_limit is not None and self.stagnation_limit < 1:
            raise ConfigError(f"stagnation_limit must be at least 1, got {self.stagnation_limit}")
        if self.improvement_tolerance < 0:
            raise ConfigError(
                f"improvement_tolerance must be non-negative, got {self.improvement_tolerance}"
            )
        if self.size_weight < 0:
            raise ConfigError(f"size_weight must be non-negative, got {self.size_weight}")
        if self.evaluation_workers < 1:
            raise ConfigError(
                f"evaluation_workers must be at least 1, got {self.evaluation_workers}"
            )
        if self.log_every < 1:
            raise ConfigError(f"log_every must be at least 1, got {self.log_every}")

    def validate_for(self, population_size: int) -> None:
        """Check the parameters against a concrete population.

        Raises:
            ConfigError: If there are more groups than individuals
        """
        if self.group_count > population_size:
            raise ConfigError(
                f"group_count ({self.group_count}) exceeds population size ({population_size})",
                {"group_count": self.group_count, "population_size": population_size},
            )

    def with_overrides(self, **changes) -> "GeneticConfig":
        """Copy with some fields replaced (re-validated)."""
        return replace(self, **changes)

    def with_preset(self, name: str) -> "GeneticConfig":
        """Copy with the search budget of a named preset (see PRESETS).

        Only the budget fields change; group count, rates and seed are kept.

        Raises:
            ConfigError: If the preset name is unknown
        """
        if name not in PRESETS:
            raise ConfigError(f"Unknown preset {name!r}, expected one of {sorted(PRESETS)}")
        preset = PRESETS[name]
        return self.with_overrides(
            **{field: getattr(preset, field) for field in PRESET_FIELDS}
        )

    @classmethod
    def from_settings(cls, config: Config) -> "GeneticConfig":
        """Build from environment-backed application settings."""
        return cls(
            group_count=config.GROUP_COUNT,
            generation_size=config.GENERATION_SIZE,
            selection_rate=config.SELECTION_RATE,
            crossover_rate=config.CROSSOVER_RATE,
            mutation_rate=config.MUTATION_RATE,
            max_generations=config.MAX_GENERATIONS,
            stagnation_limit=config.STAGNATION_LIMIT,
            random_seed=config.RANDOM_SEED,
            evaluation_workers=config.EVALUATION_WORKERS,
            log_every=config.LOG_EVERY,
        )


# Alternative configs for different scenarios
FAST_CONFIG = GeneticConfig(
    generation_size=60,
    max_generations=100,
    stagnation_limit=25,
)

ACCURATE_CONFIG = GeneticConfig(
    generation_size=300,
    max_generations=1000,
    stagnation_limit=150,
    evaluation_workers=4,
)

PRESETS = {
    "fast": FAST_CONFIG,
    "accurate": ACCURATE_CONFIG,
}

# Fields a preset controls
PRESET_FIELDS = ("generation_size", "max_generations", "stagnation_limit", "evaluation_workers")
