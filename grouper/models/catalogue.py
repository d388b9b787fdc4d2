"""Trait catalogue: the population-wide reference distribution for each trait.

Built once from the full population and read by the fitness evaluator to
judge how well a group mirrors the whole.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from grouper.config import DEFAULT_TRAIT_WEIGHT, TRAIT_WEIGHTS
from grouper.errors import ConfigError, SchemaError
from grouper.models.individual import Individual

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TraitCatalogue:
    """Distinct values and global proportions per trait.

    Attributes:
        trait_names: Traits in declaration order
        values: trait -> distinct values, in first-seen order
        proportions: trait -> value -> count / population_size
        weights: trait -> relative importance in the fitness
        population_size: Number of individuals the catalogue was built from
    """

    trait_names: Tuple[str, ...]
    values: Dict[str, Tuple[str, ...]]
    proportions: Dict[str, Dict[str, float]]
    weights: Dict[str, float]
    population_size: int

    def distinct(self, trait_name: str) -> Tuple[str, ...]:
        """Get the distinct values observed for a trait."""
        return self.values[trait_name]

    def proportion(self, trait_name: str, value: str) -> float:
        """Get the share of the population holding a trait value."""
        return self.proportions[trait_name].get(value, 0.0)

    def weight(self, trait_name: str) -> float:
        return self.weights[trait_name]


def build_catalogue(
    individuals: Sequence[Individual],
    trait_names: Sequence[str],
    weights: Optional[Mapping[str, float]] = None,
) -> TraitCatalogue:
    """
    Build the trait catalogue for a population.

    Args:
        individuals: Full population
        trait_names: Traits to track, in order
        weights: Optional per-trait weights (defaults to TRAIT_WEIGHTS)

    Returns:
        TraitCatalogue for the population

    Raises:
        SchemaError: If the population is empty or any individual is missing
            a declared trait or has an empty value
        ConfigError: If a weight is negative
    """
    if not individuals:
        raise SchemaError("Cannot build a trait catalogue from an empty population")
    if not trait_names:
        raise SchemaError("At least one trait name is required")
    if len(set(trait_names)) != len(trait_names):
        raise SchemaError(f"Duplicate trait names: {list(trait_names)}")

    weight_source = TRAIT_WEIGHTS if weights is None else weights
    resolved_weights: Dict[str, float] = {}
    for trait_name in trait_names:
        weight = float(weight_source.get(trait_name, DEFAULT_TRAIT_WEIGHT))
        if weight < 0:
            raise ConfigError(
                f"Trait weight must be non-negative: {trait_name}={weight}",
                {"trait": trait_name, "weight": weight},
            )
        resolved_weights[trait_name] = weight

    counts: Dict[str, Counter] = {trait_name: Counter() for trait_name in trait_names}

    for index, individual in enumerate(individuals):
        for trait_name in trait_names:
            value = individual.trait(trait_name)
            if value is None:
                raise SchemaError(
                    f"Individual {individual.name!r} (row {index}) is missing trait {trait_name!r}",
                    {"row": index, "name": individual.name, "trait": trait_name},
                )
            if not value.strip():
                raise SchemaError(
                    f"Individual {individual.name!r} (row {index}) has an empty {trait_name!r}",
                    {"row": index, "name": individual.name, "trait": trait_name},
                )
            counts[trait_name][value] += 1

    population_size = len(individuals)
    values: Dict[str, Tuple[str, ...]] = {}
    proportions: Dict[str, Dict[str, float]] = {}

    for trait_name in trait_names:
        # Counter keeps insertion order, so values stay in first-seen order
        values[trait_name] = tuple(counts[trait_name].keys())
        proportions[trait_name] = {
            value: count / population_size
            for value, count in counts[trait_name].items()
        }

    logger.debug(
        f"Built catalogue for {population_size} individuals: "
        + ", ".join(f"{t}={len(values[t])}" for t in trait_names)
    )

    return TraitCatalogue(
        trait_names=tuple(trait_names),
        values=values,
        proportions=proportions,
        weights=resolved_weights,
        population_size=population_size,
    )


def describe_catalogue(catalogue: TraitCatalogue) -> List[str]:
    """Render one line per trait with its value shares, for logs and reports."""
    lines = []
    for trait_name in catalogue.trait_names:
        shares = ", ".join(
            f"{value}={catalogue.proportion(trait_name, value):.0%}"
            for value in catalogue.distinct(trait_name)
        )
        lines.append(f"{trait_name} (w={catalogue.weight(trait_name):g}): {shares}")
    return lines
