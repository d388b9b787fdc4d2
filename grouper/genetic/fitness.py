"""Fitness evaluation for genetic algorithm.

Scores a candidate grouping based on:
- Size balance: deviation of each group from populationSize / groupCount
- Trait representation: how many of a trait's values appear in the group
- Trait proportion: once every value is present, how closely the group's
  value shares match the population's

Per group g and trait t (weights from the trait catalogue):
- size_score  = -size_weight * |size_g - ideal|
- trait_score = w_t * (represented / total + bonus)
- bonus       = 1 - sum(|local_share - global_share|) / 2, only when every
                value is represented, else 0

Higher is better. Empty groups get the worst size deviation and zero trait
score; they are a legal (bad) state during search, never an error.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from grouper.config import SIZE_WEIGHT
from grouper.models.individual import Individual
from grouper.models.catalogue import TraitCatalogue

from grouper.genetic.types import Assignment


@dataclass
class GroupProfile:
    """Per-group breakdown of the fitness.

    Attributes:
        label: Group label
        size: Number of members
        trait_counts: trait -> value -> members holding it
        size_score: Size balance component
        trait_scores: trait -> weighted representation + proportion score
    """
    label: int
    size: int
    trait_counts: Dict[str, Dict[str, int]] = field(default_factory=dict)
    size_score: float = 0.0
    trait_scores: Dict[str, float] = field(default_factory=dict)

    @property
    def score(self) -> float:
        """Total score contributed by this group."""
        total = self.size_score
        for trait_score in self.trait_scores.values():
            total += trait_score
        return total


def size_score(size: int, population_size: int, group_count: int, size_weight: float) -> float:
    """Score a group's size: 0 when ideal, more negative with imbalance."""
    ideal = population_size / group_count
    if size == 0:
        deviation = max(ideal, population_size - ideal)
    else:
        deviation = abs(size - ideal)
    return -size_weight * deviation


def trait_score(
    counts: Dict[str, int],
    size: int,
    trait_name: str,
    catalogue: TraitCatalogue,
) -> float:
    """Score how well one group represents one trait.

    Args:
        counts: value -> members of the group holding it
        size: Group size
        trait_name: Trait being scored
        catalogue: Population reference distribution

    Returns:
        Weighted score in [0, 2 * weight]
    """
    if size == 0:
        return 0.0

    values = catalogue.distinct(trait_name)
    total_values = len(values)
    represented = 0
    for value in values:
        if counts.get(value, 0) > 0:
            represented += 1

    score = represented / total_values

    # Refine with proportions once every value is present
    if represented == total_values:
        distance = 0.0
        for value in values:
            local_share = counts[value] / size
            distance += abs(local_share - catalogue.proportion(trait_name, value))
        score += 1.0 - distance / 2.0

    return catalogue.weight(trait_name) * score


def profile_groups(
    assignment: Assignment,
    individuals: Sequence[Individual],
    catalogue: TraitCatalogue,
    group_count: int,
    size_weight: float = SIZE_WEIGHT,
) -> List[GroupProfile]:
    """Build the scored profile of every group, in label order.

    Raises:
        ValueError: If the assignment does not match the population or holds
            a label outside [0, group_count)
    """
    if len(assignment) != len(individuals):
        raise ValueError(
            f"Assignment length {len(assignment)} does not match population size {len(individuals)}"
        )

    trait_names = catalogue.trait_names
    sizes = [0] * group_count
    counts = [{trait_name: Counter() for trait_name in trait_names} for _ in range(group_count)]

    for label, individual in zip(assignment, individuals):
        if not 0 <= label < group_count:
            raise ValueError(f"Group label {label} outside [0, {group_count})")
        sizes[label] += 1
        group_counts = counts[label]
        for trait_name in trait_names:
            group_counts[trait_name][individual.traits[trait_name]] += 1

    population_size = len(individuals)
    profiles = []
    for label in range(group_count):
        profile = GroupProfile(
            label=label,
            size=sizes[label],
            trait_counts={t: dict(counts[label][t]) for t in trait_names},
            size_score=size_score(sizes[label], population_size, group_count, size_weight),
        )
        for trait_name in trait_names:
            profile.trait_scores[trait_name] = trait_score(
                counts[label][trait_name], sizes[label], trait_name, catalogue
            )
        profiles.append(profile)

    return profiles


def score_assignment(
    assignment: Assignment,
    individuals: Sequence[Individual],
    catalogue: TraitCatalogue,
    group_count: int,
    size_weight: float = SIZE_WEIGHT,
) -> float:
    """Evaluate the fitness of a grouping.

    Pure function: identical inputs always give a bit-identical score, since
    groups and traits are summed in a fixed order.

    Args:
        assignment: Group label per individual
        individuals: Population, indexed like the assignment
        catalogue: Population reference distribution
        group_count: Number of groups
        size_weight: Weight of the size balance term

    Returns:
        Fitness score (higher is better)
    """
    total = 0.0
    for profile in profile_groups(assignment, individuals, catalogue, group_count, size_weight):
        total += profile.score
    return total
