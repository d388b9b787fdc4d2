"""Tests for the population manager."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from grouper.genetic.population import Population
from grouper.genetic.types import ScoredAssignment


def make_members(scores):
    return [
        ScoredAssignment(assignment=(i,), score=score, order=i)
        for i, score in enumerate(scores)
    ]


def test_rank_sorts_descending():
    """Test ranking puts the highest score first."""
    population = Population(make_members([1.0, 5.0, 3.0]))

    ranked = population.rank()

    assert [m.score for m in ranked] == [5.0, 3.0, 1.0]
    assert population.best().score == 5.0


def test_rank_breaks_ties_by_original_order():
    """Test equal scores keep their generation order."""
    population = Population(make_members([2.0, 7.0, 2.0, 7.0, 2.0]))

    ranked = population.rank()

    assert [m.order for m in ranked] == [1, 3, 0, 2, 4]


def test_replace_discards_previous_generation():
    """Test replace swaps the generation and clears the ranking."""
    population = Population(make_members([1.0, 2.0]))
    population.rank()

    population.replace(make_members([9.0, 4.0, 6.0]))

    assert len(population) == 3
    assert not population.is_ranked
    assert population.best().score == 9.0
    assert population.mean_score() == pytest.approx(19.0 / 3)


def test_repr_leaves_member_order_alone():
    population = Population(make_members([1.0, 5.0, 3.0]))

    assert repr(population) == "Population(size=3, best=5.0000)"
    assert population.scores() == [1.0, 5.0, 3.0]
    assert not population.is_ranked


def test_best_of_empty_population_raises():
    with pytest.raises(IndexError):
        Population().best()


def test_evaluate_pairs_each_assignment_with_its_score():
    """Test evaluation keeps assignments and scores together, with or without a pool."""
    assignments = [(0, 1), (1, 1), (0, 0), (1, 0)]

    def scorer(assignment):
        return float(sum(assignment))

    serial = Population.evaluate(assignments, scorer)
    with ThreadPoolExecutor(max_workers=3) as executor:
        pooled = Population.evaluate(assignments, scorer, executor)

    for population in (serial, pooled):
        for member in population:
            assert member.score == scorer(member.assignment)
            assert assignments[member.order] == member.assignment

    assert serial.best().assignment == (1, 1)
    assert pooled.best().assignment == (1, 1)
