"""Shared fixtures for grouper tests."""

import pytest

from grouper.config import TRAIT_NAMES
from grouper.models.individual import Individual
from grouper.models.catalogue import build_catalogue


DISCIPLINES = ["design", "engineering", "product"]


def make_individual(name, **traits):
    return Individual(name=name, traits=traits)


@pytest.fixture
def discipline_population():
    """12 individuals, one trait, three equally represented disciplines (4 each)."""
    individuals = []
    for discipline in DISCIPLINES:
        for i in range(4):
            individuals.append(make_individual(f"{discipline}-{i}", discipline=discipline))
    return individuals


@pytest.fixture
def discipline_catalogue(discipline_population):
    return build_catalogue(discipline_population, ["discipline"])


@pytest.fixture
def balanced_assignment():
    """Each of 2 groups gets 2 of every discipline."""
    return (0, 0, 1, 1) * 3


@pytest.fixture
def skewed_assignment():
    """Group 0 holds all designers, group 1 all product people."""
    return (0,) * 6 + (1,) * 6


@pytest.fixture
def roster():
    """A small roster with the full five-trait schema."""
    rows = [
        ("Ada", "F", "engineering", "senior", "acme", "core"),
        ("Bo", "M", "design", "junior", "acme", "web"),
        ("Cy", "M", "engineering", "junior", "globex", "core"),
        ("Di", "F", "product", "senior", "globex", "web"),
        ("Ed", "M", "design", "senior", "initech", "core"),
        ("Flo", "F", "engineering", "junior", "initech", "web"),
        ("Gus", "M", "product", "junior", "acme", "core"),
        ("Hal", "F", "design", "senior", "globex", "web"),
    ]
    return [
        Individual(name=row[0], traits=dict(zip(TRAIT_NAMES, row[1:])))
        for row in rows
    ]


@pytest.fixture
def roster_csv(roster):
    """The roster fixture as CSV text."""
    lines = [",".join(["name"] + TRAIT_NAMES)]
    for individual in roster:
        lines.append(",".join([individual.name] + list(individual.traits.values())))
    return "\n".join(lines) + "\n"
