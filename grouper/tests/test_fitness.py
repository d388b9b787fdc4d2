"""Tests for fitness evaluation."""

import pytest

from grouper.genetic.fitness import (
    profile_groups,
    score_assignment,
    size_score,
    trait_score,
)


def test_score_is_deterministic(discipline_population, discipline_catalogue, skewed_assignment):
    """Test repeated scoring gives identical results."""
    scores = {
        score_assignment(skewed_assignment, discipline_population, discipline_catalogue, 2)
        for _ in range(5)
    }
    assert len(scores) == 1


def test_balanced_scores_maximum(discipline_population, discipline_catalogue, balanced_assignment):
    """Test a balanced, proportional grouping gets full marks."""
    score = score_assignment(balanced_assignment, discipline_population, discipline_catalogue, 2)

    # 2 groups x discipline weight 3 x (full representation 1 + proportion bonus 1)
    assert score == pytest.approx(12.0)


def test_balanced_beats_skewed(
    discipline_population, discipline_catalogue, balanced_assignment, skewed_assignment
):
    """Test a proportional grouping beats one that dumps values together."""
    balanced = score_assignment(balanced_assignment, discipline_population, discipline_catalogue, 2)
    skewed = score_assignment(skewed_assignment, discipline_population, discipline_catalogue, 2)

    # Each skewed group represents 2 of 3 disciplines: 3 * 2/3 per group
    assert skewed == pytest.approx(4.0)
    assert balanced > skewed


def test_size_imbalance_is_penalized(discipline_population, discipline_catalogue):
    """Test that moving one person out of a balanced grouping costs score."""
    balanced = (0, 0, 1, 1) * 3
    imbalanced = (1,) + balanced[1:]

    assert score_assignment(imbalanced, discipline_population, discipline_catalogue, 2) < (
        score_assignment(balanced, discipline_population, discipline_catalogue, 2)
    )


def test_empty_group_is_scored_not_raised(discipline_population, discipline_catalogue):
    """Test an empty group gets the minimal score without errors."""
    everyone_in_one = (0,) * 12
    profiles = profile_groups(everyone_in_one, discipline_population, discipline_catalogue, 2)

    empty = profiles[1]
    assert empty.size == 0
    assert empty.trait_scores["discipline"] == 0.0
    assert empty.size_score == pytest.approx(-60.0)
    assert score_assignment(
        everyone_in_one, discipline_population, discipline_catalogue, 2
    ) == pytest.approx(-60.0 + 6.0 - 60.0)


def test_empty_group_size_score_is_minimal():
    """Test no group size scores worse than an empty group."""
    empty = size_score(0, 10, 3, 10.0)
    for size in range(1, 11):
        assert size_score(size, 10, 3, 10.0) >= empty


def test_trait_score_single_value_floor(discipline_catalogue):
    """Test a group holding one value gets partial credit."""
    score = trait_score({"design": 3}, 3, "discipline", discipline_catalogue)

    assert score == pytest.approx(3.0 * (1 / 3))


def test_trait_score_rewards_matching_proportions(discipline_catalogue):
    """Test the refinement bonus grows as shares approach the population's."""
    even = trait_score(
        {"design": 2, "engineering": 2, "product": 2}, 6, "discipline", discipline_catalogue
    )
    lopsided = trait_score(
        {"design": 4, "engineering": 1, "product": 1}, 6, "discipline", discipline_catalogue
    )
    partial = trait_score({"design": 3, "engineering": 3}, 6, "discipline", discipline_catalogue)

    assert even == pytest.approx(6.0)
    assert even > lopsided > partial


def test_profiles_sum_to_score(roster):
    """Test the per-group breakdown adds up to the fitness."""
    from grouper.config import TRAIT_NAMES
    from grouper.models.catalogue import build_catalogue

    catalogue = build_catalogue(roster, TRAIT_NAMES)
    assignment = (0, 1, 2, 0, 1, 2, 0, 1)

    profiles = profile_groups(assignment, roster, catalogue, 3)

    assert [p.size for p in profiles] == [3, 3, 2]
    assert sum(p.score for p in profiles) == pytest.approx(
        score_assignment(assignment, roster, catalogue, 3)
    )


def test_length_mismatch_raises(discipline_population, discipline_catalogue):
    with pytest.raises(ValueError):
        score_assignment((0, 1), discipline_population, discipline_catalogue, 2)


def test_label_out_of_range_raises(discipline_population, discipline_catalogue):
    with pytest.raises(ValueError):
        score_assignment((0,) * 11 + (2,), discipline_population, discipline_catalogue, 2)
