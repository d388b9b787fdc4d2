"""Tests for the report writer."""

import json

import pytest

from grouper.genetic.strategy import EvolutionResult
from grouper.genetic.types import GenerationStats
from grouper.report import (
    generate_final_report,
    group_members,
    render_groups,
    summarize_groups,
)


def test_group_members_buckets_in_input_order(discipline_population, balanced_assignment):
    groups = group_members(balanced_assignment, discipline_population, 2)

    assert [len(group) for group in groups] == [6, 6]
    assert [individual.name for individual in groups[0]][:2] == ["design-0", "design-1"]


def test_render_groups(roster):
    """Test the printed layout: a header per group then its members."""
    assignment = (0, 1, 0, 1, 0, 1, 0, 1)

    text = render_groups(assignment, roster, 3)

    lines = text.splitlines()
    assert lines[0] == "= Group #1"
    assert lines[1] == "Ada (F, engineering, senior, acme, core)"
    assert "= Group #2" in lines
    assert lines[-2:] == ["= Group #3", "(empty)"]


def test_summarize_groups(discipline_population, discipline_catalogue, balanced_assignment):
    summary = summarize_groups(balanced_assignment, discipline_population, discipline_catalogue, 2)

    assert [group["group"] for group in summary] == [1, 2]
    assert summary[0]["trait_counts"]["discipline"] == {
        "design": 2,
        "engineering": 2,
        "product": 2,
    }
    assert summary[0]["score"] == pytest.approx(6.0)


def test_generate_final_report(tmp_path, discipline_population, discipline_catalogue, balanced_assignment):
    """Test JSON and text reports are written."""
    result = EvolutionResult(
        assignment=balanced_assignment,
        score=12.0,
        generations=1,
        stop_reason="max_generations",
        initial_best_score=4.0,
        history=[
            GenerationStats(generation=0, best_score=4.0, mean_score=1.0, best_ever_score=4.0),
            GenerationStats(generation=1, best_score=12.0, mean_score=3.0, best_ever_score=12.0),
        ],
    )

    generate_final_report(
        result, discipline_population, discipline_catalogue, 2, str(tmp_path / "out" / "report")
    )

    report = json.loads((tmp_path / "out" / "report.json").read_text())
    assert report["summary"]["score"] == 12.0
    assert report["assignment"] == list(balanced_assignment)
    assert len(report["groups"]) == 2
    assert len(report["history"]) == 2

    text = (tmp_path / "out" / "report.txt").read_text()
    assert "GROUPING REPORT" in text
    assert "= Group #2" in text
