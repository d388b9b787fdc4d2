"""Reporting module: render a grouping for people and for machines."""

import json
import logging
from pathlib import Path
from typing import Dict, List, Sequence

from .models.individual import Individual
from .models.catalogue import TraitCatalogue, describe_catalogue
from .genetic.fitness import profile_groups
from .genetic.strategy import EvolutionResult
from .genetic.types import Assignment

logger = logging.getLogger(__name__)


def group_members(
    assignment: Assignment,
    individuals: Sequence[Individual],
    group_count: int,
) -> List[List[Individual]]:
    """
    Bucket individuals by group label.

    Args:
        assignment: Group label per individual
        individuals: Population, indexed like the assignment
        group_count: Number of groups

    Returns:
        One list per label (possibly empty), members in input order
    """
    groups: List[List[Individual]] = [[] for _ in range(group_count)]
    for label, individual in zip(assignment, individuals):
        groups[label].append(individual)
    return groups


def render_groups(
    assignment: Assignment,
    individuals: Sequence[Individual],
    group_count: int,
) -> str:
    """
    Render the grouping as text, one header per group.

    Example:
        = Group #1
        Ada (F, engineering, senior, acme, platform)
        = Group #2
        ...
    """
    lines = []
    for label, members in enumerate(group_members(assignment, individuals, group_count)):
        lines.append(f"= Group #{label + 1}")
        if not members:
            lines.append("(empty)")
        for individual in members:
            lines.append(str(individual))
    return "\n".join(lines)


def summarize_groups(
    assignment: Assignment,
    individuals: Sequence[Individual],
    catalogue: TraitCatalogue,
    group_count: int,
) -> List[Dict]:
    """
    Per-group size, members, trait counts and score breakdown.

    Returns:
        One dict per group, in label order
    """
    groups = group_members(assignment, individuals, group_count)
    summary = []
    for profile in profile_groups(assignment, individuals, catalogue, group_count):
        summary.append({
            "group": profile.label + 1,
            "size": profile.size,
            "members": [individual.name for individual in groups[profile.label]],
            "trait_counts": profile.trait_counts,
            "size_score": profile.size_score,
            "trait_scores": profile.trait_scores,
            "score": profile.score,
        })
    return summary


def generate_final_report(
    result: EvolutionResult,
    individuals: Sequence[Individual],
    catalogue: TraitCatalogue,
    group_count: int,
    output_path: str,
) -> None:
    """
    Write a JSON report and a text summary of a finished run.

    Args:
        result: Outcome of the evolution driver
        individuals: Population that was grouped
        catalogue: Its trait catalogue
        group_count: Number of groups
        output_path: Report path; .json and .txt files are written next to it
    """
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    groups = summarize_groups(result.assignment, individuals, catalogue, group_count)

    report = {
        "summary": {
            "individuals": len(individuals),
            "groups": group_count,
            "score": result.score,
            "initial_best_score": result.initial_best_score,
            "generations": result.generations,
            "stop_reason": result.stop_reason,
        },
        "catalogue": {
            trait_name: catalogue.proportions[trait_name]
            for trait_name in catalogue.trait_names
        },
        "assignment": list(result.assignment),
        "groups": groups,
        "history": [
            {
                "generation": stats.generation,
                "best_score": stats.best_score,
                "mean_score": stats.mean_score,
                "best_ever_score": stats.best_ever_score,
            }
            for stats in result.history
        ],
    }

    # Write JSON report
    json_path = output_file.with_suffix(".json")
    with open(json_path, "w") as f:
        json.dump(report, f, indent=2)

    # Write text summary
    text_path = output_file.with_suffix(".txt")
    with open(text_path, "w") as f:
        f.write("=" * 80 + "\n")
        f.write("GROUPING REPORT\n")
        f.write("=" * 80 + "\n\n")
        f.write(f"Individuals: {len(individuals)}\n")
        f.write(f"Groups: {group_count}\n")
        f.write(f"Score: {result.score:.5f} (initial best {result.initial_best_score:.5f})\n")
        f.write(f"Generations: {result.generations} (stopped by {result.stop_reason})\n\n")
        f.write("Population:\n")
        for line in describe_catalogue(catalogue):
            f.write(f"  {line}\n")
        f.write("\nGroup sizes:\n")
        for group in groups:
            f.write(f"  #{group['group']}: {group['size']} (score {group['score']:.3f})\n")
        f.write("\n")
        f.write(render_groups(result.assignment, individuals, group_count))
        f.write("\n\n" + "=" * 80 + "\n")

    logger.info(f"Final report generated: {json_path} and {text_path}")
