"""Population manager: one generation of scored assignments."""

from concurrent.futures import Executor
from typing import Callable, Iterable, Iterator, List, Optional, Sequence

from grouper.genetic.types import Assignment, ScoredAssignment


class Population:
    """Holds the current generation and ranks it by fitness."""

    def __init__(self, members: Iterable[ScoredAssignment] = ()):
        self._members: List[ScoredAssignment] = list(members)
        self._ranked = False

    @classmethod
    def evaluate(
        cls,
        assignments: Sequence[Assignment],
        scorer: Callable[[Assignment], float],
        executor: Optional[Executor] = None,
    ) -> "Population":
        """Score assignments and pair each with its own score.

        Args:
            assignments: Candidate assignments, in generation order
            scorer: Fitness function of one assignment
            executor: Optional pool; map() keeps results in input order

        Returns:
            Unranked population
        """
        if executor is not None:
            scores = list(executor.map(scorer, assignments))
        else:
            scores = [scorer(assignment) for assignment in assignments]

        return cls(
            ScoredAssignment(assignment=assignment, score=score, order=order)
            for order, (assignment, score) in enumerate(zip(assignments, scores))
        )

    def rank(self) -> List[ScoredAssignment]:
        """Sort descending by score; ties keep their original order."""
        if not self._ranked:
            # sort() is stable, the order key makes ties explicit anyway
            self._members.sort(key=lambda member: (-member.score, member.order))
            self._ranked = True
        return self._members

    def best(self) -> ScoredAssignment:
        """Get the top-ranked member."""
        if not self._members:
            raise IndexError("best() of an empty population")
        return self.rank()[0]

    def replace(self, members: Iterable[ScoredAssignment]) -> None:
        """Discard the current generation in favour of a new one."""
        self._members = list(members)
        self._ranked = False

    def scores(self) -> List[float]:
        return [member.score for member in self._members]

    def mean_score(self) -> float:
        if not self._members:
            return 0.0
        return sum(self.scores()) / len(self._members)

    @property
    def is_ranked(self) -> bool:
        return self._ranked

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[ScoredAssignment]:
        return iter(self._members)

    def __repr__(self) -> str:
        if not self._members:
            return "Population(size=0)"
        best = max(self._members, key=lambda member: member.score)
        return f"Population(size={len(self)}, best={best.score:.4f})"
