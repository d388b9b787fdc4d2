"""Evolution driver: the generational loop of the genetic algorithm.

Key Design Decisions:
- Chromosome: one group label per individual (immutable tuple)
- Fitness: size balance + per-trait representation/proportion (higher is better)
- Selection: deterministic truncation to the top selection_rate share
- Reproduction: single-point crossover, one-position mutation per child
- Elitism: best assignment carried over, so the best score never decreases
- Termination: max_generations, or stagnation_limit rounds without improvement

State machine:
    INITIALIZING -> EVALUATING -> SELECTING -> REPRODUCING -> EVALUATING ...
                                   (stop condition) -> TERMINATED

Important:
- All randomness comes from one injected random.Random, used on the driver
  thread only; fitness evaluation may run in a thread pool without changing
  results for a fixed seed
- The best assignment ever seen is tracked explicitly, independent of elitism
"""

import logging
import random
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Mapping, Optional, Sequence

from grouper.errors import SchemaError
from grouper.models.individual import Individual
from grouper.models.catalogue import TraitCatalogue, build_catalogue

from grouper.genetic.config import GeneticConfig
from grouper.genetic.types import Assignment, GenerationStats, ScoredAssignment
from grouper.genetic.fitness import score_assignment
from grouper.genetic.population import Population
from grouper.genetic.initialization import initialize_population
from grouper.genetic.operators import breed, truncation_selection

logger = logging.getLogger(__name__)


class DriverState(Enum):
    """Lifecycle of one evolution run."""
    INITIALIZING = "initializing"
    EVALUATING = "evaluating"
    SELECTING = "selecting"
    REPRODUCING = "reproducing"
    TERMINATED = "terminated"


STOP_MAX_GENERATIONS = "max_generations"
STOP_STAGNATION = "stagnation"


@dataclass
class EvolutionResult:
    """Outcome of an evolution run.

    Attributes:
        assignment: Best assignment seen in any generation
        score: Its fitness
        generations: Reproduction rounds run
        stop_reason: "max_generations" or "stagnation"
        initial_best_score: Best score of the initial generation
        history: Statistics of every evaluated generation
    """
    assignment: Assignment
    score: float
    generations: int
    stop_reason: str
    initial_best_score: float
    history: List[GenerationStats] = field(default_factory=list)

    @property
    def improvement(self) -> float:
        return self.score - self.initial_best_score


class EvolutionDriver:
    """Genetic algorithm that partitions individuals into balanced groups.

    Configuration is validated against the population at construction, so
    a bad group count fails before any generation runs.
    """

    def __init__(
        self,
        individuals: Sequence[Individual],
        catalogue: TraitCatalogue,
        config: Optional[GeneticConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the driver.

        Args:
            individuals: Population to partition
            catalogue: Trait catalogue built from the same population
            config: Search parameters (defaults to GeneticConfig())
            rng: Random source (defaults to random.Random(config.random_seed))

        Raises:
            SchemaError: If the population is empty or does not match the catalogue
            ConfigError: If the configuration does not fit the population
        """
        self.config = config or GeneticConfig()

        if not individuals:
            raise SchemaError("Cannot group an empty population")
        if catalogue.population_size != len(individuals):
            raise SchemaError(
                f"Catalogue covers {catalogue.population_size} individuals, "
                f"population has {len(individuals)}"
            )
        self.config.validate_for(len(individuals))

        self.individuals = list(individuals)
        self.catalogue = catalogue
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.population = Population()
        self.state = DriverState.INITIALIZING

        logger.info(
            f"EvolutionDriver initialized: individuals={len(self.individuals)}, "
            f"groups={self.config.group_count}, gen_size={self.config.generation_size}, "
            f"max_gens={self.config.max_generations}, selection={self.config.selection_rate}, "
            f"crossover={self.config.crossover_rate}, mutation={self.config.mutation_rate}, "
            f"stagnation={self.config.stagnation_limit}, elitism={self.config.elitism}"
        )

    def score(self, assignment: Assignment) -> float:
        """Fitness of one assignment for this population."""
        return score_assignment(
            assignment,
            self.individuals,
            self.catalogue,
            self.config.group_count,
            self.config.size_weight,
        )

    def run(
        self,
        initial_assignments: Sequence[Sequence[int]] = (),
        on_generation: Optional[Callable[[GenerationStats], None]] = None,
    ) -> EvolutionResult:
        """Run the genetic algorithm and return the best assignment found.

        Args:
            initial_assignments: Seed assignments for the first generation
            on_generation: Called with the statistics of every evaluated generation

        Returns:
            EvolutionResult with the best-ever assignment
        """
        config = self.config

        self.state = DriverState.INITIALIZING
        assignments = initialize_population(
            config.generation_size,
            len(self.individuals),
            config.group_count,
            self.rng,
            seeds=initial_assignments,
        )

        executor = None
        if config.evaluation_workers > 1:
            executor = ThreadPoolExecutor(max_workers=config.evaluation_workers)

        history: List[GenerationStats] = []
        best_ever: Optional[ScoredAssignment] = None
        initial_best_score = 0.0
        generation = 0
        generations_no_improvement = 0
        stop_reason = STOP_MAX_GENERATIONS

        try:
            while True:
                # Evaluate and rank
                self.state = DriverState.EVALUATING
                self.population.replace(Population.evaluate(assignments, self.score, executor))
                ranked = self.population.rank()
                current_best = ranked[0]

                if best_ever is None:
                    initial_best_score = current_best.score
                    best_ever = current_best
                else:
                    if current_best.score > best_ever.score + config.improvement_tolerance:
                        generations_no_improvement = 0
                    else:
                        generations_no_improvement += 1
                    if current_best.score > best_ever.score:
                        best_ever = current_best

                stats = GenerationStats(
                    generation=generation,
                    best_score=current_best.score,
                    mean_score=self.population.mean_score(),
                    best_ever_score=best_ever.score,
                )
                history.append(stats)
                self._log_generation(stats)
                if on_generation is not None:
                    on_generation(stats)

                # Stop conditions
                if generation >= config.max_generations:
                    stop_reason = STOP_MAX_GENERATIONS
                    break
                if (
                    config.stagnation_limit is not None
                    and generations_no_improvement >= config.stagnation_limit
                ):
                    stop_reason = STOP_STAGNATION
                    logger.info(
                        f"GA converged at gen {generation}: best={best_ever.score:.5f} "
                        f"(no improvement for {generations_no_improvement} gens)"
                    )
                    break

                # Selection
                self.state = DriverState.SELECTING
                breeding_pool = truncation_selection(ranked, config.selection_rate)

                # Reproduction
                self.state = DriverState.REPRODUCING
                assignments = breed(breeding_pool, current_best.assignment, config, self.rng)
                generation += 1
        finally:
            if executor is not None:
                executor.shutdown(wait=True)

        self.state = DriverState.TERMINATED

        logger.info(
            f"GA Final: best={best_ever.score:.5f} after {generation} gens "
            f"(initial={initial_best_score:.5f}, stop={stop_reason})"
        )

        return EvolutionResult(
            assignment=best_ever.assignment,
            score=best_ever.score,
            generations=generation,
            stop_reason=stop_reason,
            initial_best_score=initial_best_score,
            history=history,
        )

    def _log_generation(self, stats: GenerationStats) -> None:
        message = (
            f"Gen {stats.generation:>4} - best: {stats.best_score:.5f} - "
            f"mean: {stats.mean_score:.5f}"
        )
        if stats.generation % self.config.log_every == 0:
            logger.info(message)
        else:
            logger.debug(message)


def evolve(
    individuals: Sequence[Individual],
    trait_names: Sequence[str],
    config: Optional[GeneticConfig] = None,
    weights: Optional[Mapping[str, float]] = None,
    initial_assignments: Sequence[Sequence[int]] = (),
    rng: Optional[random.Random] = None,
    on_generation: Optional[Callable[[GenerationStats], None]] = None,
) -> EvolutionResult:
    """Build the trait catalogue and run a full search.

    Raises:
        SchemaError: If the individuals do not match the trait schema
        ConfigError: If the configuration does not fit the population
    """
    catalogue = build_catalogue(individuals, trait_names, weights)
    driver = EvolutionDriver(individuals, catalogue, config, rng)
    return driver.run(initial_assignments, on_generation)
