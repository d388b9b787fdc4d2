"""Service for running groupings and keeping the last result."""

import logging
from threading import Lock
from typing import Dict, List, Optional

from ..config import Config
from ..errors import ConfigError
from ..data_loader import load_individuals_from_text
from ..genetic.config import GeneticConfig
from ..genetic.strategy import EvolutionDriver, EvolutionResult
from ..models.catalogue import build_catalogue
from ..report import summarize_groups
from ..schemas.grouping_schemas import GroupingRequest

logger = logging.getLogger(__name__)


class GroupingService:
    """Service for running the evolution driver on request payloads."""

    def __init__(self, settings: Optional[Config] = None):
        """
        Initialize grouping service.

        Args:
            settings: Defaults for parameters a request leaves out (read from
                the environment when omitted)
        """
        self.settings = settings or Config()
        self.runs = 0
        self.last_result: Optional[EvolutionResult] = None
        self._lock = Lock()

    def run_grouping(self, request: GroupingRequest) -> Dict:
        """
        Load the roster, evolve a grouping and summarize it.

        Args:
            request: Roster CSV and search parameters

        Returns:
            Response dictionary with score, assignment and groups

        Raises:
            SchemaError: If the roster does not match the trait schema
            ConfigError: If the parameters are invalid for the roster
        """
        ga_config = GeneticConfig.from_settings(self.settings).with_overrides(
            **request.search_overrides()
        )
        delimiter = request.delimiter or self.settings.CSV_DELIMITER

        individuals = load_individuals_from_text(request.csv, request.trait_names, delimiter)
        catalogue = build_catalogue(individuals, request.trait_names, request.trait_weights)
        driver = EvolutionDriver(individuals, catalogue, ga_config)
        result = driver.run()

        with self._lock:
            self.runs += 1
            self.last_result = result
            run_number = self.runs

        logger.info(
            f"Grouping run {run_number}: {len(individuals)} individuals into "
            f"{ga_config.group_count} groups, score={result.score:.5f}"
        )

        groups = summarize_groups(result.assignment, individuals, catalogue, ga_config.group_count)

        return {
            "score": result.score,
            "initial_best_score": result.initial_best_score,
            "generations": result.generations,
            "stop_reason": result.stop_reason,
            "assignment": list(result.assignment),
            "groups": groups,
        }

    def get_status(self) -> Dict:
        """
        Get service status and a summary of the last run.

        Returns:
            Status dictionary
        """
        if self.last_result is None:
            return {"status": "idle", "runs": 0}

        return {
            "status": "completed",
            "runs": self.runs,
            "last_score": self.last_result.score,
            "last_generations": self.last_result.generations,
            "last_stop_reason": self.last_result.stop_reason,
        }

    def get_history(self, limit: Optional[int] = None) -> Dict:
        """
        Get per-generation statistics of the last run.

        Args:
            limit: Number of most recent generations to return (None for all)

        Returns:
            History dictionary

        Raises:
            ConfigError: If limit is not positive
        """
        if limit is not None and limit < 1:
            raise ConfigError(f"limit must be at least 1, got {limit}")

        if self.last_result is None:
            return {"history": []}

        history: List = list(self.last_result.history)
        if limit is not None:
            history = history[-limit:]

        return {
            "history": [
                {
                    "generation": stats.generation,
                    "best_score": stats.best_score,
                    "mean_score": stats.mean_score,
                    "best_ever_score": stats.best_ever_score,
                }
                for stats in history
            ]
        }
