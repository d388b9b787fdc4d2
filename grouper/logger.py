"""Logging setup and JSON-lines run log."""

import json
import logging
import logging.handlers
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from grouper.genetic.types import GenerationStats


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Marks handlers installed here so repeated calls replace rather than stack them
_HANDLER_TAG = "_grouper_handler"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure root logging for the CLI and the HTTP app.

    Calling it again swaps the previously installed handlers for new ones.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path of a rotating log file (10 MB x 5)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root_logger.removeHandler(handler)
            handler.close()

    handlers = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_file, maxBytes=10 * 1024 * 1024, backupCount=5
            )
        )

    for handler in handlers:
        setattr(handler, _HANDLER_TAG, True)
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    root_logger.setLevel(log_level)


class JSONLogger:
    """Appends one JSON object per generation, plus a closing result record."""

    def __init__(self, log_file: str = "evolution.jsonl"):
        self.path = Path(log_file)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._stream = open(self.path, "a")

    def _write(self, record: Dict) -> None:
        record = {"timestamp": datetime.now().isoformat(), **record}
        self._stream.write(json.dumps(record) + "\n")
        self._stream.flush()

    def log_generation(self, stats: GenerationStats) -> None:
        """
        Record one generation; usable as the driver's on_generation callback.

        Args:
            stats: Statistics emitted by the evolution driver
        """
        self._write({
            "event": "generation",
            "generation": stats.generation,
            "best_score": stats.best_score,
            "mean_score": stats.mean_score,
            "best_ever_score": stats.best_ever_score,
        })

    def log_result(self, score: float, generations: int, stop_reason: str) -> None:
        """Record how a run ended."""
        self._write({
            "event": "result",
            "score": score,
            "generations": generations,
            "stop_reason": stop_reason,
        })

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> "JSONLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
