"""Tests for logging setup and the JSON run log."""

import json
import logging

from grouper.genetic.types import GenerationStats
from grouper.logger import JSONLogger, configure_logging


def test_configure_logging_does_not_stack_handlers(tmp_path):
    root_logger = logging.getLogger()
    before = list(root_logger.handlers)
    level = root_logger.level

    try:
        configure_logging("DEBUG", str(tmp_path / "logs" / "grouper.log"))
        configure_logging("WARNING")

        added = [h for h in root_logger.handlers if h not in before]
        assert len(added) == 1
        assert root_logger.level == logging.WARNING
    finally:
        for handler in root_logger.handlers:
            if handler not in before:
                root_logger.removeHandler(handler)
                handler.close()
        root_logger.setLevel(level)


def test_json_logger_appends_records(tmp_path):
    log_path = tmp_path / "runs" / "evolution.jsonl"

    with JSONLogger(str(log_path)) as run_log:
        run_log.log_generation(
            GenerationStats(generation=0, best_score=1.5, mean_score=0.5, best_ever_score=1.5)
        )
        run_log.log_result(1.5, 0, "max_generations")

    entries = [json.loads(line) for line in log_path.read_text().splitlines()]
    assert [entry["event"] for entry in entries] == ["generation", "result"]
    assert entries[0]["best_score"] == 1.5
    assert entries[1]["stop_reason"] == "max_generations"
    assert "timestamp" in entries[0]
