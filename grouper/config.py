"""Configuration module for trait constants, fitness weights, and settings."""

from typing import Dict, List, Optional
from pydantic_settings import BaseSettings


# Input schema
TRAIT_NAMES: List[str] = ["gender", "discipline", "seniority", "client", "team"]
CSV_COLUMNS: List[str] = ["name"] + TRAIT_NAMES


# Fitness weights - relative importance of each trait's fairness.
# Gender balance matters most, then discipline; the rest weigh equally.
TRAIT_WEIGHTS: Dict[str, float] = {
    "gender": 6.0,
    "discipline": 3.0,
    "seniority": 1.0,
    "client": 1.0,
    "team": 1.0,
}

# Weight of the group-size balance term
SIZE_WEIGHT = 10.0

# Weight used for a trait missing from TRAIT_WEIGHTS
DEFAULT_TRAIT_WEIGHT = 1.0


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    # Search parameters
    GROUP_COUNT: int = 9
    GENERATION_SIZE: int = 150
    SELECTION_RATE: float = 0.2
    CROSSOVER_RATE: float = 0.5
    MUTATION_RATE: float = 0.5
    MAX_GENERATIONS: int = 300
    STAGNATION_LIMIT: Optional[int] = None
    RANDOM_SEED: Optional[int] = None
    EVALUATION_WORKERS: int = 1

    # Input
    CSV_DELIMITER: str = ","

    # HTTP service
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None
    LOG_EVERY: int = 10

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "GROUPER_",
    }
