"""Schemas for grouping endpoints."""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from ..config import TRAIT_NAMES


class GroupingRequest(BaseModel):
    """Request model for running a grouping.

    Search parameters left out (None) fall back to the service settings
    (GROUPER_* environment variables).
    """

    csv: str = Field(..., description="Roster CSV with header name,gender,discipline,seniority,client,team")
    group_count: Optional[int] = Field(None, description="Number of groups to form")
    generation_size: Optional[int] = None
    selection_rate: Optional[float] = None
    crossover_rate: Optional[float] = None
    mutation_rate: Optional[float] = None
    max_generations: Optional[int] = None
    stagnation_limit: Optional[int] = None
    elitism: Optional[bool] = None
    random_seed: Optional[int] = None
    trait_names: List[str] = Field(default_factory=lambda: list(TRAIT_NAMES))
    trait_weights: Optional[Dict[str, float]] = None
    delimiter: Optional[str] = None

    def search_overrides(self) -> Dict:
        """Search parameters the caller set explicitly."""
        fields = [
            "group_count",
            "generation_size",
            "selection_rate",
            "crossover_rate",
            "mutation_rate",
            "max_generations",
            "stagnation_limit",
            "elitism",
            "random_seed",
        ]
        return {
            name: getattr(self, name)
            for name in fields
            if getattr(self, name) is not None
        }

    class Config:
        json_schema_extra = {
            "example": {
                "csv": "name,gender,discipline,seniority,client,team\nAda,F,eng,senior,acme,core\n",
                "group_count": 2,
                "max_generations": 100,
                "random_seed": 42,
            }
        }


class GroupResponse(BaseModel):
    """One group of the result."""

    group: int
    size: int
    members: List[str]
    trait_counts: Dict[str, Dict[str, int]]
    score: float


class GroupingResponse(BaseModel):
    """Response model for a finished grouping."""

    score: float
    initial_best_score: float
    generations: int
    stop_reason: str
    assignment: List[int]
    groups: List[GroupResponse]


class StatusResponse(BaseModel):
    """Response model for service status."""

    status: str
    runs: int
    last_score: Optional[float] = None
    last_generations: Optional[int] = None
    last_stop_reason: Optional[str] = None


class HistoryEntry(BaseModel):
    generation: int
    best_score: float
    mean_score: float
    best_ever_score: float


class HistoryResponse(BaseModel):
    """Per-generation statistics of the last run."""

    history: List[HistoryEntry]
