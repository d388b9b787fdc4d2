"""Routes for running groupings and inspecting the last run."""

import logging
from typing import Optional
from fastapi import APIRouter, HTTPException, Query

from ..errors import GrouperError
from ..schemas.grouping_schemas import (
    GroupingRequest,
    GroupingResponse,
    StatusResponse,
    HistoryResponse,
)
from ..services.singleton import get_grouping_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["grouping"])


@router.post("/groups", response_model=GroupingResponse)
def create_grouping(request: GroupingRequest):
    """
    Evolve a balanced grouping for the posted roster.

    Runs synchronously; FastAPI executes plain def endpoints in its thread pool.

    Args:
        request: Roster CSV and search parameters

    Returns:
        Best grouping found
    """
    grouping_service = get_grouping_service()

    try:
        result = grouping_service.run_grouping(request)
    except GrouperError as e:
        logger.warning(f"Rejected grouping request: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return GroupingResponse(**result)


@router.get("/status", response_model=StatusResponse)
async def get_status():
    """
    Get service status.

    Returns:
        Run count and summary of the last run
    """
    grouping_service = get_grouping_service()
    return StatusResponse(**grouping_service.get_status())


@router.get("/history", response_model=HistoryResponse)
async def get_history(limit: Optional[int] = Query(None, ge=1)):
    """
    Get per-generation statistics of the last run.

    Args:
        limit: Number of most recent generations to return (default: all)
    """
    grouping_service = get_grouping_service()
    return HistoryResponse(**grouping_service.get_history(limit=limit))
