"""
Triage Bot - Case History Routes

Список останніх збережених випадків.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..dependencies import AppState, get_state
from ..models import CaseListResponse, CaseSummaryResponse
from ...exceptions import StorageError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["Cases"])


@router.get("/cases", response_model=CaseListResponse)
def list_cases(
    limit: Optional[int] = Query(
        None, ge=1, le=500,
        description="Максимальна кількість випадків (за замовчуванням HISTORY_LIMIT)",
    ),
    state: AppState = Depends(get_state),
) -> CaseListResponse:
    """Останні випадки, найновіші першими"""
    limit = limit or state.api_config.history_limit

    if state.repository is None:
        return CaseListResponse(cases=[], total=0, limit=limit)

    try:
        summaries = state.repository.list_cases(limit)
    except StorageError as e:
        logger.error("Failed to list cases: %s", e)
        raise HTTPException(status_code=503, detail="Case storage unavailable")

    cases = [CaseSummaryResponse(**s.model_dump()) for s in summaries]
    return CaseListResponse(cases=cases, total=len(cases), limit=limit)
