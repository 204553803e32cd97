"""
Triage Bot - Health Routes

Health check та інформація про систему.
"""

from fastapi import APIRouter, Depends

from ... import __version__
from ..dependencies import AppState, get_state
from ..models import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(state: AppState = Depends(get_state)) -> HealthResponse:
    """
    Перевірка стану сервера.

    Повертає:
    - Статус сервера
    - Кількість симптомів у базі
    - Кількість активних сесій
    - Бекенд сховища
    """
    return HealthResponse(
        status="ok" if state.is_initialized else "not_initialized",
        version=__version__,
        **state.get_health(),
    )


@router.get("/")
async def root():
    """Головна сторінка API"""
    return {
        "name": "Triage Bot API",
        "version": __version__,
        "description": "Deterministic symptom triage assistant (not medical advice)",
        "docs": "/docs",
        "health": "/health",
        "message": "/api/v1/message",
    }
