"""
Triage Bot - API Routes

Експорт всіх роутерів.
"""

from .health import router as health_router
from .messages import router as messages_router
from .cases import router as cases_router

__all__ = [
    'health_router',
    'messages_router',
    'cases_router',
]
