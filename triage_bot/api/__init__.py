"""
Triage Bot - REST API

FastAPI сервер для розмови з ботом та історії випадків.

Endpoints:
    POST /api/v1/message    {"sessionId": "...", "text": "..."}
    GET  /api/v1/cases?limit=50
    GET  /health
    GET  /

Запуск:
    uvicorn triage_bot.api.app:app --port 8000
"""

from .config import APIConfig
from .dependencies import AppState, get_state, get_engine

__all__ = [
    "APIConfig",
    "AppState",
    "get_state",
    "get_engine",
]
