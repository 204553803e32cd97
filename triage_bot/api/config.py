"""
Triage Bot - API Configuration

Налаштування FastAPI сервера, бази симптомів та сховища випадків.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import os

from ..config import StorageBackend


@dataclass
class APIConfig:
    """Конфігурація API сервера"""

    # Сервер
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = field(default_factory=lambda: ["*"])
    cors_allow_headers: List[str] = field(default_factory=lambda: ["*"])

    # База симптомів
    kb_path: str = "data/kb_v1.json"

    # YAML конфігурація бота (необов'язково)
    config_path: Optional[str] = None

    # Сховище випадків
    storage_backend: StorageBackend = StorageBackend.JSON
    cases_dir: str = "data/cases"
    sqlite_path: str = "data/cases.db"
    history_limit: int = 50

    # API
    api_prefix: str = "/api"
    api_version: str = "v1"
    api_title: str = "Triage Bot API"
    api_description: str = "Deterministic symptom triage assistant (not medical advice)"

    @classmethod
    def from_env(cls) -> 'APIConfig':
        """Створити конфігурацію з environment variables"""
        return cls(
            host=os.getenv("API_HOST", "0.0.0.0"),
            port=int(os.getenv("API_PORT", "8000")),
            debug=os.getenv("API_DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            kb_path=os.getenv("KB_PATH", "data/kb_v1.json"),
            config_path=os.getenv("TRIAGE_CONFIG") or None,
            storage_backend=StorageBackend(os.getenv("STORAGE_BACKEND", "json").lower()),
            cases_dir=os.getenv("CASES_DIR", "data/cases"),
            sqlite_path=os.getenv("SQLITE_PATH", "data/cases.db"),
            history_limit=int(os.getenv("HISTORY_LIMIT", "50")),
        )
