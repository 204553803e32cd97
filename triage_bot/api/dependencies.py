"""
Triage Bot - API Dependencies

Стан додатку та Dependency Injection для FastAPI.
База симптомів, сховище та машина розмови створюються один раз при старті.
"""

import logging
import uuid
from typing import Any, Dict, Optional

from fastapi import Request

from .config import APIConfig
from ..config import StorageBackend, TriageBotConfig, get_default_config, load_config
from ..knowledge_base import KnowledgeBase
from ..conversation import ConversationEngine, SessionStore
from ..storage import CaseRepository, create_repository


logger = logging.getLogger(__name__)


class AppState:
    """
    Стан API: база симптомів, сховище випадків, сесії, машина розмови.

    Приклад:
        state = AppState()
        state.initialize(APIConfig(kb_path="data/kb_v1.json"))
        reply = state.engine.handle("web-1", "I have a fever")
    """

    def __init__(self):
        self.is_initialized = False
        self.api_config: Optional[APIConfig] = None
        self.bot_config: Optional[TriageBotConfig] = None
        self.knowledge_base: Optional[KnowledgeBase] = None
        self.repository: Optional[CaseRepository] = None
        self.sessions: Optional[SessionStore] = None
        self.engine: Optional[ConversationEngine] = None
        self.boot_id: str = ""

    def initialize(self, api_config: APIConfig) -> None:
        """
        Завантажити базу симптомів та зібрати компоненти.

        Raises:
            KnowledgeBaseError: базу неможливо завантажити
            StorageError: сховище неможливо ініціалізувати
        """
        self.api_config = api_config
        self.bot_config = (
            load_config(api_config.config_path) if api_config.config_path
            else get_default_config()
        )

        self.knowledge_base = KnowledgeBase.load(api_config.kb_path)
        self.repository = create_repository(
            api_config.storage_backend,
            cases_dir=api_config.cases_dir,
            sqlite_path=api_config.sqlite_path,
        )
        self.sessions = SessionStore()
        self.boot_id = str(uuid.uuid4())
        self.engine = ConversationEngine(
            self.knowledge_base,
            self.sessions,
            boot_id=self.boot_id,
            repository=self.repository,
            config=self.bot_config,
        )
        self.is_initialized = True
        logger.info("Triage engine ready (boot %s)", self.boot_id)

    def shutdown(self) -> None:
        """Зберегти всі активні випадки"""
        if self.engine is not None:
            self.engine.flush_all()

    def get_health(self) -> Dict[str, Any]:
        return {
            "knowledge_base_symptoms": len(self.knowledge_base) if self.knowledge_base else 0,
            "active_sessions": self.sessions.active_count if self.sessions else 0,
            "storage_backend": (
                StorageBackend(self.api_config.storage_backend).value
                if self.api_config else "none"
            ),
        }


def get_state(request: Request) -> AppState:
    return request.app.state.triage


def get_engine(request: Request) -> ConversationEngine:
    return get_state(request).engine
