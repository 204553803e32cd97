"""
Triage Bot API - Pydantic Models

Моделі для запитів та відповідей REST API.
Поля на дроті у camelCase.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


# === Request Models ===

class MessageRequest(BaseModel):
    """Повідомлення користувача"""
    session_id: Optional[str] = Field(
        default=None,
        alias="sessionId",
        description="Ключ сесії клієнта (якщо порожній, створюється anon-<ms>)",
    )
    text: Optional[str] = Field(
        default="",
        description="Текст повідомлення",
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "sessionId": "web-1700000000000",
                "text": "chest tightness for 90 minutes, moderate",
            }
        }


# === Response Models ===

class BotMessageResponse(BaseModel):
    """Відповідь бота"""
    type: str = "bot"
    text: str
    locked: bool = False
    triage_level: Optional[str] = Field(default=None, alias="triageLevel")
    triage_confidence: Optional[float] = Field(default=None, alias="triageConfidence")
    red_flags: Optional[List[str]] = Field(default=None, alias="redFlags")
    reasons: Optional[List[str]] = None
    duration: Optional[str] = None
    options: Optional[List[str]] = None

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "type": "bot",
                "text": "Triage result: 911 (confidence 92%)\n...",
                "locked": True,
                "triageLevel": "911",
                "triageConfidence": 0.92,
                "redFlags": ["Shortness of breath (conf 100%)"],
                "reasons": ["Shortness of breath (conf 100%)", "Reported severity: severe"],
                "duration": "2 hours",
            }
        }


class CaseSummaryResponse(BaseModel):
    """Запис історії випадків"""
    case_id: str = Field(..., alias="caseId")
    session_id: str = Field("", alias="sessionId")
    started_at: int = Field(0, alias="startedEpochMs")
    triage_level: str = Field("", alias="triageLevel")
    triage_confidence: float = Field(0.0, alias="triageConfidence")
    duration: str = ""
    severity: str = ""
    notes_count: int = Field(0, alias="notesCount")
    red_flag_count: int = Field(0, alias="redFlagCount")

    class Config:
        populate_by_name = True


class CaseListResponse(BaseModel):
    """Список останніх випадків"""
    cases: List[CaseSummaryResponse]
    total: int
    limit: int


class HealthResponse(BaseModel):
    """Стан сервера"""
    status: str
    version: str
    knowledge_base_symptoms: int = 0
    active_sessions: int = 0
    storage_backend: str = "none"
