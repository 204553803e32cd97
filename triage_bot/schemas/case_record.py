"""
Triage Bot - Схеми збережених випадків

Pydantic моделі для:
- CaseRecord: повний знімок випадку для сховища
- CaseSummary: короткий запис для списку історії
"""

from typing import Dict, List
from pydantic import BaseModel, Field, field_validator


class CaseRecord(BaseModel):
    """
    Знімок випадку (Case) для збереження.

    Приклад:
        record = case.to_record(session_id="web-123")
        repository.save_record(record)
    """
    # Ідентифікація
    case_id: str = Field(..., description="UUID випадку")
    session_id: str = Field("", description="Ідентифікатор сесії клієнта")
    started_at: int = Field(0, description="Початок випадку (epoch ms)")
    updated_at: int = Field(0, description="Останнє збереження (epoch ms)")

    # Зібрана інформація
    notes: List[str] = Field(default_factory=list, description="Сирі повідомлення користувача")
    candidate_confidence_by_code: Dict[str, float] = Field(
        default_factory=dict,
        description="Максимальна впевненість для кожного коду симптому"
    )
    duration: str = Field("", description="Мітка тривалості")
    duration_minutes: float = Field(-1.0, description="Тривалість у хвилинах (-1 якщо невідома)")
    severity: str = Field("", description="mild / moderate / severe")

    # Стан розмови
    mode: str = Field("opening", description="Режим розмови")
    unclear_count: int = Field(0, ge=0)
    last_prompt: str = Field("none", description="Останній тип запитання бота")

    # Результат triage
    triage_complete: bool = False
    triage_level: str = ""
    triage_confidence: float = Field(0.0, ge=0.0, le=1.0)
    triage_reasons: List[str] = Field(default_factory=list)
    triage_red_flags: List[str] = Field(default_factory=list)
    locked: bool = False

    @field_validator('severity')
    @classmethod
    def validate_severity(cls, v: str) -> str:
        v = (v or "").strip().lower()
        if v not in ("", "mild", "moderate", "severe"):
            raise ValueError(f"Unknown severity: {v}")
        return v

    def to_summary(self) -> "CaseSummary":
        """Короткий запис для списку історії"""
        return CaseSummary(
            case_id=self.case_id,
            session_id=self.session_id,
            started_at=self.started_at,
            triage_level=self.triage_level,
            triage_confidence=self.triage_confidence,
            duration=self.duration,
            severity=self.severity,
            notes_count=len(self.notes),
            red_flag_count=len(self.triage_red_flags),
        )

    class Config:
        json_schema_extra = {
            "example": {
                "case_id": "0f8fad5b-d9cb-469f-a165-70867728950e",
                "session_id": "web-1700000000000",
                "started_at": 1700000000000,
                "updated_at": 1700000060000,
                "notes": ["I have a fever", "2 hours", "moderate"],
                "candidate_confidence_by_code": {"FEVER": 1.0},
                "duration": "2 hours",
                "duration_minutes": 120.0,
                "severity": "moderate",
                "mode": "collect_more",
                "unclear_count": 0,
                "last_prompt": "ask_severity",
                "triage_complete": True,
                "triage_level": "Doctor visit recommended",
                "triage_confidence": 1.0,
                "triage_reasons": ["Fever (conf 100%)", "Reported severity: moderate"],
                "triage_red_flags": [],
                "locked": True,
            }
        }


class CaseSummary(BaseModel):
    """Короткий запис випадку для історії"""
    case_id: str
    session_id: str = ""
    started_at: int = 0
    triage_level: str = ""
    triage_confidence: float = 0.0
    duration: str = ""
    severity: str = ""
    notes_count: int = Field(0, ge=0)
    red_flag_count: int = Field(0, ge=0)

    class Config:
        json_schema_extra = {
            "example": {
                "case_id": "0f8fad5b-d9cb-469f-a165-70867728950e",
                "session_id": "web-1700000000000",
                "started_at": 1700000000000,
                "triage_level": "911",
                "triage_confidence": 0.92,
                "duration": "2 hours",
                "severity": "severe",
                "notes_count": 3,
                "red_flag_count": 1,
            }
        }
