"""
Triage Bot - Випадок (Case)

Case зберігає стан одного triage-випадку:
- Кандидатів-симптомів та їх максимальну впевненість
- Сирі повідомлення користувача (notes)
- Слоти тривалості та severity
- Режим розмови та останній тип запитання бота
- Фінальний результат triage (встановлюється один раз)

Після блокування (locked) випадок тільки для читання.
"""

import time
import uuid
from typing import Dict, List, Optional
from dataclasses import dataclass, field
from enum import Enum

from ..schemas import CaseRecord


def now_ms() -> int:
    """Поточний час у мілісекундах епохи"""
    return int(time.time() * 1000)


class ConversationMode(str, Enum):
    """Режим розмови"""
    OPENING = "opening"
    CLARIFYING = "clarifying"
    GATHER_INFO = "gather_info"
    COLLECT_MORE = "collect_more"
    READY = "ready"


class PromptKind(str, Enum):
    """Тип останнього запитання бота"""
    NONE = "none"
    GREET = "greet"
    CLARIFY_FIRST = "clarify_first"
    CLARIFY = "clarify"
    CLARIFY_ALTERNATE = "clarify_alternate"
    CLARIFY_FORMAT = "clarify_format"
    ASK_DURATION = "ask_duration"
    ASK_SEVERITY = "ask_severity"
    COLLECT_MORE = "collect_more"


UNSET_MINUTES = -1.0


@dataclass
class Case:
    """
    Один triage-випадок.

    Приклад:
        case = Case()
        case.add_note("I have a fever")
        case.bump_candidate("FEVER", 1.0)
        case.bump_candidate("FEVER", 0.8)   # не знижує
        print(case.candidate_confidence_by_code)  # {'FEVER': 1.0}
    """

    # Ідентифікатор
    case_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    started_at: int = field(default_factory=now_ms)

    # Кандидати: код -> максимальна впевненість
    candidate_confidence_by_code: Dict[str, float] = field(default_factory=dict)

    # Сирий транскрипт
    notes: List[str] = field(default_factory=list)

    # Слоти
    duration: str = ""
    duration_minutes: float = UNSET_MINUTES
    severity: str = ""

    # Розмова
    mode: ConversationMode = ConversationMode.OPENING
    unclear_count: int = 0
    last_prompt: PromptKind = PromptKind.NONE

    # Результат triage
    triage_complete: bool = False
    triage_level: str = ""
    triage_confidence: float = 0.0
    triage_reasons: List[str] = field(default_factory=list)
    triage_red_flags: List[str] = field(default_factory=list)
    locked: bool = False

    def add_note(self, text: str) -> None:
        """Додати сире повідомлення користувача"""
        if self.locked:
            return
        self.notes.append(text)

    def bump_candidate(self, code: str, confidence: float) -> None:
        """
        Підняти впевненість кандидата.

        Зберігається максимум; значення ніколи не зменшується і не видаляється.
        """
        if self.locked:
            return
        if confidence > self.candidate_confidence_by_code.get(code, 0.0):
            self.candidate_confidence_by_code[code] = confidence

    def user_message_count(self) -> int:
        return len(self.notes)

    def set_duration(self, label: str, minutes: float) -> None:
        if self.locked:
            return
        self.duration = label
        self.duration_minutes = minutes

    def set_severity(self, severity: str) -> None:
        if self.locked:
            return
        self.severity = severity

    @property
    def has_duration(self) -> bool:
        return bool(self.duration)

    @property
    def has_severity(self) -> bool:
        return bool(self.severity)

    @property
    def has_notes(self) -> bool:
        return bool(self.notes)

    def record_triage(
        self,
        level: str,
        confidence: float,
        reasons: List[str],
        red_flags: List[str],
    ) -> bool:
        """
        Записати результат triage та заблокувати випадок.

        Returns:
            False, якщо результат вже був записаний (нічого не змінено)
        """
        if self.triage_complete:
            return False

        self.triage_complete = True
        self.locked = True
        self.triage_level = level
        self.triage_confidence = confidence
        self.triage_reasons = list(reasons)
        self.triage_red_flags = list(red_flags)
        return True

    def to_record(self, session_id: str = "", updated_at: Optional[int] = None) -> CaseRecord:
        """Знімок випадку для сховища"""
        return CaseRecord(
            case_id=self.case_id,
            session_id=session_id,
            started_at=self.started_at,
            updated_at=updated_at if updated_at is not None else now_ms(),
            notes=list(self.notes),
            candidate_confidence_by_code=dict(self.candidate_confidence_by_code),
            duration=self.duration,
            duration_minutes=self.duration_minutes,
            severity=self.severity,
            mode=self.mode.value,
            unclear_count=self.unclear_count,
            last_prompt=self.last_prompt.value,
            triage_complete=self.triage_complete,
            triage_level=self.triage_level,
            triage_confidence=self.triage_confidence,
            triage_reasons=list(self.triage_reasons),
            triage_red_flags=list(self.triage_red_flags),
            locked=self.locked,
        )

    def __repr__(self) -> str:
        return (
            f"Case("
            f"id={self.case_id[:8]}, "
            f"mode={self.mode.value}, "
            f"notes={len(self.notes)}, "
            f"candidates={len(self.candidate_confidence_by_code)}, "
            f"level={self.triage_level or 'pending'}"
            f")"
        )


@dataclass
class ConversationState:
    """Стан сесії: ідентифікатор, останній побачений boot id, активний випадок"""
    session_id: str
    boot_seen: str = ""
    active_case: Optional[Case] = None
