"""Triage Bot - Відповідь бота"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from .case import Case


@dataclass
class BotReply:
    """
    Відповідь бота на одне повідомлення.

    Поля triage заповнюються тільки після завершення triage.
    """
    text: str
    options: List[str] = field(default_factory=list)
    locked: bool = False
    triage_complete: bool = False
    triage_level: str = ""
    triage_confidence: float = 0.0
    red_flags: List[str] = field(default_factory=list)
    reasons: List[str] = field(default_factory=list)
    duration: str = ""

    @classmethod
    def for_case(
        cls,
        text: str,
        case: Case,
        options: Optional[List[str]] = None,
    ) -> "BotReply":
        """Зібрати відповідь з поточним станом випадку"""
        reply = cls(text=text, options=list(options or []), locked=case.locked)
        if case.triage_complete:
            reply.triage_complete = True
            reply.triage_level = case.triage_level
            reply.triage_confidence = case.triage_confidence
            reply.red_flags = list(case.triage_red_flags)
            reply.reasons = list(case.triage_reasons)
            reply.duration = case.duration
        return reply

    def to_dict(self) -> Dict[str, Any]:
        """Формат відповіді для клієнта (camelCase)"""
        data: Dict[str, Any] = {
            "type": "bot",
            "text": self.text,
            "locked": self.locked,
        }
        if self.triage_complete:
            data["triageLevel"] = self.triage_level
            data["triageConfidence"] = round(self.triage_confidence, 4)
            data["redFlags"] = list(self.red_flags)
            data["reasons"] = list(self.reasons)
            if self.duration:
                data["duration"] = self.duration
        if self.options:
            data["options"] = list(self.options)
        return data
