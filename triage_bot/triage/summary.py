"""Triage Bot - Текстовий підсумок triage"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..conversation.case import Case


LOCKED_FOOTER = "Case locked. Start a new session to begin another triage."


def triage_summary(case: "Case") -> str:
    """
    Підсумок для користувача.

    Формат:
        Triage result: <level | Pending> (confidence NN%)
        Reasons: a; b
        Duration noted: <duration>
        Case locked. Start a new session to begin another triage.
    """
    lines = [f"Triage result: {case.triage_level or 'Pending'}"]
    if case.triage_confidence > 0:
        lines[0] += f" (confidence {case.triage_confidence * 100:.0f}%)"
    if case.triage_reasons:
        lines.append("Reasons: " + "; ".join(case.triage_reasons))
    if case.has_duration:
        lines.append(f"Duration noted: {case.duration}")
    lines.append(LOCKED_FOOTER)
    return "\n".join(lines)
