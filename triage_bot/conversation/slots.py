"""
Triage Bot - Заповнення слотів

Правила оновлення тривалості та severity у випадку.

Тривалість:
- Порожній слот: приймається, якщо бот щойно питав тривалість,
  є токен часового контексту ("for", "since", ...) або хвилини > 0
- Заповнений слот: після запитання тривалості приймається завжди;
  інакше потрібні хвилини > 0 і токен виправлення ("actually", "just",
  "only"), або токен контексту і не менша тривалість

Severity:
- Приймається, якщо слот порожній, бот щойно питав severity
  або є токен виправлення
"""

from typing import Iterable, Optional

from .case import Case, PromptKind
from ..config import SlotConfig
from ..nlp import (
    DurationParseResult,
    parse_duration,
    extract_severity,
    contains_any_token,
)


def should_update_duration(
    case: Case,
    parsed: DurationParseResult,
    norm: str,
    context_tokens: Optional[Iterable[str]] = None,
    correction_tokens: Optional[Iterable[str]] = None,
) -> bool:
    """
    Чи перезаписувати слот тривалості.

    Args:
        case: Випадок
        parsed: Розібрана тривалість з поточного повідомлення
        norm: Нормалізований текст повідомлення
        context_tokens: Токени часового контексту
        correction_tokens: Токени самовиправлення
    """
    defaults = SlotConfig()
    context_tokens = defaults.duration_context_tokens if context_tokens is None else context_tokens
    correction_tokens = defaults.correction_tokens if correction_tokens is None else correction_tokens

    asked_duration = case.last_prompt == PromptKind.ASK_DURATION
    has_context = contains_any_token(norm, context_tokens)
    has_correction = contains_any_token(norm, correction_tokens)

    if not case.has_duration:
        return asked_duration or has_context or parsed.minutes > 0

    # Відповідь на запитання тривалості перезаписує слот, навіть донизу
    if asked_duration:
        return True
    if parsed.minutes <= 0:
        return False
    if has_correction:
        return True
    if not has_context:
        return False
    if case.duration_minutes <= 0:
        return True
    return parsed.minutes >= case.duration_minutes


def should_update_severity(
    case: Case,
    norm: str,
    correction_tokens: Optional[Iterable[str]] = None,
) -> bool:
    """Чи перезаписувати слот severity"""
    if correction_tokens is None:
        correction_tokens = SlotConfig().correction_tokens

    if not case.has_severity:
        return True
    if case.last_prompt == PromptKind.ASK_SEVERITY:
        return True
    return contains_any_token(norm, correction_tokens)


def fill_slots(case: Case, norm: str, config: Optional[SlotConfig] = None) -> None:
    """
    Заповнити тривалість та severity з повідомлення, якщо це доречно.

    Args:
        case: Випадок
        norm: Нормалізований текст
        config: Налаштування слотів
    """
    config = config or SlotConfig()

    parsed = parse_duration(norm)
    if parsed is not None and should_update_duration(
        case, parsed, norm,
        context_tokens=config.duration_context_tokens,
        correction_tokens=config.correction_tokens,
    ):
        case.set_duration(parsed.label, parsed.minutes)

    severity = extract_severity(norm)
    if severity and should_update_severity(case, norm, config.correction_tokens):
        case.set_severity(severity)
