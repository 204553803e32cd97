"""
Тести для правил заповнення слотів (duration / severity)

Запуск: pytest tests/test_slots.py -v
"""

import pytest


def make_case(duration="", minutes=-1.0, severity="", last_prompt=None):
    from triage_bot.conversation import Case, PromptKind

    case = Case()
    if duration:
        case.set_duration(duration, minutes)
    if severity:
        case.set_severity(severity)
    case.last_prompt = last_prompt or PromptKind.NONE
    return case


def fill(case, text):
    from triage_bot.conversation import fill_slots
    from triage_bot.nlp import normalize

    fill_slots(case, normalize(text))
    return case


# =============================================================================
# Тривалість: порожній слот
# =============================================================================

def test_empty_duration_slot():
    """Порожній слот: хвилини > 0, контекст або запитання тривалості"""
    from triage_bot.conversation import PromptKind

    assert fill(make_case(), "2 hours").duration == "2 hours"

    # 0 хвилин без контексту та без запитання не приймається
    assert fill(make_case(), "0 minutes").duration == ""

    assert fill(make_case(), "for 0 minutes").duration == "0 minutes"

    asked = make_case(last_prompt=PromptKind.ASK_DURATION)
    assert fill(asked, "0 minutes").duration_minutes == 0

    print("✓ Порожній слот тривалості")


# =============================================================================
# Тривалість: заповнений слот
# =============================================================================

def test_asked_duration_overwrites_downward():
    """Відповідь на запитання тривалості перезаписує слот, навіть меншим значенням"""
    from triage_bot.conversation import PromptKind

    case = make_case("3 days", 4320, last_prompt=PromptKind.ASK_DURATION)
    fill(case, "2 hours")

    assert case.duration == "2 hours"
    assert case.duration_minutes == 120

    print("✓ ASK_DURATION: 3 days -> 2 hours")


def test_correction_overwrites_downward():
    """Токен виправлення дозволяє меншу тривалість"""
    case = fill(make_case("3 days", 4320), "actually 2 hours")
    assert case.duration == "2 hours"

    case = fill(make_case("3 days", 4320), "only 30 minutes")
    assert case.duration == "30 minutes"

    # Виправлення на 0 хвилин не приймається
    case = fill(make_case("3 days", 4320), "actually 0 minutes")
    assert case.duration == "3 days"


@pytest.mark.parametrize("text,expected", [
    ("for 2 hours", "3 days"),      # контекст, але коротше
    ("2 hours", "3 days"),          # без контексту
    ("for 5 days", "5 days"),       # контекст і довше
    ("for 3 days", "3 days"),       # однакова тривалість
])
def test_context_requires_longer(text, expected):
    """Токен контексту приймає тільки не меншу тривалість"""
    case = fill(make_case("3 days", 4320), text)
    assert case.duration == expected


def test_stored_zero_duration_replaced():
    """Збережені 0 хвилин замінюються значенням з контекстом"""
    case = fill(make_case("0 minutes", 0), "for 2 hours")
    assert case.duration == "2 hours"
    assert case.duration_minutes == 120

    case = fill(make_case("0 minutes", 0), "2 hours")
    assert case.duration == "0 minutes"


def test_should_update_duration_direct():
    """Прямий виклик правила з власними токенами"""
    from triage_bot.conversation import should_update_duration
    from triage_bot.nlp import DurationParseResult

    case = make_case("3 days", 4320)
    parsed = DurationParseResult(label="2 hours", minutes=120.0)

    assert not should_update_duration(case, parsed, "2 hours")
    assert should_update_duration(case, parsed, "nope 2 hours", correction_tokens=["nope"])
    assert not should_update_duration(case, parsed, "for 2 hours", context_tokens=["for"])


# =============================================================================
# Severity
# =============================================================================

def test_severity_empty_slot():
    """Порожній слот severity приймає будь-яке значення"""
    assert fill(make_case(), "it is moderate").severity == "moderate"


def test_severity_filled_slot():
    """Заповнений слот: тільки після запитання або з виправленням"""
    from triage_bot.conversation import PromptKind

    assert fill(make_case(severity="mild"), "severe").severity == "mild"

    asked = make_case(severity="mild", last_prompt=PromptKind.ASK_SEVERITY)
    assert fill(asked, "severe").severity == "severe"

    assert fill(make_case(severity="mild"), "actually severe").severity == "severe"

    print("✓ Правила severity")


def test_should_update_severity_direct():
    from triage_bot.conversation import should_update_severity

    assert should_update_severity(make_case(), "mild")
    assert not should_update_severity(make_case(severity="mild"), "severe")
    assert should_update_severity(make_case(severity="mild"), "really severe", ["really"])


def test_locked_case_ignores_slots():
    """Заблокований випадок не змінюється"""
    from triage_bot.conversation import PromptKind

    case = make_case("2 hours", 120, severity="mild", last_prompt=PromptKind.ASK_DURATION)
    case.record_triage("Self-care / monitor", 0.6, [], [])

    fill(case, "actually 3 days severe")

    assert case.duration == "2 hours"
    assert case.severity == "mild"
