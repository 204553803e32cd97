"""
Тести для модуля triage: скоринг та текстовий підсумок

Запуск: pytest tests/test_triage_scoring.py -v
"""

import pytest


@pytest.fixture(scope="module")
def kb():
    """Невелика база з відомими вагами"""
    from triage_bot.knowledge_base import KnowledgeBase

    return KnowledgeBase.from_dict({"symptoms": [
        {"code": "SHORTNESS_OF_BREATH", "label": "Shortness of breath", "weight": 3.0, "redFlag": True},
        {"code": "FEVER", "label": "Fever", "weight": 2.5},
        {"code": "RUNNY_NOSE", "label": "Runny nose", "weight": 1.0},
        {"code": "NOSEBLEED", "label": "Nosebleed", "weight": 1.5},
        {"code": "HEAVY", "label": "Heavy symptom", "weight": 4.0},
    ]})


@pytest.fixture
def scorer(kb):
    from triage_bot.triage import TriageScorer
    return TriageScorer(kb)


def make_case(candidates, duration="", minutes=-1.0, severity="", notes=3):
    from triage_bot.conversation import Case

    case = Case()
    for code, confidence in candidates.items():
        case.bump_candidate(code, confidence)
    case.set_duration(duration, minutes)
    case.set_severity(severity)
    for i in range(notes):
        case.add_note(f"note {i}")
    return case


# =============================================================================
# Множники
# =============================================================================

def test_duration_multiplier(scorer):
    """Множник тривалості з хвилин та з мітки"""
    assert scorer.duration_multiplier("30 minutes", 30) == 1.0
    assert scorer.duration_multiplier("31 minutes", 31) == 1.15
    assert scorer.duration_multiplier("2 hours", 120) == 1.15
    assert scorer.duration_multiplier("3 days", 4320) == 1.60
    assert scorer.duration_multiplier("1 week", 10080) == 1.75

    # Без хвилин -> текстові кошики
    assert scorer.duration_multiplier("today", -1) == 1.20
    assert scorer.duration_multiplier("1-2 days", -1) == 1.15
    assert scorer.duration_multiplier("2+ weeks", -1) == 1.60
    assert scorer.duration_multiplier("whenever", -1) == 1.0

    print("✓ Duration multipliers")


def test_duration_boost(scorer):
    """Буст тривалості"""
    assert scorer.duration_boost(-1) == 0.0
    assert scorer.duration_boost(30) == 0.0
    assert scorer.duration_boost(120) == 0.8
    assert scorer.duration_boost(360) == 1.2
    assert scorer.duration_boost(4320) == 1.6


def test_is_prolonged(scorer):
    """Тривалі симптоми"""
    assert scorer.is_prolonged("2 hours", 120)
    assert scorer.is_prolonged("today", -1)
    assert scorer.is_prolonged("few days (~3)", 4320)
    assert not scorer.is_prolonged("30 minutes", 30)


# =============================================================================
# Рішення
# =============================================================================

def test_red_flag_emergency(scorer):
    """Red flag -> 911 @ 0.92"""
    case = make_case({"SHORTNESS_OF_BREATH": 1.0}, "2 hours", 120, "severe")

    result = scorer.maybe_triage(case, "severe")

    assert result.level == "911"
    assert result.confidence == pytest.approx(0.92)
    assert result.red_flags == ["Shortness of breath (conf 100%)"]
    assert result.reasons[0] == "Shortness of breath (conf 100%)"
    assert "Reported severity: severe" in result.reasons
    assert case.locked
    assert case.triage_complete

    print(f"✓ Red flag: {result.level} ({result.confidence:.2f})")


def test_red_flag_below_threshold(scorer):
    """Red flag нижче порогу стає звичайною причиною"""
    case = make_case({"SHORTNESS_OF_BREATH": 0.5}, "30 minutes", 30, "mild")

    result = scorer.maybe_triage(case, "mild")

    assert result.level == "Self-care / monitor"
    assert result.red_flags == []
    assert result.reasons == ["Shortness of breath (conf 50%)"]
    assert result.score == pytest.approx(1.5)
    assert result.confidence == pytest.approx(0.65)


def test_doctor_visit(scorer):
    """Fever, 2 hours, moderate -> Doctor visit"""
    case = make_case({"FEVER": 1.0}, "2 hours", 120, "moderate")

    result = scorer.maybe_triage(case, "moderate")

    # 2.5 * 1.30 * 1.15 + 0.5 + 0.8
    assert result.score == pytest.approx(5.0375)
    assert result.level == "Doctor visit recommended"
    assert result.confidence == 1.0
    assert result.reasons == [
        "Fever (conf 100%)",
        "Reported severity: moderate",
        "Symptoms ongoing for 2 hours",
    ]

    print(f"✓ Doctor visit: score={result.score:.4f}")


def test_doctor_visit_confidence_below_cap(scorer):
    """Впевненість Doctor visit нижче 1.0"""
    case = make_case({"HEAVY": 1.0}, "30 minutes", 30, "mild")

    result = scorer.maybe_triage(case, "mild")

    assert result.score == pytest.approx(4.0)
    assert result.level == "Doctor visit recommended"
    assert result.confidence == pytest.approx(0.6 + 4.0 / 12)


def test_er_now_by_score(scorer):
    """Високий score -> ER now"""
    case = make_case({"HEAVY": 1.0, "FEVER": 1.0}, "3 days", 4320, "severe")

    result = scorer.maybe_triage(case, "severe")

    # (4.0 + 2.5) * 1.70 * 1.60 + 1.2 + 1.6
    assert result.score == pytest.approx(20.48)
    assert result.level == "ER now"
    assert result.confidence == 1.0


def test_self_care(scorer):
    """Runny nose, 30 minutes, mild -> Self-care @ 0.6"""
    case = make_case({"RUNNY_NOSE": 1.0}, "30 minutes", 30, "mild")

    result = scorer.maybe_triage(case, "that s it")

    assert result.level == "Self-care / monitor"
    assert result.score == pytest.approx(1.0)
    assert result.confidence == pytest.approx(0.6)
    assert result.reasons == ["Runny nose (conf 100%)"]


def test_no_significant_reason(scorer):
    """Без причин -> стандартна причина"""
    case = make_case({"FEVER": 0.3}, "30 minutes", 30, "mild")

    result = scorer.maybe_triage(case, "mild")

    assert result.level == "Self-care / monitor"
    assert result.reasons == ["No significant symptoms detected yet"]
    assert result.confidence == pytest.approx(0.575)


def test_prolonged_nosebleed(scorer):
    """Носова кровотеча >= 2 години"""
    case = make_case({"NOSEBLEED": 1.0}, "3 hours", 180, "moderate")
    result = scorer.maybe_triage(case, "moderate")

    assert result.level == "ER now"
    assert result.confidence == pytest.approx(0.90)
    assert result.reasons == [
        "Nosebleed (conf 100%)",
        "Reported severity: moderate",
        "Symptoms ongoing for 3 hours",
        "Nosebleed lasting 2+ hours",
    ]

    severe = make_case({"NOSEBLEED": 1.0}, "3 hours", 180, "severe")
    assert scorer.maybe_triage(severe, "severe").level == "911"

    short = make_case({"NOSEBLEED": 1.0}, "30 minutes", 30, "moderate")
    assert scorer.maybe_triage(short, "moderate").level != "ER now"

    print("✓ Nosebleed escalation")


def test_unknown_codes_skipped(scorer):
    """Невідомі коди не впливають на score"""
    case = make_case({"GHOST": 1.0, "RUNNY_NOSE": 1.0}, "30 minutes", 30, "mild")

    result = scorer.maybe_triage(case, "mild")

    assert result.score == pytest.approx(1.0)
    assert result.reasons == ["Runny nose (conf 100%)"]


# =============================================================================
# Передумови
# =============================================================================

def test_not_ready(scorer):
    """Triage не запускається без передумов"""
    assert scorer.maybe_triage(make_case({}, "2 hours", 120, "mild"), "mild") is None
    assert scorer.maybe_triage(make_case({"FEVER": 1.0}, "", -1, "mild"), "mild") is None
    assert scorer.maybe_triage(make_case({"FEVER": 1.0}, "2 hours", 120, ""), "x") is None

    early = make_case({"FEVER": 1.0}, "2 hours", 120, "mild", notes=2)
    assert scorer.maybe_triage(early, "mild") is None
    assert not early.locked

    print("✓ Передумови triage")


def test_ready_when_user_done(scorer):
    """Завершення користувачем замінює ліміт повідомлень"""
    case = make_case({"FEVER": 1.0}, "2 hours", 120, "mild", notes=1)

    assert scorer.maybe_triage(case, "that s it") is not None
    assert case.locked


def test_result_set_once(scorer):
    """Повторний виклик повертає збережений результат"""
    case = make_case({"RUNNY_NOSE": 1.0}, "30 minutes", 30, "mild")
    first = scorer.maybe_triage(case, "mild")

    case.set_severity("severe")             # заблокований випадок не змінюється
    second = scorer.maybe_triage(case, "severe")

    assert second.level == first.level
    assert second.confidence == first.confidence
    assert case.severity == "mild"


# =============================================================================
# Підсумок
# =============================================================================

def test_triage_summary():
    """Формат текстового підсумку"""
    from triage_bot.conversation import Case
    from triage_bot.triage import triage_summary

    case = Case()
    case.set_duration("2 hours", 120)
    case.record_triage("911", 0.92, ["a", "b"], ["a"])

    assert triage_summary(case) == (
        "Triage result: 911 (confidence 92%)\n"
        "Reasons: a; b\n"
        "Duration noted: 2 hours\n"
        "Case locked. Start a new session to begin another triage."
    )

    pending = Case()
    assert triage_summary(pending) == (
        "Triage result: Pending\n"
        "Case locked. Start a new session to begin another triage."
    )

    print("✓ triage_summary")


def test_format_confidence_reason():
    from triage_bot.triage import format_confidence_reason

    assert format_confidence_reason("Fever", 1.0) == "Fever (conf 100%)"
    assert format_confidence_reason("Fever", 0.8333) == "Fever (conf 83%)"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
