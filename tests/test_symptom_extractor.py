"""
Тести для нечіткого пошуку та екстрактора симптомів

Запуск: pytest tests/test_symptom_extractor.py -v
"""

from pathlib import Path

import pytest


DATA_PATH = Path(__file__).parent.parent / "data" / "kb_v1.json"


@pytest.fixture(scope="module")
def kb():
    from triage_bot.knowledge_base import KnowledgeBase
    return KnowledgeBase.load(DATA_PATH)


@pytest.fixture
def extractor(kb):
    from triage_bot.nlp import SymptomExtractor
    return SymptomExtractor(kb)


# =============================================================================
# Fuzzy matcher
# =============================================================================

def test_levenshtein():
    """Тест редакційної відстані"""
    from triage_bot.nlp import levenshtein_distance

    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("", "abc") == 3
    assert levenshtein_distance("abc", "") == 3
    assert levenshtein_distance("fever", "fever") == 0
    assert levenshtein_distance("fevr", "fever") == 1

    print("✓ Levenshtein distance")


def test_similarity():
    """Тест нормалізованої схожості"""
    from triage_bot.nlp import similarity

    assert similarity("", "") == 1.0
    assert similarity("cough", "cough") == 1.0
    assert similarity("fevr", "fever") == pytest.approx(0.8)
    assert similarity("abc", "xyz") == 0.0

    # Симетрична
    assert similarity("headache", "hedache") == similarity("hedache", "headache")

    print("✓ similarity в [0, 1], симетрична")


def test_fuzzy_matcher():
    """Тест FuzzyMatcher"""
    from triage_bot.nlp import FuzzyMatcher

    matcher = FuzzyMatcher(["fever", "cough"], min_score=0.8)

    hit = matcher.best_match("fevr")
    assert hit is not None
    assert hit.alias == "fever"
    assert hit.score == pytest.approx(0.8)

    assert matcher.best_match("xyz") is None
    assert FuzzyMatcher([]).best_match("fever") is None

    print(f"✓ FuzzyMatcher: fevr -> {hit.alias} ({hit.score:.2f})")


def test_fuzzy_matcher_tie_keeps_first():
    """При рівних оцінках перемагає перший аліас"""
    from triage_bot.nlp import FuzzyMatcher

    matcher = FuzzyMatcher(["abcd", "abce"], min_score=0.7)
    hit = matcher.best_match("abcx")

    assert hit.alias == "abcd"
    assert hit.score == pytest.approx(0.75)


# =============================================================================
# Extractor
# =============================================================================

def test_exact_extraction(extractor):
    """Exact n-gram пошук"""
    result = extractor.extract("I have chest pain and a fever")

    assert result.codes == ["CHEST_PAIN", "FEVER"]
    assert not result.used_fuzzy
    assert all(m.score == 1.0 and m.method == "exact" for m in result.matches)

    print(f"✓ Exact: {result.codes}")


def test_multiword_alias(extractor):
    """Багатослівний аліас з пунктуацією"""
    result = extractor.extract("I can't breathe!")

    assert result.codes == ["SHORTNESS_OF_BREATH"]
    assert result.matches[0].alias == "can t breathe"


def test_fuzzy_extraction(extractor):
    """Fuzzy пошук, коли немає exact збігів"""
    result = extractor.extract("feverr")

    assert result.used_fuzzy
    assert result.codes == ["FEVER"]
    assert result.best_scores()["FEVER"] == pytest.approx(1 - 1 / 6)
    assert result.matches[0].method == "fuzzy"

    print(f"✓ Fuzzy: feverr -> FEVER ({result.best_scores()['FEVER']:.3f})")


def test_fuzzy_skipped_after_exact_hit(extractor):
    """Fuzzy не запускається, якщо є exact збіг"""
    result = extractor.extract("fever and coughh")

    assert result.codes == ["FEVER"]
    assert not result.used_fuzzy


def test_empty_text(extractor):
    """Порожній текст"""
    for text in ["", "   ", None, "!!!"]:
        result = extractor.extract(text)
        assert result.matches == []
        assert result.codes == []


def test_short_tokens_not_fuzzy(extractor):
    """Короткі токени не порівнюються нечітко"""
    result = extractor.extract("ok so")

    assert result.codes == []


def test_shared_alias_returns_all_codes():
    """Аліас кількох кодів повертає всі коди"""
    from triage_bot.knowledge_base import KnowledgeBase
    from triage_bot.nlp import SymptomExtractor

    kb = KnowledgeBase.from_dict({"symptoms": [
        {"code": "ABDOMINAL_PAIN", "label": "Abdominal pain", "aliases": ["cramps"]},
        {"code": "MENSTRUAL_PAIN", "label": "Menstrual pain", "aliases": ["cramps"]},
    ]})
    result = SymptomExtractor(kb).extract("bad cramps")

    assert result.codes == ["ABDOMINAL_PAIN", "MENSTRUAL_PAIN"]


def test_update_case_keeps_max(extractor):
    """Впевненість у випадку тільки зростає"""
    from triage_bot.conversation import Case

    case = Case()
    extractor.update_case(case, "I have a fever")
    assert case.candidate_confidence_by_code == {"FEVER": 1.0}

    extractor.update_case(case, "feverr")
    assert case.candidate_confidence_by_code["FEVER"] == 1.0

    print("✓ update_case не знижує впевненість")


def test_result_to_dict(extractor):
    """Серіалізація результату"""
    data = extractor.extract("sore throat").to_dict()

    assert data["normalized"] == "sore throat"
    assert data["used_fuzzy"] is False
    assert data["matches"][0]["code"] == "SORE_THROAT"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
