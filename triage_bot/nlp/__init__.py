"""
Triage Bot - NLP модуль

Детермінована обробка тексту користувача (без ML).

Компоненти:
- text_preprocessor: normalize / tokenize / make_ngrams
- duration_parser: Тривалість симптомів ("2 hours", "few days")
- severity_extractor: mild / moderate / severe
- fuzzy_matcher: Нормалізована редакційна відстань
- symptom_extractor: Exact n-gram + fuzzy пошук кандидатів
- signals: "готово", незрозумілий ввід, привітання

Приклад використання:
    from triage_bot.nlp import normalize, parse_duration, extract_severity

    norm = normalize("Chest pain for 90 minutes, moderate!")
    parse_duration(norm)      # DurationParseResult(label='90 minutes', minutes=90.0)
    extract_severity(norm)    # 'moderate'
"""

from .text_preprocessor import (
    normalize,
    tokenize,
    make_ngrams,
)

from .duration_parser import (
    DurationParseResult,
    parse_duration,
    parse_number,
    format_duration_label,
)

from .severity_extractor import extract_severity

from .fuzzy_matcher import (
    FuzzyMatcher,
    MatchResult,
    levenshtein_distance,
    similarity,
)

from .symptom_extractor import (
    SymptomExtractor,
    SymptomMatch,
    ExtractionResult,
)

from .signals import (
    user_seems_done,
    is_unclear,
    is_greeting,
    contains_any_token,
)


__all__ = [
    # Preprocessor
    'normalize',
    'tokenize',
    'make_ngrams',

    # Duration / severity
    'DurationParseResult',
    'parse_duration',
    'parse_number',
    'format_duration_label',
    'extract_severity',

    # Matcher
    'FuzzyMatcher',
    'MatchResult',
    'levenshtein_distance',
    'similarity',

    # Extractor
    'SymptomExtractor',
    'SymptomMatch',
    'ExtractionResult',

    # Signals
    'user_seems_done',
    'is_unclear',
    'is_greeting',
    'contains_any_token',
]
