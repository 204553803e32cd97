"""
Triage Bot - Duration Parser

Витягування тривалості симптомів з нормалізованого тексту.

Порядок розбору (перше співпадіння перемагає):
1. Ідіоматичні фрази ("few hours", "past week", "half an hour", ...)
2. Число + одиниця ("2 hours", "a day", "couple weeks", "3 hrs")

Приклад:
    parse_duration("chest pain for 90 minutes")
    # DurationParseResult(label='90 minutes', minutes=90.0)

    parse_duration("since the past week")
    # DurationParseResult(label='1 week', minutes=10080.0)

    parse_duration("no numbers here")   # None
"""

import math
from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass

from .text_preprocessor import tokenize


MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 60 * 24
MINUTES_PER_WEEK = 60 * 24 * 7


@dataclass(frozen=True)
class DurationParseResult:
    """Результат розбору тривалості"""
    label: str             # Людська мітка ("2 hours")
    minutes: float         # Тривалість у хвилинах


# (фрази, мітка, хвилини); перевіряються по порядку
IDIOMATIC_PHRASES: List[Tuple[Tuple[str, ...], str, float]] = [
    (("few minutes",), "few minutes (~10)", 10),
    (("few hours",), "few hours (~180)", 3 * MINUTES_PER_HOUR),
    (("few days",), "few days (~3)", 3 * MINUTES_PER_DAY),
    (("few weeks",), "few weeks (~3)", 3 * MINUTES_PER_WEEK),
    (("past week", "last week"), "1 week", MINUTES_PER_WEEK),
    (("past day", "last day"), "1 day", MINUTES_PER_DAY),
    (("half hour", "half an hour"), "30 minutes", 30),
    (("hour and a half", "an hour and a half"), "90 minutes", 90),
]

NUMBER_WORDS: Dict[str, float] = {
    'a': 1.0,
    'an': 1.0,
    'one': 1.0,
    'two': 2.0,
    'couple': 2.0,
    'three': 3.0,
    'four': 4.0,
    'five': 5.0,
}

# (префікси одиниці, назва, хвилин в одиниці)
UNITS: List[Tuple[Tuple[str, ...], str, int]] = [
    (("min",), "minute", 1),
    (("hour", "hr"), "hour", MINUTES_PER_HOUR),
    (("day",), "day", MINUTES_PER_DAY),
    (("week",), "week", MINUTES_PER_WEEK),
]


def parse_number(token: str) -> Optional[float]:
    """Число з токена: десятковий літерал або слово (a, couple, three...)"""
    if token in NUMBER_WORDS:
        return NUMBER_WORDS[token]
    try:
        value = float(token)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def format_duration_label(value: float, unit: str) -> str:
    """
    Мітка тривалості.

    Цілі значення без дробової частини, інші з двома знаками.
    Множина, якщо |value| != 1.
    """
    if abs(value - round(value)) < 0.0001:
        number_text = str(int(round(value)))
    else:
        number_text = f"{value:.2f}"

    unit_text = unit if abs(value) == 1.0 else unit + "s"
    return f"{number_text} {unit_text}"


def parse_duration(norm: str) -> Optional[DurationParseResult]:
    """
    Розібрати тривалість з нормалізованого тексту.

    Args:
        norm: Нормалізований текст

    Returns:
        DurationParseResult або None, якщо тривалість не знайдено
    """
    if not norm:
        return None

    for phrases, label, minutes in IDIOMATIC_PHRASES:
        if any(phrase in norm for phrase in phrases):
            return DurationParseResult(label=label, minutes=float(minutes))

    tokens = tokenize(norm)
    for i, token in enumerate(tokens[:-1]):
        value = parse_number(token)
        if value is None:
            continue

        unit_token = tokens[i + 1]
        for prefixes, unit, factor in UNITS:
            if unit_token.startswith(prefixes):
                minutes = value * factor
                if not math.isfinite(minutes):
                    return None
                return DurationParseResult(
                    label=format_duration_label(value, unit),
                    minutes=minutes,
                )

    return None
