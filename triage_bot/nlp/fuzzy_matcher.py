"""
Triage Bot - Fuzzy Matcher

Нечітке співставлення токена з аліасами симптомів.

Метрика: нормалізована редакційна відстань (Levenshtein)
    similarity(a, b) = 1 - distance(a, b) / max(len(a), len(b))

Властивості:
- similarity(x, x) == 1.0
- similarity(a, b) == similarity(b, a)
- similarity("", "") == 1.0
"""

from typing import List, Optional, Sequence
from dataclasses import dataclass

from rapidfuzz.distance import Levenshtein


@dataclass
class MatchResult:
    """Результат нечіткого співставлення"""
    token: str             # Токен користувача
    alias: str             # Аліас з бази, що співпав
    score: float           # Оцінка співпадіння (0-1)


def levenshtein_distance(a: str, b: str) -> int:
    """
    Редакційна відстань (вставка, видалення, заміна, кожна вартістю 1).

    Args:
        a: Перший рядок
        b: Другий рядок

    Returns:
        Мінімальна кількість редагувань
    """
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Схожість двох рядків у діапазоні [0, 1]"""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a, b) / longest


class FuzzyMatcher:
    """
    Пошук найкращого аліасу для токена.

    Приклад:
        matcher = FuzzyMatcher(["fever", "cough", "headache"], min_score=0.8)
        result = matcher.best_match("fevr")
        # MatchResult(token='fevr', alias='fever', score=0.8)
    """

    def __init__(self, aliases: Sequence[str], min_score: float = 0.80):
        """
        Args:
            aliases: Нормалізовані аліаси у порядку завантаження
            min_score: Мінімальна оцінка для співпадіння
        """
        self.aliases: List[str] = list(aliases)
        self.min_score = min_score

    def best_alias(self, token: str) -> Optional[MatchResult]:
        """
        Найкращий аліас без порогу.

        При рівних оцінках лишається перший аліас у порядку завантаження.
        """
        best = None
        for alias in self.aliases:
            score = similarity(token, alias)
            if best is None or score > best.score:
                best = MatchResult(token=token, alias=alias, score=score)
        return best

    def best_match(self, token: str) -> Optional[MatchResult]:
        """
        Найкращий аліас, якщо його оцінка >= min_score.

        Args:
            token: Нормалізований токен

        Returns:
            MatchResult або None
        """
        best = self.best_alias(token)
        if best is None or best.score < self.min_score:
            return None
        return best
