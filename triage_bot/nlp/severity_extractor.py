"""Triage Bot - Severity Extractor"""

from typing import List, Tuple


# (підрядок, рівень), перевіряються по порядку
SEVERITY_KEYWORDS: List[Tuple[str, str]] = [
    ("mild", "mild"),
    ("moderate", "moderate"),
    ("severe", "severe"),
    ("really bad", "severe"),
]


def extract_severity(norm: str) -> str:
    """
    Витягнути рівень severity з нормалізованого тексту.

    Returns:
        "mild" | "moderate" | "severe" або "" якщо не знайдено
    """
    for keyword, level in SEVERITY_KEYWORDS:
        if keyword in norm:
            return level
    return ""
