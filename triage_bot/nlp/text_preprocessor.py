"""
Triage Bot - Text Preprocessor

Нормалізація тексту перед витягуванням симптомів, тривалості та severity.

Правила нормалізації:
- Lowercase
- Всі символи поза [a-z0-9 пробіл] замінюються на пробіл
- Послідовності пробілів схлопуються в один
- Обрізка країв

Нормалізація тотальна (будь-який рядок, включно з None), детермінована
та ідемпотентна: normalize(normalize(x)) == normalize(x).

Приклад:
    normalize("Chest-pain!!  for 2 HOURS")   # "chest pain for 2 hours"
    tokenize("chest pain for 2 hours")       # ['chest', 'pain', 'for', '2', 'hours']
    make_ngrams("bad chest pain", 2)
    # ['bad', 'bad chest', 'chest', 'chest pain', 'pain']
"""

import re
from typing import List, Optional


_NON_ALNUM = re.compile(r'[^a-z0-9\s]')
_WHITESPACE = re.compile(r'\s+')


def normalize(text: Optional[str]) -> str:
    """
    Нормалізувати текст користувача.

    Args:
        text: Сирий текст (None трактується як порожній рядок)

    Returns:
        Нормалізований рядок
    """
    if not text:
        return ""

    text = text.lower()
    text = _NON_ALNUM.sub(' ', text)
    text = _WHITESPACE.sub(' ', text)

    return text.strip()


def tokenize(norm: str) -> List[str]:
    """Розбити нормалізований текст на токени (порожній текст -> [])"""
    if not norm:
        return []
    return norm.split(' ')


def make_ngrams(norm: str, max_words: int = 4) -> List[str]:
    """
    Всі суміжні n-грами довжиною 1..max_words.

    Порядок: за початковою позицією, потім за довжиною.

    Args:
        norm: Нормалізований текст
        max_words: Максимальна кількість слів у фразі

    Returns:
        Список фраз
    """
    words = tokenize(norm)
    ngrams = []

    for i in range(len(words)):
        for length in range(1, max_words + 1):
            if i + length > len(words):
                break
            ngrams.append(' '.join(words[i:i + length]))

    return ngrams
