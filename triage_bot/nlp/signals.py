"""
Triage Bot - Сигнали розмови

Прості детектори над нормалізованим текстом, спільні для машини станів
розмови та скорингу:
- user_seems_done: користувач закінчив перелік симптомів
- is_unclear: повідомлення занадто незрозуміле
- is_greeting: привітання
- contains_any_token: наявність токена з набору
"""

from typing import Iterable

from .text_preprocessor import tokenize


DONE_PHRASES = (
    "that s it",
    "thats it",
    "that is it",
    "that's it",
    "that is all",
    "nothing else",
    "no more",
)

DEFAULT_FILLERS = ("idk", "help", "please", "uh", "umm", "yo", "hey")

DEFAULT_GREETINGS = (
    "hi", "hello", "hey", "hola", "greetings",
    "good morning", "good evening", "good afternoon",
)


def user_seems_done(norm: str) -> bool:
    """Чи вказує повідомлення, що користувач закінчив"""
    if norm == "done":
        return True
    return any(phrase in norm for phrase in DONE_PHRASES)


def is_unclear(
    norm: str,
    fillers: Iterable[str] = DEFAULT_FILLERS,
    min_word_length: int = 3,
    min_words: int = 2,
) -> bool:
    """
    Чи повідомлення занадто незрозуміле для продовження.

    Незрозуміле, якщо порожнє, є філером або містить менше ніж
    min_words слів довжиною >= min_word_length. "Готово"-повідомлення
    ніколи не вважаються незрозумілими.
    """
    if not norm:
        return True
    if user_seems_done(norm):
        return False
    if norm in set(fillers):
        return True

    real_words = sum(1 for token in tokenize(norm) if len(token) >= min_word_length)
    return real_words < min_words


def is_greeting(norm: str, greetings: Iterable[str] = DEFAULT_GREETINGS) -> bool:
    """Точне привітання або привітання як префікс ("hi there")"""
    if not norm:
        return False
    for greeting in greetings:
        if norm == greeting or norm.startswith(greeting + " "):
            return True
    return False


def contains_any_token(norm: str, tokens: Iterable[str]) -> bool:
    """Чи є серед токенів тексту хоча б один з набору"""
    wanted = set(tokens)
    return any(token in wanted for token in tokenize(norm))
