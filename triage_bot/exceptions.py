"""
Triage Bot - Винятки

Винятки використовуються тільки для справжніх збоїв (база симптомів,
сховище). Незрозумілий ввід, відсутні слоти чи відсутність red flags
моделюються станом, а не винятками.
"""


class TriageBotError(Exception):
    """Базовий виняток пакету"""


class KnowledgeBaseError(TriageBotError):
    """Базу симптомів неможливо завантажити (фатально при старті)"""


class StorageError(TriageBotError):
    """Збій сховища випадків"""
