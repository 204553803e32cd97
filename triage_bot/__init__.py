"""
Triage Bot - Детермінований агент первинного сортування (triage)

Архітектура: нормалізація тексту + витягування симптомів + машина станів розмови + скоринг

Система не ставить діагнозів. Вона збирає скарги користувача у вільній формі,
співставляє їх з базою симптомів і видає рекомендацію щодо рівня звернення
за допомогою (911 / ER now / Doctor visit / Self-care).

Модулі:
- config: Конфігурація системи
- knowledge_base: База симптомів та аліасів
- nlp: Нормалізація, тривалість, severity, витягування симптомів
- conversation: Випадок (Case), сховище сесій, машина станів розмови
- triage: Скоринг та фінальне рішення
- storage: Збереження випадків (JSON / SQLite)
- schemas: Pydantic моделі для збереження
- api: REST API (FastAPI)
"""

__version__ = "0.1.0"

from .config import TriageBotConfig, get_default_config
