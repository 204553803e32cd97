"""
Triage Bot - Налаштування системи

Всі параметри системи зібрані в dataclass-и для:
- Типізації
- Легкого доступу через config.triage.red_flag_threshold
- Серіалізації в YAML
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List
from enum import Enum


# =============================================================================
# ENUMS
# =============================================================================

class StorageBackend(str, Enum):
    """Бекенд збереження випадків"""
    JSON = "json"
    SQLITE = "sqlite"
    NONE = "none"


# =============================================================================
# EXTRACTION CONFIGURATION
# =============================================================================

@dataclass
class ExtractionConfig:
    """Параметри витягування симптомів"""

    # Максимальна довжина n-грами (слів)
    max_ngram: int = 4

    # Fuzzy прохід
    fuzzy_min_score: float = 0.80
    fuzzy_min_token_length: int = 3


# =============================================================================
# SLOT / CONVERSATION CONFIGURATION
# =============================================================================

@dataclass
class SlotConfig:
    """Параметри заповнення слотів (duration / severity) та розмови"""

    # Токени, що вказують на часовий контекст
    duration_context_tokens: List[str] = field(default_factory=lambda: [
        "for", "since", "past", "last", "lasting", "started", "been",
    ])

    # Токени самовиправлення користувача
    correction_tokens: List[str] = field(default_factory=lambda: [
        "actually", "just", "only",
    ])

    # Незрозумілі повідомлення
    filler_messages: List[str] = field(default_factory=lambda: [
        "idk", "help", "please", "uh", "umm", "yo", "hey",
    ])
    min_real_word_length: int = 3
    min_real_words: int = 2

    # Після скількох незрозумілих повідомлень поспіль даємо формат відповіді
    max_unclear_turns: int = 3

    greetings: List[str] = field(default_factory=lambda: [
        "hi", "hello", "hey", "hola", "greetings",
        "good morning", "good evening", "good afternoon",
    ])

    # Quick replies для UI
    duration_options: List[str] = field(default_factory=lambda: [
        "30 minutes", "2 hours", "3 days", "2 weeks",
    ])
    severity_options: List[str] = field(default_factory=lambda: [
        "mild", "moderate", "severe",
    ])


# =============================================================================
# TRIAGE CONFIGURATION
# =============================================================================

@dataclass
class TriageConfig:
    """
    Параметри скорингу.

    Пороги впевненості винесені сюди, щоб їх можна було налаштовувати
    без змін у логіці рішення.
    """

    # Пороги впевненості кандидата
    red_flag_threshold: float = 0.60
    reason_threshold: float = 0.40

    # Носова кровотеча
    nosebleed_code: str = "NOSEBLEED"
    nosebleed_threshold: float = 0.50
    prolonged_minutes: float = 120.0

    # Готовність: скільки повідомлень достатньо без явного "that's it"
    ready_after_notes: int = 3

    # Множники та бусти severity
    severity_multipliers: Dict[str, float] = field(default_factory=lambda: {
        "moderate": 1.30,
        "severe": 1.70,
    })
    severity_boosts: Dict[str, float] = field(default_factory=lambda: {
        "severe": 1.2,
        "moderate": 0.5,
    })

    # [верхня межа хвилин, множник], перевіряються по порядку
    duration_multiplier_steps: List[List[float]] = field(default_factory=lambda: [
        [30, 1.00],
        [120, 1.15],
        [360, 1.30],
        [1440, 1.45],
        [4320, 1.60],
    ])
    duration_multiplier_max: float = 1.75

    # [фраза в мітці, множник] для тривалості без хвилин
    duration_bucket_multipliers: List[List[Any]] = field(default_factory=lambda: [
        ["today", 1.20],
        ["1-2 days", 1.15],
        ["1 2 days", 1.15],
        ["yesterday", 1.15],
        ["3-7 days", 1.30],
        ["3 7 days", 1.30],
        ["1-2 weeks", 1.45],
        ["1 2 weeks", 1.45],
        ["2+ weeks", 1.60],
        ["2 weeks", 1.60],
    ])

    # [нижня межа хвилин, буст], від більшої до меншої
    duration_boost_steps: List[List[float]] = field(default_factory=lambda: [
        [1440, 1.6],
        [360, 1.2],
        [120, 0.8],
    ])

    # Рівні
    er_score_threshold: float = 8.0
    doctor_score_threshold: float = 4.0

    # Впевненість рішення
    red_flag_confidence: float = 0.92
    nosebleed_confidence: float = 0.90
    er_confidence_base: float = 0.70
    er_confidence_divisor: float = 15.0
    doctor_confidence_base: float = 0.60
    doctor_confidence_divisor: float = 12.0
    self_care_confidence_base: float = 0.50
    self_care_confidence_divisor: float = 10.0


# =============================================================================
# STORAGE CONFIGURATION
# =============================================================================

@dataclass
class StorageConfig:
    """Параметри збереження випадків"""
    backend: StorageBackend = StorageBackend.JSON
    cases_dir: str = "data/cases"
    sqlite_path: str = "data/cases.db"


# =============================================================================
# MAIN CONFIGURATION
# =============================================================================

@dataclass
class TriageBotConfig:
    """
    Головна конфігурація Triage Bot

    Приклад використання:
        config = TriageBotConfig()
        print(config.triage.red_flag_threshold)  # 0.6
        print(config.extraction.max_ngram)       # 4
    """

    # Метадані
    version: str = "1.0.0"
    project_name: str = "Triage Bot"

    # База симптомів
    knowledge_base_path: str = "data/kb_v1.json"

    # Компоненти
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    slots: SlotConfig = field(default_factory=SlotConfig)
    triage: TriageConfig = field(default_factory=TriageConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TriageBotConfig":
        """Зібрати конфігурацію з вкладеного словника (напр. з YAML)"""
        data = dict(data or {})
        storage = dict(data.pop("storage", {}) or {})
        if "backend" in storage:
            storage["backend"] = StorageBackend(storage["backend"])

        return cls(
            extraction=ExtractionConfig(**(data.pop("extraction", {}) or {})),
            slots=SlotConfig(**(data.pop("slots", {}) or {})),
            triage=TriageConfig(**(data.pop("triage", {}) or {})),
            storage=StorageConfig(**storage),
            **data,
        )


# =============================================================================
# DEFAULT CONFIG INSTANCE
# =============================================================================

def get_default_config() -> TriageBotConfig:
    """Отримати конфігурацію за замовчуванням"""
    return TriageBotConfig()
