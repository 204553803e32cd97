"""Triage Bot - Модуль конфігурації"""
from .settings import (
    TriageBotConfig,
    get_default_config,
    ExtractionConfig,
    SlotConfig,
    TriageConfig,
    StorageConfig,
    StorageBackend,
)
from .loader import save_config, load_config, save_yaml, load_yaml

__all__ = [
    "TriageBotConfig",
    "get_default_config",
    "ExtractionConfig",
    "SlotConfig",
    "TriageConfig",
    "StorageConfig",
    "StorageBackend",
    "save_config",
    "load_config",
    "save_yaml",
    "load_yaml",
]
