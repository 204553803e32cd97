"""Triage Bot - База симптомів"""
from .knowledge_base import (
    KnowledgeBase,
    SymptomDefinition,
    DEFAULT_WEIGHT,
    DEFAULT_RED_FLAG,
)

__all__ = [
    "KnowledgeBase",
    "SymptomDefinition",
    "DEFAULT_WEIGHT",
    "DEFAULT_RED_FLAG",
]
