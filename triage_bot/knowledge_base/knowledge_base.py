"""
Triage Bot - База симптомів

Завантаження кураторської бази симптомів (JSON) у структури пошуку:
- symptom_by_code: код -> SymptomDefinition
- codes_by_alias: нормалізований аліас -> коди (у порядку завантаження)
- all_aliases: всі нормалізовані аліаси у порядку завантаження

Формат файлу:
    {
      "symptoms": [
        {
          "code": "FEVER",
          "label": "Fever",
          "category": "general",
          "weight": 2.5,
          "redFlag": false,
          "aliases": ["fever", "feverish", "high temperature"]
        }
      ]
    }

Приклад:
    kb = KnowledgeBase.load("data/kb_v1.json")
    kb.codes_by_alias["high temperature"]   # ['FEVER']
    kb.symptom_by_code["FEVER"].weight      # 2.5
"""

import json
import math
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
from dataclasses import dataclass

from ..exceptions import KnowledgeBaseError
from ..nlp.text_preprocessor import normalize


logger = logging.getLogger(__name__)


DEFAULT_WEIGHT = 1.0
DEFAULT_RED_FLAG = False


@dataclass(frozen=True)
class SymptomDefinition:
    """Запис про симптом з бази"""
    code: str
    label: str
    category: str = ""
    weight: float = DEFAULT_WEIGHT
    red_flag: bool = DEFAULT_RED_FLAG
    aliases: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'code': self.code,
            'label': self.label,
            'category': self.category,
            'weight': self.weight,
            'redFlag': self.red_flag,
            'aliases': list(self.aliases),
        }


def _read_float(value: Any, fallback: float) -> float:
    """Число з JSON значення; некоректне або від'ємне -> fallback"""
    if isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        try:
            result = float(value.strip().replace(",", ""))
        except ValueError:
            return fallback
    else:
        return fallback

    if not math.isfinite(result) or result < 0:
        return fallback
    return result


def _read_bool(value: Any, fallback: bool) -> bool:
    """Булеве значення з JSON; некоректне -> fallback"""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return fallback


def _read_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


class KnowledgeBase:
    """
    База симптомів для витягування та скорингу.

    Один нормалізований аліас може належати кільком кодам.
    Після завантаження база тільки для читання.
    """

    def __init__(self):
        self.symptom_by_code: Dict[str, SymptomDefinition] = {}
        self.codes_by_alias: Dict[str, List[str]] = {}
        self.all_aliases: List[str] = []

    @classmethod
    def load(cls, path: Union[str, Path]) -> "KnowledgeBase":
        """
        Завантажити базу з JSON файлу.

        Args:
            path: Шлях до файлу бази

        Returns:
            KnowledgeBase

        Raises:
            KnowledgeBaseError: файл відсутній, не читається або не є JSON
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise KnowledgeBaseError(f"Knowledge base not found: {path}") from e
        except OSError as e:
            raise KnowledgeBaseError(f"Cannot read knowledge base {path}: {e}") from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise KnowledgeBaseError(f"Knowledge base {path} is not valid JSON: {e}") from e

        kb = cls.from_dict(data)
        logger.info(
            "Knowledge base loaded from %s: %d symptoms, %d aliases",
            path, len(kb.symptom_by_code), len(kb.all_aliases),
        )
        return kb

    @classmethod
    def from_dict(cls, data: Union[Dict[str, Any], List[Any]]) -> "KnowledgeBase":
        """
        Зібрати базу зі структури JSON.

        Приймає {"symptoms": [...]} або список записів на верхньому рівні.
        Записи без коду пропускаються.
        """
        if isinstance(data, dict):
            entries = data.get('symptoms', [])
        elif isinstance(data, list):
            entries = data
        else:
            entries = []

        kb = cls()
        for entry in entries or []:
            if not isinstance(entry, dict):
                continue
            definition = cls._parse_entry(entry)
            if definition is not None:
                kb.add_symptom(definition)
        return kb

    @staticmethod
    def _parse_entry(entry: Dict[str, Any]) -> Optional[SymptomDefinition]:
        code = _read_str(entry.get('code')).strip()
        if not code:
            logger.warning("Skipping knowledge base entry without code: %r", entry)
            return None

        raw_aliases = entry.get('aliases') or []
        if not isinstance(raw_aliases, list):
            raw_aliases = []
        aliases = tuple(a for a in raw_aliases if isinstance(a, str))

        return SymptomDefinition(
            code=code,
            label=_read_str(entry.get('label')) or code,
            category=_read_str(entry.get('category')),
            weight=_read_float(entry.get('weight'), DEFAULT_WEIGHT),
            red_flag=_read_bool(entry.get('redFlag'), DEFAULT_RED_FLAG),
            aliases=aliases,
        )

    def add_symptom(self, definition: SymptomDefinition) -> None:
        """Додати симптом та проіндексувати його аліаси"""
        if definition.code in self.symptom_by_code:
            logger.warning("Duplicate symptom code %s, later entry wins", definition.code)
        self.symptom_by_code[definition.code] = definition

        for alias in definition.aliases:
            alias_norm = normalize(alias)
            if not alias_norm:
                continue

            codes = self.codes_by_alias.setdefault(alias_norm, [])
            if definition.code not in codes:
                codes.append(definition.code)
            if alias_norm not in self.all_aliases:
                self.all_aliases.append(alias_norm)

    def get_symptom(self, code: str) -> Optional[SymptomDefinition]:
        return self.symptom_by_code.get(code)

    def codes_for(self, alias_norm: str) -> List[str]:
        """Коди, що володіють нормалізованим аліасом"""
        return list(self.codes_by_alias.get(alias_norm, []))

    @property
    def red_flag_codes(self) -> List[str]:
        return [code for code, s in self.symptom_by_code.items() if s.red_flag]

    def __len__(self) -> int:
        return len(self.symptom_by_code)

    def __contains__(self, code: str) -> bool:
        return code in self.symptom_by_code
