"""
Triage Bot - Symptom Extractor

Витягування кандидатів-симптомів з вільного тексту.

Два проходи:
1. Exact: кожна n-грама (1..4 слова) шукається у codes_by_alias,
   кожен код-власник отримує впевненість 1.0
2. Fuzzy (тільки якщо exact нічого не знайшов): для кожного токена
   довжиною >= 3 шукається найкращий аліас за нормалізованою
   редакційною відстанню; при оцінці >= 0.80 всі коди-власники
   отримують цю оцінку

Приклад:
    kb = KnowledgeBase.load("data/kb_v1.json")
    extractor = SymptomExtractor(kb)

    result = extractor.extract("I have chest pain and a fever")
    print(result.codes)        # ['CHEST_PAIN', 'FEVER']
    print(result.used_fuzzy)   # False

    result = extractor.extract("feverr")
    print(result.matches[0])   # SymptomMatch(code='FEVER', ..., score=0.83, method='fuzzy')
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from dataclasses import dataclass, field

from .text_preprocessor import normalize, tokenize, make_ngrams
from .fuzzy_matcher import FuzzyMatcher

if TYPE_CHECKING:
    from ..config import ExtractionConfig
    from ..knowledge_base import KnowledgeBase
    from ..conversation.case import Case


logger = logging.getLogger(__name__)


@dataclass
class SymptomMatch:
    """Одне співпадіння коду"""
    code: str
    matched_text: str      # Фраза або токен користувача
    alias: str             # Аліас з бази
    score: float           # Впевненість (0-1)
    method: str            # 'exact' | 'fuzzy'


@dataclass
class ExtractionResult:
    """Результат витягування симптомів з одного повідомлення"""
    normalized: str = ""
    matches: List[SymptomMatch] = field(default_factory=list)
    used_fuzzy: bool = False

    @property
    def codes(self) -> List[str]:
        """Унікальні коди у порядку знаходження"""
        seen = []
        for match in self.matches:
            if match.code not in seen:
                seen.append(match.code)
        return seen

    def best_scores(self) -> Dict[str, float]:
        """Максимальна впевненість для кожного коду"""
        scores: Dict[str, float] = {}
        for match in self.matches:
            if match.score > scores.get(match.code, 0.0):
                scores[match.code] = match.score
        return scores

    def to_dict(self) -> Dict[str, Any]:
        return {
            'normalized': self.normalized,
            'used_fuzzy': self.used_fuzzy,
            'matches': [
                {
                    'code': m.code,
                    'matched_text': m.matched_text,
                    'alias': m.alias,
                    'score': m.score,
                    'method': m.method,
                }
                for m in self.matches
            ],
        }


class SymptomExtractor:
    """
    Екстрактор кандидатів-симптомів з тексту.

    Приклад:
        extractor = SymptomExtractor(kb, max_ngram=4, fuzzy_min_score=0.8)
        extractor.update_case(case, "my chest feels tight, chest pain")
    """

    def __init__(
        self,
        knowledge_base: "KnowledgeBase",
        max_ngram: int = 4,
        fuzzy_min_score: float = 0.80,
        fuzzy_min_token_length: int = 3,
    ):
        """
        Args:
            knowledge_base: База симптомів
            max_ngram: Максимальна довжина фрази (слів)
            fuzzy_min_score: Мінімальна оцінка нечіткого співпадіння
            fuzzy_min_token_length: Мінімальна довжина токена для fuzzy
        """
        self.kb = knowledge_base
        self.max_ngram = max_ngram
        self.fuzzy_min_token_length = fuzzy_min_token_length
        self.matcher = FuzzyMatcher(knowledge_base.all_aliases, min_score=fuzzy_min_score)

    @classmethod
    def from_config(
        cls,
        knowledge_base: "KnowledgeBase",
        config: Optional["ExtractionConfig"] = None,
    ) -> "SymptomExtractor":
        """Створити екстрактор з ExtractionConfig"""
        if config is None:
            return cls(knowledge_base)
        return cls(
            knowledge_base,
            max_ngram=config.max_ngram,
            fuzzy_min_score=config.fuzzy_min_score,
            fuzzy_min_token_length=config.fuzzy_min_token_length,
        )

    def extract(self, text: Optional[str]) -> ExtractionResult:
        """
        Витягнути кандидатів з тексту.

        Args:
            text: Сирий текст користувача

        Returns:
            ExtractionResult (порожній для порожнього тексту)
        """
        norm = normalize(text)
        result = ExtractionResult(normalized=norm)
        if not norm:
            return result

        # Pass 1: exact
        for phrase in make_ngrams(norm, self.max_ngram):
            for code in self.kb.codes_by_alias.get(phrase, []):
                result.matches.append(SymptomMatch(
                    code=code,
                    matched_text=phrase,
                    alias=phrase,
                    score=1.0,
                    method='exact',
                ))
                logger.debug("Exact alias hit %r -> %s", phrase, code)

        if result.matches:
            return result

        # Pass 2: fuzzy
        result.used_fuzzy = True
        for token in tokenize(norm):
            if len(token) < self.fuzzy_min_token_length:
                continue
            hit = self.matcher.best_match(token)
            if hit is None:
                continue
            for code in self.kb.codes_by_alias.get(hit.alias, []):
                result.matches.append(SymptomMatch(
                    code=code,
                    matched_text=token,
                    alias=hit.alias,
                    score=hit.score,
                    method='fuzzy',
                ))
                logger.debug(
                    "Fuzzy token %r matched alias %r score=%.3f -> %s",
                    token, hit.alias, hit.score, code,
                )

        return result

    def update_case(self, case: "Case", text: Optional[str]) -> ExtractionResult:
        """
        Витягнути кандидатів і підняти їх впевненість у випадку.

        Впевненість коду у випадку тільки зростає (максимум за сесію).
        """
        result = self.extract(text)
        for match in result.matches:
            case.bump_candidate(match.code, match.score)
        return result
