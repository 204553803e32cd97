"""
Triage Bot - Triage модуль

Скоринг накопиченого випадку та фінальна рекомендація.

Приклад використання:
    from triage_bot.triage import TriageScorer, triage_summary

    scorer = TriageScorer(kb)
    if scorer.maybe_triage(case, norm):
        print(triage_summary(case))
"""

from .scoring import (
    TriageScorer,
    TriageResult,
    TriageLevel,
    format_confidence_reason,
    NOSEBLEED_REASON,
    NO_SIGNIFICANT_REASON,
)

from .summary import triage_summary, LOCKED_FOOTER


__all__ = [
    # Scoring
    'TriageScorer',
    'TriageResult',
    'TriageLevel',
    'format_confidence_reason',
    'NOSEBLEED_REASON',
    'NO_SIGNIFICANT_REASON',

    # Summary
    'triage_summary',
    'LOCKED_FOOTER',
]
