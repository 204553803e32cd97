"""
Triage Bot - Скоринг triage

Обчислення рівня звернення за допомогою з накопиченого випадку.

Формула:
    score = base * severity_mult * duration_mult + severity_boost + duration_boost
    base  = сума weight * confidence по відомих кандидатах

Рішення (по пріоритету):
1. Є red flag (впевненість >= 0.60)        -> "911" @ 0.92
2. Носова кровотеча >= 2 години             -> "911" (severe) / "ER now" @ 0.90
3. score >= 8                               -> "ER now"
4. score >= 4                               -> "Doctor visit recommended"
5. інакше                                   -> "Self-care / monitor"

Приклад:
    scorer = TriageScorer(kb)
    result = scorer.maybe_triage(case, norm)
    if result:
        print(result.level, result.confidence)
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from dataclasses import dataclass, field
from enum import Enum

from ..config import TriageConfig
from ..nlp import user_seems_done

if TYPE_CHECKING:
    from ..knowledge_base import KnowledgeBase
    from ..conversation.case import Case


logger = logging.getLogger(__name__)


class TriageLevel(str, Enum):
    """Рівень рекомендації"""
    EMERGENCY = "911"
    ER_NOW = "ER now"
    DOCTOR_VISIT = "Doctor visit recommended"
    SELF_CARE = "Self-care / monitor"


NOSEBLEED_REASON = "Nosebleed lasting 2+ hours"
NO_SIGNIFICANT_REASON = "No significant symptoms detected yet"


@dataclass
class TriageResult:
    """Результат triage"""
    level: str
    confidence: float
    reasons: List[str] = field(default_factory=list)
    red_flags: List[str] = field(default_factory=list)
    score: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'level': self.level,
            'confidence': self.confidence,
            'reasons': list(self.reasons),
            'red_flags': list(self.red_flags),
            'score': self.score,
        }


def format_confidence_reason(label: str, confidence: float) -> str:
    """Причина виду "<label> (conf NN%)" """
    return f"{label} (conf {confidence * 100:.0f}%)"


class TriageScorer:
    """
    Детермінований скоринг випадку.

    Всі пороги, множники та бусти беруться з TriageConfig.
    """

    def __init__(
        self,
        knowledge_base: "KnowledgeBase",
        config: Optional[TriageConfig] = None,
    ):
        """
        Args:
            knowledge_base: База симптомів (ваги, red flags)
            config: Параметри скорингу
        """
        self.kb = knowledge_base
        self.config = config or TriageConfig()

    # =========================================================================
    # Множники та бусти
    # =========================================================================

    def severity_multiplier(self, severity: str) -> float:
        return self.config.severity_multipliers.get(severity, 1.0)

    def severity_boost(self, severity: str) -> float:
        return self.config.severity_boosts.get(severity, 0.0)

    def duration_multiplier(self, duration: str, minutes: float) -> float:
        """Множник з хвилин, а якщо їх немає, з текстової мітки"""
        if minutes > 0:
            for upper, multiplier in self.config.duration_multiplier_steps:
                if minutes <= upper:
                    return multiplier
            return self.config.duration_multiplier_max

        label = (duration or "").lower()
        for phrase, multiplier in self.config.duration_bucket_multipliers:
            if phrase in label:
                return multiplier
        return 1.0

    def duration_boost(self, minutes: float) -> float:
        if minutes <= 0:
            return 0.0
        for lower, boost in self.config.duration_boost_steps:
            if minutes >= lower:
                return boost
        return 0.0

    def is_prolonged(self, duration: str, minutes: float) -> bool:
        if minutes >= self.config.prolonged_minutes:
            return True
        label = (duration or "").lower()
        return "day" in label or "week" in label or "today" in label

    # =========================================================================
    # Рішення
    # =========================================================================

    def is_ready(self, case: "Case", norm: str) -> bool:
        """Чи виконані передумови для triage"""
        if case.triage_complete:
            return False
        if not case.candidate_confidence_by_code:
            return False
        if not case.has_duration or not case.has_severity:
            return False
        return user_seems_done(norm) or len(case.notes) >= self.config.ready_after_notes

    def evaluate(self, case: "Case") -> TriageResult:
        """
        Обчислити результат triage для випадку (без змін у випадку).

        Невідомі коди кандидатів пропускаються.
        """
        cfg = self.config
        severity = case.severity
        minutes = case.duration_minutes

        sev_mult = self.severity_multiplier(severity)
        dur_mult = self.duration_multiplier(case.duration, minutes)
        sev_boost = self.severity_boost(severity)
        dur_boost = self.duration_boost(minutes)

        red_flags: List[str] = []
        reasons: List[str] = []
        base_score = 0.0
        has_nosebleed = False

        for code, confidence in case.candidate_confidence_by_code.items():
            symptom = self.kb.symptom_by_code.get(code)
            if symptom is None:
                logger.debug("Skipping unknown symptom code %s", code)
                continue

            weighted = symptom.weight * confidence
            base_score += weighted
            logger.debug(
                "Scoring %s (%s): weight=%.2f conf=%.3f weighted=%.3f",
                symptom.code, symptom.label, symptom.weight, confidence, weighted,
            )

            if symptom.red_flag and confidence >= cfg.red_flag_threshold:
                reason = format_confidence_reason(symptom.label, confidence)
                red_flags.append(reason)
                reasons.append(reason)
            elif confidence >= cfg.reason_threshold:
                reasons.append(format_confidence_reason(symptom.label, confidence))

            if symptom.code == cfg.nosebleed_code and confidence >= cfg.nosebleed_threshold:
                has_nosebleed = True

        score = base_score * sev_mult * dur_mult + sev_boost + dur_boost
        prolonged_nosebleed = has_nosebleed and minutes >= cfg.prolonged_minutes

        if severity in ("severe", "moderate"):
            reasons.append(f"Reported severity: {severity}")

        if case.has_duration and self.is_prolonged(case.duration, minutes):
            reasons.append(f"Symptoms ongoing for {case.duration}")

        if red_flags:
            level = TriageLevel.EMERGENCY
            confidence = cfg.red_flag_confidence
            logger.info("Red-flag escalation: %s", red_flags)
        elif prolonged_nosebleed:
            level = TriageLevel.EMERGENCY if severity == "severe" else TriageLevel.ER_NOW
            confidence = cfg.nosebleed_confidence
            reasons.append(NOSEBLEED_REASON)
            logger.info("Prolonged nosebleed escalation (severity=%s)", severity or "unknown")
        elif score >= cfg.er_score_threshold:
            level = TriageLevel.ER_NOW
            confidence = min(1.0, cfg.er_confidence_base + score / cfg.er_confidence_divisor)
            logger.info("High score path: score=%.3f", score)
        elif score >= cfg.doctor_score_threshold:
            level = TriageLevel.DOCTOR_VISIT
            confidence = min(1.0, cfg.doctor_confidence_base + score / cfg.doctor_confidence_divisor)
            logger.info("Moderate score path: score=%.3f", score)
        else:
            level = TriageLevel.SELF_CARE
            confidence = min(1.0, cfg.self_care_confidence_base + score / cfg.self_care_confidence_divisor)
            if not reasons:
                reasons.append(NO_SIGNIFICANT_REASON)
            logger.info("Low score path: score=%.3f", score)

        return TriageResult(
            level=level.value,
            confidence=confidence,
            reasons=reasons,
            red_flags=red_flags,
            score=score,
        )

    def maybe_triage(self, case: "Case", norm: str) -> Optional[TriageResult]:
        """
        Виконати triage, якщо випадок готовий, і заблокувати його.

        Args:
            case: Випадок
            norm: Нормалізований текст поточного повідомлення

        Returns:
            TriageResult або None, якщо передумови не виконані.
            Для вже завершеного випадку повертається збережений результат.
        """
        if case.triage_complete:
            return self.stored_result(case)
        if not self.is_ready(case, norm):
            return None

        result = self.evaluate(case)
        case.record_triage(
            level=result.level,
            confidence=result.confidence,
            reasons=result.reasons,
            red_flags=result.red_flags,
        )
        logger.info(
            "Case %s triaged: %s (confidence %.2f)",
            case.case_id, result.level, result.confidence,
        )
        return result

    @staticmethod
    def stored_result(case: "Case") -> TriageResult:
        return TriageResult(
            level=case.triage_level,
            confidence=case.triage_confidence,
            reasons=list(case.triage_reasons),
            red_flags=list(case.triage_red_flags),
        )
