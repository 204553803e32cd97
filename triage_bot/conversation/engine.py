"""
Triage Bot - Машина станів розмови

ConversationEngine обробляє кожне повідомлення користувача:
1. Знаходить/створює стан сесії та активний випадок
2. Записує повідомлення та витягує кандидатів-симптомів
3. Вирішує відповідь і перехід режиму
4. Запускає triage, коли зібрано достатньо інформації
5. Зберігає випадок у репозиторій

Режими: OPENING -> CLARIFYING <-> GATHER_INFO -> COLLECT_MORE -> READY
Заблокований випадок (locked) лишається незмінним.

Приклад:
    engine = ConversationEngine(kb, SessionStore(), boot_id="run-1")

    reply = engine.handle("web-1", "I have a fever")
    print(reply.text)      # "... How long has this been going on? ..."
    print(reply.options)   # ['30 minutes', '2 hours', '3 days', '2 weeks']

    engine.handle("web-1", "2 hours")
    reply = engine.handle("web-1", "moderate")
    print(reply.triage_level)   # 'Doctor visit recommended'
"""

import uuid
import zlib
import logging
from typing import TYPE_CHECKING, List, Optional

from .case import Case, ConversationMode, ConversationState, PromptKind
from .reply import BotReply
from .session_store import SessionStore
from .slots import fill_slots
from ..config import TriageBotConfig, get_default_config
from ..nlp import (
    SymptomExtractor,
    normalize,
    parse_duration,
    extract_severity,
    user_seems_done,
    is_unclear,
    is_greeting,
)
from ..triage import TriageScorer, triage_summary

if TYPE_CHECKING:
    from ..knowledge_base import KnowledgeBase
    from ..storage import CaseRepository


logger = logging.getLogger(__name__)


# =============================================================================
# Тексти відповідей
# =============================================================================

ACKS = [
    "Got it. I can help you sort this out.",
    "Okay. Let's walk through it step by step.",
    "Thanks. I'll keep it simple and ask one thing at a time.",
]

EMPTY_INPUT_TEXT = (
    "Type what's going on (you can list symptoms like: \"fever, cough, sore throat\")."
)
GREET_TEXT = (
    "Hi again! I'm here to help, but I need symptoms to guide you. "
    "Describe what you're feeling (for example: \"chest tightness for 90 minutes, moderate\")."
)
CLARIFY_FIRST_TEXT = "I didn't fully understand. Tell me a few symptoms or what feels worst right now."
CLARIFY_TEXT = "I'm not fully sure I understood. Tell me the key symptoms and when they started."
CLARIFY_ALTERNATE_TEXT = "Can you share a couple symptoms and roughly how long they've been going on?"
CLARIFY_FORMAT_TEXT = (
    "I'm still having trouble. Tell me the main symptoms and how long they've been happening."
)
ASK_DURATION_TEXT = (
    "How long has this been going on? You can answer with minutes, hours, days, or weeks "
    "(examples: \"45 minutes\", \"2 hours\", \"3 days\")."
)
ASK_SEVERITY_TEXT = "Overall, how bad is it right now?"
LIST_MORE_TEXT = "Got it. List any other symptoms you're noticing (even if they seem minor)."
COLLECT_MORE_TEXT = "Got it. Anything else you're noticing?"


def pick_ack(case_id: str) -> str:
    """Детермінований вибір фрази-підтвердження за case_id"""
    return ACKS[zlib.crc32(case_id.encode("utf-8")) % len(ACKS)]


def _with_prefix(prefix: str, text: str) -> str:
    return f"{prefix} {text}" if prefix else text


class ConversationEngine:
    """
    Машина станів розмови.

    Один хід розмови виконується під замком сесії, тому повідомлення
    однієї сесії обробляються послідовно.
    """

    def __init__(
        self,
        knowledge_base: "KnowledgeBase",
        session_store: Optional[SessionStore] = None,
        boot_id: Optional[str] = None,
        repository: Optional["CaseRepository"] = None,
        config: Optional[TriageBotConfig] = None,
    ):
        """
        Args:
            knowledge_base: База симптомів
            session_store: Сховище сесій (нове, якщо не передано)
            boot_id: Ідентифікатор запуску процесу
            repository: Сховище випадків (None = без збереження)
            config: Конфігурація системи
        """
        self.config = config or get_default_config()
        self.kb = knowledge_base
        self.sessions = session_store if session_store is not None else SessionStore()
        self.boot_id = boot_id or str(uuid.uuid4())
        self.repository = repository

        self.extractor = SymptomExtractor.from_config(knowledge_base, self.config.extraction)
        self.scorer = TriageScorer(knowledge_base, self.config.triage)

    # =========================================================================
    # Вхідна точка
    # =========================================================================

    def handle(self, session_id: str, text: Optional[str]) -> BotReply:
        """
        Обробити одне повідомлення користувача.

        Args:
            session_id: Ключ сесії
            text: Текст повідомлення (None = порожнє)

        Returns:
            BotReply
        """
        with self.sessions.session(session_id) as state:
            case = self._ensure_case(state)

            text = (text or "").strip()
            if not text:
                return BotReply.for_case(EMPTY_INPUT_TEXT, case)

            if case.locked:
                return BotReply.for_case(triage_summary(case), case)

            case.add_note(text)
            self.extractor.update_case(case, text)

            reply = self._build_reply(case, text)
            self._persist(case, session_id)
            return reply

    def _ensure_case(self, state: ConversationState) -> Case:
        """Новий випадок при новому запуску процесу або відсутності випадку"""
        if state.boot_seen != self.boot_id or state.active_case is None:
            old = state.active_case
            if old is not None and old.has_notes:
                self._persist(old, state.session_id)

            state.boot_seen = self.boot_id
            state.active_case = Case()
            logger.info(
                "New case %s started for session %s",
                state.active_case.case_id, state.session_id,
            )
        return state.active_case

    # =========================================================================
    # Логіка розмови
    # =========================================================================

    def _build_reply(self, case: Case, text: str) -> BotReply:
        slots = self.config.slots
        norm = normalize(text)

        duration_attempt = parse_duration(norm)
        severity_attempt = extract_severity(norm)
        answering_duration = (
            case.last_prompt == PromptKind.ASK_DURATION and duration_attempt is not None
        )
        answering_severity = (
            case.last_prompt == PromptKind.ASK_SEVERITY and bool(severity_attempt)
        )

        unclear = is_unclear(
            norm,
            fillers=slots.filler_messages,
            min_word_length=slots.min_real_word_length,
            min_words=slots.min_real_words,
        )
        if answering_duration or answering_severity:
            unclear = False

        # 1) Перше повідомлення
        if case.user_message_count() == 1:
            case.unclear_count = 0
            ack = pick_ack(case.case_id)

            if is_greeting(norm, slots.greetings):
                return self._reply(case, PromptKind.GREET, GREET_TEXT)

            if unclear:
                case.mode = ConversationMode.CLARIFYING
                return self._reply(
                    case, PromptKind.CLARIFY_FIRST, _with_prefix(ack, CLARIFY_FIRST_TEXT)
                )

            case.mode = ConversationMode.GATHER_INFO
            fill_slots(case, norm, slots)
            return self._ask_next_missing(case, ack)

        # 2) Незрозуміле повідомлення
        if unclear:
            case.mode = ConversationMode.CLARIFYING
            case.unclear_count += 1

            if case.unclear_count >= slots.max_unclear_turns:
                return self._reply(case, PromptKind.CLARIFY_FORMAT, CLARIFY_FORMAT_TEXT)
            if case.last_prompt == PromptKind.CLARIFY:
                return self._reply(case, PromptKind.CLARIFY_ALTERNATE, CLARIFY_ALTERNATE_TEXT)
            return self._reply(case, PromptKind.CLARIFY, CLARIFY_TEXT)

        # 3) Уточнення спрацювало
        if case.mode == ConversationMode.CLARIFYING:
            case.mode = ConversationMode.GATHER_INFO
            case.unclear_count = 0

        # 4) Слоти з будь-якого зрозумілого повідомлення
        fill_slots(case, norm, slots)

        # 5) Питаємо по одному відсутньому слоту
        if not case.has_duration or not case.has_severity:
            case.mode = ConversationMode.GATHER_INFO
            return self._ask_next_missing(case, "")

        # 6) Збираємо ще симптоми, поки не готово до triage
        case.mode = ConversationMode.COLLECT_MORE

        if self.scorer.maybe_triage(case, norm) is not None:
            return BotReply.for_case(triage_summary(case), case)

        if user_seems_done(norm):
            case.mode = ConversationMode.READY
            return BotReply.for_case(self._interim_recap(case), case)

        return self._reply(case, PromptKind.COLLECT_MORE, COLLECT_MORE_TEXT)

    def _ask_next_missing(self, case: Case, ack: str) -> BotReply:
        """Запитати тривалість, потім severity, інакше попросити ще симптоми"""
        slots = self.config.slots

        if not case.has_duration:
            return self._reply(
                case, PromptKind.ASK_DURATION,
                _with_prefix(ack, ASK_DURATION_TEXT),
                options=slots.duration_options,
            )

        if not case.has_severity:
            return self._reply(
                case, PromptKind.ASK_SEVERITY,
                _with_prefix(ack, ASK_SEVERITY_TEXT),
                options=slots.severity_options,
            )

        return self._reply(case, PromptKind.COLLECT_MORE, _with_prefix(ack, LIST_MORE_TEXT))

    @staticmethod
    def _prompt(case: Case, kind: PromptKind, text: str) -> str:
        """Запам'ятати тип запитання у випадку; текст повертається без змін"""
        case.last_prompt = kind
        return text

    def _reply(
        self,
        case: Case,
        kind: PromptKind,
        text: str,
        options: Optional[List[str]] = None,
    ) -> BotReply:
        return BotReply.for_case(self._prompt(case, kind, text), case, options)

    @staticmethod
    def _interim_recap(case: Case) -> str:
        return (
            "Alright. Here's what I have so far:\n"
            f"- Duration: {case.duration}\n"
            f"- Severity: {case.severity}\n"
            f"- Notes count: {len(case.notes)}\n\n"
        )

    # =========================================================================
    # Збереження
    # =========================================================================

    def _persist(self, case: Case, session_id: str) -> None:
        """Зберегти випадок; збій сховища логується і не пробрасується"""
        if self.repository is None or not case.has_notes:
            return
        try:
            self.repository.save_case(case, session_id)
        except Exception:
            logger.exception("Failed to persist case %s for session %s", case.case_id, session_id)

    def flush_all(self) -> int:
        """
        Зберегти всі активні випадки з повідомленнями (при завершенні роботи).

        Returns:
            Кількість збережених випадків
        """
        saved = 0
        for session_id, _ in self.sessions.items():
            with self.sessions.session(session_id) as state:
                case = state.active_case
                if case is None or not case.has_notes:
                    continue
                self._persist(case, session_id)
                saved += 1
        logger.info("Flushed %d active case(s)", saved)
        return saved

    def end_session(self, session_id: str) -> bool:
        """Забути сесію (випадок вже збережено під час ходу)"""
        return self.sessions.discard(session_id)

    def get_case(self, session_id: str) -> Optional[Case]:
        """Активний випадок сесії (None якщо сесії немає)"""
        state = self.sessions.get(session_id)
        return state.active_case if state is not None else None
