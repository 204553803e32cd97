"""
Triage Bot - Розмова

Компоненти:
- Case: Стан одного triage-випадку
- SessionStore: Стани сесій з замком на кожну сесію
- ConversationEngine: Машина станів розмови
- BotReply: Відповідь бота

Приклад використання:
    from triage_bot.conversation import ConversationEngine, SessionStore

    engine = ConversationEngine(kb, SessionStore(), repository=repo)
    reply = engine.handle("web-1", "chest tightness for 90 minutes, moderate")
    print(reply.to_dict())
"""

from .case import (
    Case,
    ConversationMode,
    ConversationState,
    PromptKind,
    UNSET_MINUTES,
    now_ms,
)

from .session_store import SessionStore

from .slots import (
    should_update_duration,
    should_update_severity,
    fill_slots,
)

from .reply import BotReply

from .engine import ConversationEngine, pick_ack, ACKS


__all__ = [
    # Case
    'Case',
    'ConversationMode',
    'ConversationState',
    'PromptKind',
    'UNSET_MINUTES',
    'now_ms',

    # Sessions
    'SessionStore',

    # Slots
    'should_update_duration',
    'should_update_severity',
    'fill_slots',

    # Engine
    'BotReply',
    'ConversationEngine',
    'pick_ack',
    'ACKS',
]
