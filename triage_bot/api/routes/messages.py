"""
Triage Bot - Message Routes

Один endpoint розмови: повідомлення користувача -> відповідь бота.
"""

import logging

from fastapi import APIRouter, Depends

from ..dependencies import get_engine
from ..models import MessageRequest, BotMessageResponse
from ...conversation import ConversationEngine, now_ms

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["Messages"])


@router.post(
    "/message",
    response_model=BotMessageResponse,
    response_model_exclude_none=True,
)
def post_message(
    message: MessageRequest,
    engine: ConversationEngine = Depends(get_engine),
):
    """
    Надіслати повідомлення боту.

    Порожній sessionId замінюється на anon-<epoch ms>; така сесія
    одноразова і забувається одразу після відповіді.
    Після завершення triage відповідь містить рівень, впевненість,
    red flags та причини.
    """
    session_id = (message.session_id or "").strip()
    anonymous = not session_id
    if anonymous:
        session_id = f"anon-{now_ms()}"

    reply = engine.handle(session_id, message.text)
    if anonymous:
        engine.end_session(session_id)
    logger.debug("Session %s -> locked=%s", session_id, reply.locked)
    return reply.to_dict()
