"""
Triage Bot - Сховище сесій

SessionStore тримає ConversationState для кожного ключа сесії
та окремий threading.Lock на кожен ключ.

Повідомлення однієї сесії обробляються послідовно, різні сесії
паралельно. Замки створюються під спільним замком сховища.

Приклад:
    store = SessionStore()
    with store.session("web-1") as state:
        state.active_case = Case()
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Tuple

from .case import ConversationState


class SessionStore:
    """Потокобезпечне сховище станів сесій"""

    def __init__(self):
        self._states: Dict[str, ConversationState] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, session_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(session_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[session_id] = lock
            return lock

    def _get_or_create(self, session_id: str) -> ConversationState:
        with self._guard:
            state = self._states.get(session_id)
            if state is None:
                state = ConversationState(session_id=session_id)
                self._states[session_id] = state
            return state

    @contextmanager
    def session(self, session_id: str) -> Iterator[ConversationState]:
        """
        Отримати (або створити) стан сесії під її замком.

        Весь хід розмови має виконуватись всередині цього блоку.
        """
        lock = self._lock_for(session_id)
        with lock:
            yield self._get_or_create(session_id)

    def discard(self, session_id: str) -> bool:
        """Видалити стан та замок сесії. False, якщо сесії не було"""
        with self._guard:
            self._locks.pop(session_id, None)
            return self._states.pop(session_id, None) is not None

    def get(self, session_id: str) -> Optional[ConversationState]:
        """Стан сесії без блокування (тільки для читання)"""
        with self._guard:
            return self._states.get(session_id)

    def items(self) -> List[Tuple[str, ConversationState]]:
        """Знімок усіх сесій"""
        with self._guard:
            return list(self._states.items())

    @property
    def active_count(self) -> int:
        with self._guard:
            return len(self._states)

    def __contains__(self, session_id: str) -> bool:
        with self._guard:
            return session_id in self._states

    def __len__(self) -> int:
        return self.active_count
