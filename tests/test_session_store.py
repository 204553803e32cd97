"""
Тести для SessionStore

Запуск: pytest tests/test_session_store.py -v
"""

import threading
import time


def test_session_creates_state():
    """Стан створюється при першому зверненні"""
    from triage_bot.conversation import SessionStore, Case

    store = SessionStore()
    assert "web-1" not in store

    with store.session("web-1") as state:
        assert state.session_id == "web-1"
        assert state.active_case is None
        state.active_case = Case()

    assert "web-1" in store
    assert len(store) == 1
    assert store.get("web-1").active_case is not None
    assert store.get("missing") is None

    print("✓ SessionStore створює стан")


def test_same_key_serialized():
    """Ходи однієї сесії виконуються послідовно"""
    from triage_bot.conversation import SessionStore

    store = SessionStore()
    counter = {"value": 0}

    def worker():
        with store.session("shared"):
            current = counter["value"]
            time.sleep(0.001)
            counter["value"] = current + 1

    threads = [threading.Thread(target=worker) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert counter["value"] == 20

    print(f"✓ 20 паралельних ходів -> {counter['value']}")


def test_items_snapshot():
    """items() повертає знімок"""
    from triage_bot.conversation import SessionStore

    store = SessionStore()
    for key in ["a", "b", "c"]:
        with store.session(key):
            pass

    snapshot = store.items()
    with store.session("d"):
        pass

    assert [key for key, _ in snapshot] == ["a", "b", "c"]
    assert store.active_count == 4


def test_discard():
    """discard видаляє стан сесії"""
    from triage_bot.conversation import SessionStore

    store = SessionStore()
    with store.session("anon-1"):
        pass

    assert store.discard("anon-1")
    assert "anon-1" not in store
    assert not store.discard("anon-1")
    assert store.active_count == 0
