#!/usr/bin/env python3
"""
Triage Bot - Консольна розмова

Запуск:
    python scripts/chat_cli.py
    python scripts/chat_cli.py --kb data/kb_v1.json --storage json --cases-dir data/cases

Команди:
    /new   - почати новий випадок
    /quit  - вийти
"""

import sys
import uuid
import logging
import argparse
from pathlib import Path

# Додаємо корінь проекту до path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from triage_bot.config import load_config, get_default_config
from triage_bot.conversation import ConversationEngine, SessionStore
from triage_bot.knowledge_base import KnowledgeBase
from triage_bot.storage import create_repository


def main():
    parser = argparse.ArgumentParser(description='Triage Bot console chat')
    parser.add_argument('--kb', default='data/kb_v1.json', help='Knowledge base JSON')
    parser.add_argument('--storage', choices=['json', 'sqlite', 'none'], default='none')
    parser.add_argument('--cases-dir', default='data/cases')
    parser.add_argument('--sqlite-path', default='data/cases.db')
    parser.add_argument('--config', default=None, help='YAML bot configuration')
    parser.add_argument('--verbose', '-v', action='store_true', help='Show extraction logs')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s [%(name)s] %(message)s",
    )

    config = load_config(args.config) if args.config else get_default_config()
    kb = KnowledgeBase.load(args.kb)
    repository = create_repository(args.storage, args.cases_dir, args.sqlite_path)
    engine = ConversationEngine(kb, SessionStore(), repository=repository, config=config)

    session_id = f"cli-{uuid.uuid4().hex[:8]}"

    print("=" * 60)
    print("Triage Bot (not medical advice; call 911 in an emergency)")
    print("Commands: /new, /quit")
    print("=" * 60)

    try:
        while True:
            try:
                text = input("you> ")
            except EOFError:
                break

            command = text.strip().lower()
            if command == "/quit":
                break
            if command == "/new":
                session_id = f"cli-{uuid.uuid4().hex[:8]}"
                print("bot> New case started. Describe what you're feeling.")
                continue

            reply = engine.handle(session_id, text)
            print(f"bot> {reply.text}")
            if reply.options:
                print(f"     options: {', '.join(reply.options)}")
    except KeyboardInterrupt:
        print()
    finally:
        engine.flush_all()


if __name__ == "__main__":
    main()
