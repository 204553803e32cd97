#!/usr/bin/env python3
"""
Triage Bot - Запуск API сервера

Запуск:
    python scripts/run_api.py
    python scripts/run_api.py --port 8080
    python scripts/run_api.py --storage sqlite --sqlite-path data/cases.db
"""

import os
import sys
import argparse
from pathlib import Path

# Додаємо корінь проекту до path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def main():
    parser = argparse.ArgumentParser(description='Triage Bot API Server')
    parser.add_argument('--host', default='0.0.0.0', help='Host (default: 0.0.0.0)')
    parser.add_argument('--port', type=int, default=8000, help='Port (default: 8000)')
    parser.add_argument('--reload', action='store_true', help='Enable auto-reload')
    parser.add_argument('--kb', default=None, help='Knowledge base JSON (default: data/kb_v1.json)')
    parser.add_argument('--storage', choices=['json', 'sqlite', 'none'], default=None,
                        help='Case storage backend')
    parser.add_argument('--cases-dir', default=None, help='Directory for JSON case files')
    parser.add_argument('--sqlite-path', default=None, help='SQLite database path')
    parser.add_argument('--history-limit', type=int, default=None,
                        help='Default number of cases returned by /api/v1/cases')
    parser.add_argument('--config', default=None, help='YAML bot configuration')
    parser.add_argument('--log-level', default='info', help='Log level (default: info)')

    args = parser.parse_args()

    # Параметри передаються в додаток через environment variables
    overrides = {
        'KB_PATH': args.kb,
        'STORAGE_BACKEND': args.storage,
        'CASES_DIR': args.cases_dir,
        'SQLITE_PATH': args.sqlite_path,
        'HISTORY_LIMIT': str(args.history_limit) if args.history_limit else None,
        'TRIAGE_CONFIG': args.config,
        'API_HOST': args.host,
        'API_PORT': str(args.port),
        'LOG_LEVEL': args.log_level.upper(),
    }
    for key, value in overrides.items():
        if value is not None:
            os.environ[key] = value

    import uvicorn

    uvicorn.run(
        "triage_bot.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
