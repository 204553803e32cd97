"""
Triage Bot - Збереження випадків

Приклад:
    from triage_bot.storage import create_repository

    repo = create_repository("sqlite", sqlite_path="data/cases.db")
    repo.save_case(case, session_id="web-1")
    for summary in repo.list_cases(limit=10):
        print(summary.case_id, summary.triage_level)
"""

from .repository import CaseRepository, create_repository, repository_from_config
from .json_repository import JsonCaseRepository
from .sqlite_repository import SqliteCaseRepository

__all__ = [
    "CaseRepository",
    "create_repository",
    "repository_from_config",
    "JsonCaseRepository",
    "SqliteCaseRepository",
]
