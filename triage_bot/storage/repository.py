"""
Triage Bot - Репозиторій випадків

Абстрактний інтерфейс збереження та фабрика бекендів.

Бекенди:
- JsonCaseRepository: один JSON файл на випадок
- SqliteCaseRepository: таблиця cases з upsert по case_id
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Union

from ..config import StorageBackend, StorageConfig
from ..schemas import CaseRecord, CaseSummary

if TYPE_CHECKING:
    from ..conversation.case import Case


logger = logging.getLogger(__name__)


class CaseRepository(ABC):
    """Інтерфейс сховища випадків"""

    def save_case(self, case: "Case", session_id: str) -> None:
        """
        Зберегти знімок випадку (повторне збереження перезаписує).

        Raises:
            StorageError: збій сховища
        """
        self.save_record(case.to_record(session_id=session_id))

    @abstractmethod
    def save_record(self, record: CaseRecord) -> None:
        """Зберегти готовий знімок"""

    @abstractmethod
    def load_record(self, case_id: str) -> Optional[CaseRecord]:
        """Завантажити знімок за case_id (None якщо немає)"""

    @abstractmethod
    def list_cases(self, limit: int = 50) -> List[CaseSummary]:
        """Останні випадки, найновіші першими"""


def create_repository(
    backend: Union[StorageBackend, str] = StorageBackend.JSON,
    cases_dir: Union[str, Path] = "data/cases",
    sqlite_path: Union[str, Path] = "data/cases.db",
) -> Optional[CaseRepository]:
    """
    Створити репозиторій за назвою бекенду.

    Args:
        backend: json | sqlite | none
        cases_dir: Каталог для JSON файлів
        sqlite_path: Шлях до SQLite бази

    Returns:
        CaseRepository або None для бекенду "none"
    """
    backend = StorageBackend(backend)

    if backend == StorageBackend.NONE:
        logger.info("Case persistence disabled")
        return None

    if backend == StorageBackend.SQLITE:
        from .sqlite_repository import SqliteCaseRepository
        logger.info("Using SQLite case repository at %s", sqlite_path)
        return SqliteCaseRepository(sqlite_path)

    from .json_repository import JsonCaseRepository
    logger.info("Using JSON case repository in %s", cases_dir)
    return JsonCaseRepository(cases_dir)


def repository_from_config(config: StorageConfig) -> Optional[CaseRepository]:
    return create_repository(config.backend, config.cases_dir, config.sqlite_path)
