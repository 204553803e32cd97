"""
Triage Bot - JSON репозиторій

Кожен випадок зберігається у файлі case_<case_id>.json.
Повторне збереження атомарно перезаписує файл (tmp + os.replace).
"""

import os
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from .repository import CaseRepository
from ..exceptions import StorageError
from ..schemas import CaseRecord, CaseSummary


logger = logging.getLogger(__name__)


class JsonCaseRepository(CaseRepository):
    """
    Сховище випадків у JSON файлах.

    Приклад:
        repo = JsonCaseRepository("data/cases")
        repo.save_case(case, session_id="web-1")
        repo.list_cases(limit=10)
    """

    def __init__(self, cases_dir: Union[str, Path] = "data/cases"):
        self.cases_dir = Path(cases_dir)

    def path_for(self, case_id: str) -> Path:
        return self.cases_dir / f"case_{case_id}.json"

    def save_record(self, record: CaseRecord) -> None:
        path = self.path_for(record.case_id)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.cases_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                f.write(record.model_dump_json(indent=2))
            os.replace(tmp_path, path)
        except OSError as e:
            raise StorageError(f"Cannot write case {record.case_id} to {path}: {e}") from e

        logger.debug("Case %s saved to %s", record.case_id, path)

    def load_record(self, case_id: str) -> Optional[CaseRecord]:
        path = self.path_for(case_id)
        if not path.exists():
            return None
        return self._read(path)

    def _read(self, path: Path) -> Optional[CaseRecord]:
        """Прочитати файл; пошкоджений файл пропускається з попередженням"""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return CaseRecord.model_validate_json(f.read())
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("Failed to read case file %s: %s", path, e)
            return None

    def list_cases(self, limit: int = 50) -> List[CaseSummary]:
        if limit <= 0 or not self.cases_dir.exists():
            return []

        summaries = []
        for path in self.cases_dir.glob("case_*.json"):
            record = self._read(path)
            if record is not None:
                summaries.append(record.to_summary())

        summaries.sort(key=lambda s: s.started_at, reverse=True)
        return summaries[:limit]
