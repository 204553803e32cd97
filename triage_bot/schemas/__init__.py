"""
Triage Bot - Схеми даних

Pydantic моделі збережених випадків.

Приклад:
    from triage_bot.schemas import CaseRecord

    record = CaseRecord(case_id="abc", notes=["fever"])
    json_data = record.model_dump_json()
    restored = CaseRecord.model_validate_json(json_data)
"""

from .case_record import CaseRecord, CaseSummary

__all__ = [
    "CaseRecord",
    "CaseSummary",
]
