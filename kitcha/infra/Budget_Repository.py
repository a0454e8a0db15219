"""Budget preferences and shopping history (file persistence).

Satisfies CostRecordProvider. Document layout:
    {"<user id>": {"config": {...}, "records": [cost record dict, ...]}}
"""
import logging
from datetime import datetime, timedelta
from threading import Lock
from typing import List

from kitcha.domain.Budget import BudgetConfiguration, CostRecord
from kitcha.infra.json_store import load_document, save_document
from kitcha.infra.paths import BUDGET_FILENAME, data_file
from kitcha.utilities.constants import DEFAULT_WEEKLY_BUDGET_CENTS

logger = logging.getLogger(__name__)

# guards read-modify-write of the budget file
_lock = Lock()


class BudgetRepository:
    def __init__(self, filename: str = BUDGET_FILENAME):
        self.filename = filename

    @property
    def path(self):
        return data_file(self.filename)

    def _load_all(self) -> dict:
        return load_document(self.path, {})

    def _user_doc(self, store: dict, user_id: str) -> dict:
        doc = store.setdefault(user_id, {})
        doc.setdefault('records', [])
        return doc

    def get_config(self, user_id: str) -> BudgetConfiguration:
        """Stored configuration, or the defaults for a user who never saved one."""
        raw = self._load_all().get(user_id, {}).get('config')
        if raw is None:
            return BudgetConfiguration(weekly_budget_cents=DEFAULT_WEEKLY_BUDGET_CENTS)
        return BudgetConfiguration.from_dict(raw)

    def save_config(self, user_id: str, config: BudgetConfiguration) -> BudgetConfiguration:
        with _lock:
            store = self._load_all()
            self._user_doc(store, user_id)['config'] = config.to_dict()
            save_document(self.path, store)
        return config

    def list_records(self, user_id: str) -> List[CostRecord]:
        records = []
        for entry in self._load_all().get(user_id, {}).get('records', []):
            try:
                records.append(CostRecord.from_dict(entry))
            except (ValueError, TypeError) as e:
                logger.error("Skipping malformed cost record for %s: %s", user_id, e)
        records.sort(key=lambda r: r.occurred_at.timestamp())
        return records

    def add_record(self, user_id: str, record: CostRecord) -> CostRecord:
        with _lock:
            store = self._load_all()
            self._user_doc(store, user_id)['records'].append(record.to_dict())
            save_document(self.path, store)
        return record

    def get_for_week(self, user_id: str, week_start: datetime, week_end: datetime) -> List[CostRecord]:
        # one day of slack for timestamps stored with another UTC offset;
        # the evaluator applies the exact inclusive window
        lo = week_start.date() - timedelta(days=1)
        hi = week_end.date() + timedelta(days=1)
        return [r for r in self.list_records(user_id) if lo <= r.occurred_at.date() <= hi]
