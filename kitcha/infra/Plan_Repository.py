"""Meal plan repository (file persistence).

Document layout: {"<meal plan id>": meal plan dict}. Every save of an
existing plan bumps its version, which feeds the shopping list cache key.
"""
import logging
from dataclasses import replace
from threading import Lock
from typing import List, Optional

from kitcha.domain.Plan import MealPlan
from kitcha.infra.json_store import load_document, save_document
from kitcha.infra.paths import PLANS_FILENAME, data_file

logger = logging.getLogger(__name__)

# guards read-modify-write of the meal plan file
_lock = Lock()


class PlanRepository:
    def __init__(self, filename: str = PLANS_FILENAME):
        self.filename = filename

    @property
    def path(self):
        return data_file(self.filename)

    def _load_all(self) -> dict:
        return load_document(self.path, {})

    def get_plan(self, plan_id: str, user_id: Optional[str] = None) -> Optional[MealPlan]:
        raw = self._load_all().get(plan_id)
        if raw is None:
            return None
        try:
            plan = MealPlan.from_dict(raw)
        except (ValueError, TypeError) as e:
            logger.error("Stored meal plan %s is malformed: %s", plan_id, e)
            return None
        if user_id is not None and plan.user_id != user_id:
            return None
        return plan

    def list_plans(self, user_id: str) -> List[MealPlan]:
        plans = []
        for plan_id in self._load_all():
            plan = self.get_plan(plan_id, user_id)
            if plan is not None:
                plans.append(plan)
        plans.sort(key=lambda p: (p.start_date, p.name))
        return plans

    def save_plan(self, plan: MealPlan) -> MealPlan:
        with _lock:
            store = self._load_all()
            previous = store.get(plan.id)
            if previous is not None:
                plan = replace(plan, version=int(previous.get('version') or 1) + 1)
            store[plan.id] = plan.to_dict()
            save_document(self.path, store)
        return plan

    def delete_plan(self, plan_id: str, user_id: Optional[str] = None) -> bool:
        if self.get_plan(plan_id, user_id) is None:
            return False
        with _lock:
            store = self._load_all()
            store.pop(plan_id, None)
            save_document(self.path, store)
        return True
