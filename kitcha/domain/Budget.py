"""Weekly budget domain: configuration, cost records and derived status values."""
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional

from kitcha.domain.errors import InvalidConfiguration
from kitcha.utilities.constants import DATE_FORMAT, DEFAULT_ALERT_THRESHOLD
from kitcha.utilities.formatting import round_percentage


class BudgetHealth(str, Enum):
    HEALTHY = 'healthy'
    WARNING = 'warning'
    EXCEEDED = 'exceeded'

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {BudgetHealth.HEALTHY: 0, BudgetHealth.WARNING: 1, BudgetHealth.EXCEEDED: 2}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class BudgetConfiguration:
    weekly_budget_cents: int
    alert_enabled: bool = True
    alert_threshold_percentage: int = DEFAULT_ALERT_THRESHOLD

    def __post_init__(self):
        if not _is_int(self.weekly_budget_cents):
            raise InvalidConfiguration(f"Weekly budget must be an integer number of cents: {self.weekly_budget_cents!r}")
        if not _is_int(self.alert_threshold_percentage) or not 1 <= self.alert_threshold_percentage <= 100:
            raise InvalidConfiguration(
                f"Alert threshold must be between 1 and 100: {self.alert_threshold_percentage!r}")
        object.__setattr__(self, 'alert_enabled', bool(self.alert_enabled))

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'BudgetConfiguration':
        d = dict(data)
        return BudgetConfiguration(
            weekly_budget_cents=d.get('weekly_budget_cents', d.get('weeklyBudgetCents')),
            alert_enabled=d.get('alert_enabled', d.get('alertEnabled', True)),
            alert_threshold_percentage=d.get('alert_threshold_percentage',
                                             d.get('alertThresholdPercentage', DEFAULT_ALERT_THRESHOLD)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weekly_budget_cents": self.weekly_budget_cents,
            "alert_enabled": self.alert_enabled,
            "alert_threshold_percentage": self.alert_threshold_percentage,
        }


@dataclass(frozen=True)
class CostRecord:
    """A cost-bearing event, e.g. a completed shopping trip."""
    amount_cents: int
    occurred_at: datetime
    description: Optional[str] = None

    def __post_init__(self):
        if not _is_int(self.amount_cents) or self.amount_cents < 0:
            raise ValueError(f"Cost amount must be a non-negative number of cents: {self.amount_cents!r}")
        occurred = self.occurred_at
        if isinstance(occurred, str):
            try:
                occurred = datetime.fromisoformat(occurred)
            except ValueError:
                raise ValueError(f"Invalid timestamp: {self.occurred_at!r}") from None
        elif isinstance(occurred, date) and not isinstance(occurred, datetime):
            occurred = datetime(occurred.year, occurred.month, occurred.day)
        if not isinstance(occurred, datetime):
            raise ValueError(f"Invalid timestamp: {self.occurred_at!r}")
        object.__setattr__(self, 'occurred_at', occurred)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'CostRecord':
        d = dict(data)
        return CostRecord(
            amount_cents=d.get('amount_cents', d.get('amountCents')),
            occurred_at=d.get('occurred_at') or d.get('occurredAt'),
            description=d.get('description') or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "amount_cents": self.amount_cents,
            "occurred_at": self.occurred_at.isoformat(),
            "description": self.description,
        }


@dataclass(frozen=True)
class BudgetStatus:
    weekly_budget_cents: int
    spent_this_week_cents: int
    remaining_cents: int
    percentage_used: float
    status: BudgetHealth
    week_start: datetime
    week_end: datetime

    def to_dict(self) -> Dict[str, Any]:
        # percentage is rounded for the response only; classification used the raw value
        return {
            "weeklyBudgetCents": self.weekly_budget_cents,
            "spentThisWeekCents": self.spent_this_week_cents,
            "remainingCents": self.remaining_cents,
            "percentageUsed": round_percentage(self.percentage_used),
            "status": self.status.value,
            "weekStart": self.week_start.strftime(DATE_FORMAT),
            "weekEnd": self.week_end.strftime(DATE_FORMAT),
        }


@dataclass(frozen=True)
class AlertDecision:
    should_alert: bool
    status: BudgetHealth
    percentage_used: float
    severity: Optional[BudgetHealth] = None
    title: str = ''
    message: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            "shouldAlert": self.should_alert,
            "status": self.status.value,
            "percentageUsed": round_percentage(self.percentage_used),
            "severity": self.severity.value if self.severity else None,
            "title": self.title,
            "message": self.message,
        }


@dataclass(frozen=True)
class WeekComparison:
    label: str
    week_start: datetime
    budget_cents: int
    actual_spent_cents: int
    difference_cents: int
    percentage_used: float
    status: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": self.label,
            "budgetCents": self.budget_cents,
            "actualSpentCents": self.actual_spent_cents,
            "differenceCents": self.difference_cents,
            "percentageUsed": round_percentage(self.percentage_used),
            "status": self.status,
        }
