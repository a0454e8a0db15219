"""Weekly budget evaluation and alert decisions.

Everything here is a pure function of the budget configuration, the cost
records handed in and the reference time. Week windows run from Monday
00:00:00 local time through Sunday 23:59:59.999999, both ends inclusive.
"""
from __future__ import annotations
import logging
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Tuple

from kitcha.domain.Budget import (
    AlertDecision,
    BudgetConfiguration,
    BudgetHealth,
    BudgetStatus,
    CostRecord,
    WeekComparison,
)
from kitcha.domain.errors import InvalidConfiguration
from kitcha.utilities.constants import (
    DATE_FORMAT,
    EXCEEDED_PERCENTAGE,
    ON_BUDGET_UP_TO,
    UNDER_BUDGET_BELOW,
    WARNING_PERCENTAGE,
)
from kitcha.utilities.formatting import format_cents

logger = logging.getLogger(__name__)

__all__ = ["week_bounds", "classify", "evaluate", "should_alert", "compare_weeks", "spent_between"]

_WEEK = timedelta(days=7)
_LAST_INSTANT = timedelta(microseconds=1)


def _local(dt: datetime) -> datetime:
    """Naive local-time view of a timestamp (aware values are converted)."""
    if dt.tzinfo is not None:
        return dt.astimezone().replace(tzinfo=None)
    return dt


def _monday_start(day: date) -> datetime:
    monday = day - timedelta(days=day.weekday())
    return datetime.combine(monday, time.min)


def week_bounds(reference: datetime | date | None = None) -> Tuple[datetime, datetime]:
    """(Monday 00:00, Sunday 23:59:59.999999) of the week containing reference."""
    if reference is None:
        reference = datetime.now()
    if isinstance(reference, datetime):
        reference = _local(reference).date()
    start = _monday_start(reference)
    return start, start + _WEEK - _LAST_INSTANT


def _explicit_week(week_start: datetime | date) -> Tuple[datetime, datetime]:
    if isinstance(week_start, datetime):
        week_start = _local(week_start)
        if week_start.time() != time.min:
            raise InvalidConfiguration(f"Week must start at midnight: {week_start.isoformat()}")
        week_start = week_start.date()
    if not isinstance(week_start, date):
        raise InvalidConfiguration(f"Invalid week start: {week_start!r}")
    if week_start.weekday() != 0:
        raise InvalidConfiguration(f"Week must start on a Monday: {week_start.strftime(DATE_FORMAT)}")
    start = datetime.combine(week_start, time.min)
    return start, start + _WEEK - _LAST_INSTANT


def spent_between(records: Iterable[CostRecord], start: datetime, end: datetime) -> int:
    return sum(r.amount_cents for r in records if start <= _local(r.occurred_at) <= end)


def classify(percentage_used: float) -> BudgetHealth:
    """Fixed display banding; first match wins."""
    if percentage_used >= EXCEEDED_PERCENTAGE:
        return BudgetHealth.EXCEEDED
    if percentage_used >= WARNING_PERCENTAGE:
        return BudgetHealth.WARNING
    return BudgetHealth.HEALTHY


def _require_budget(config: BudgetConfiguration) -> int:
    if config.weekly_budget_cents <= 0:
        raise InvalidConfiguration(
            f"Weekly budget must be positive, got {config.weekly_budget_cents} cents")
    return config.weekly_budget_cents


def evaluate(config: BudgetConfiguration,
             records: Iterable[CostRecord],
             *,
             now: Optional[datetime] = None,
             week_start: datetime | date | None = None) -> BudgetStatus:
    """Budget status for the current (or the given) week.

    Raises:
        InvalidConfiguration: non-positive budget or a week start that is not
            a Monday at midnight.
    """
    budget = _require_budget(config)
    start, end = _explicit_week(week_start) if week_start is not None else week_bounds(now)

    spent = spent_between(records, start, end)
    logger.debug("Week %s: spent %d of %d cents", start.strftime(DATE_FORMAT), spent, budget)
    # computed from integers so 80.0 and 100.0 come out exact
    percentage = spent * 100 / budget
    return BudgetStatus(
        weekly_budget_cents=budget,
        spent_this_week_cents=spent,
        remaining_cents=budget - spent,
        percentage_used=percentage,
        status=classify(percentage),
        week_start=start,
        week_end=end,
    )


def should_alert(status: BudgetStatus, config: BudgetConfiguration) -> AlertDecision:
    """Decide whether the user-configured alert threshold has been reached.

    The threshold is independent of the warning band used by classify().
    No memory of earlier decisions: equal inputs give equal decisions.
    """
    pct = status.percentage_used
    if not config.alert_enabled or pct < config.alert_threshold_percentage:
        return AlertDecision(should_alert=False, status=status.status, percentage_used=pct)

    if pct >= EXCEEDED_PERCENTAGE:
        over = status.spent_this_week_cents - status.weekly_budget_cents
        return AlertDecision(
            should_alert=True,
            status=status.status,
            percentage_used=pct,
            severity=BudgetHealth.EXCEEDED,
            title='Budget Exceeded',
            message=f"You have exceeded your weekly budget by {format_cents(over)}",
        )
    return AlertDecision(
        should_alert=True,
        status=status.status,
        percentage_used=pct,
        severity=BudgetHealth.WARNING,
        title='Budget Threshold Reached',
        message=f"You have used {pct:.1f}% of your weekly budget",
    )


def _comparison_status(percentage: float) -> str:
    if percentage < UNDER_BUDGET_BELOW:
        return 'under_budget'
    if percentage <= ON_BUDGET_UP_TO:
        return 'on_budget'
    return 'over_budget'


def compare_weeks(config: BudgetConfiguration,
                  records: Iterable[CostRecord],
                  *,
                  count: int = 4,
                  now: Optional[datetime] = None) -> List[WeekComparison]:
    """Budget vs. actual for the current week and the count-1 weeks before it."""
    budget = _require_budget(config)
    if count < 1:
        raise InvalidConfiguration(f"count must be at least 1: {count}")
    records = list(records)
    current_start, _ = week_bounds(now)
    result: List[WeekComparison] = []
    for offset in range(count):
        start = current_start - offset * _WEEK
        end = start + _WEEK - _LAST_INSTANT
        actual = spent_between(records, start, end)
        percentage = actual * 100 / budget
        result.append(WeekComparison(
            label=f"Week of {start.strftime(DATE_FORMAT)}",
            week_start=start,
            budget_cents=budget,
            actual_spent_cents=actual,
            difference_cents=budget - actual,
            percentage_used=percentage,
            status=_comparison_status(percentage),
        ))
    return result
