"""Event helper utilities.

Publishing helpers for budget and pantry events on the global event bus.

Quick import:
    from kitcha.events.event_helpers import publish_budget_alert, publish_near_expiry
"""
from __future__ import annotations
from typing import Any, Dict

from kitcha.domain.Budget import AlertDecision, BudgetHealth, BudgetStatus
from .Event_Bus import create_event, BUDGET_WARNING, BUDGET_EXCEEDED, PANTRY_NEAR_EXPIRY

__all__ = ['publish_budget_alert', 'publish_near_expiry']


def publish_budget_alert(user_id: str, decision: AlertDecision, status: BudgetStatus) -> bool:
    """Publish budget.warning / budget.exceeded for a firing decision.

    Returns False (and publishes nothing) when the decision does not fire.
    """
    if not decision.should_alert:
        return False
    name = BUDGET_EXCEEDED if decision.severity is BudgetHealth.EXCEEDED else BUDGET_WARNING
    create_event(name, {
        'user_id': user_id,
        'decision': decision,
        'status': status,
    })
    return True


def publish_near_expiry(user_id: str, item: Dict[str, Any], threshold: int):
    """Publish a pantry.near_expiry event for one entry of compute_expiring_soon()."""
    create_event(PANTRY_NEAR_EXPIRY, {
        'user_id': user_id,
        'item': item,
        'days_left': item.get('days_left'),
        'threshold': threshold,
    })
