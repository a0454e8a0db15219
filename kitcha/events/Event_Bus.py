"""Simple Event Bus / Observer implementation for budget and pantry alerts.

Event names used so far:
  budget.warning  -> payload {"user_id": str, "decision": AlertDecision, "status": BudgetStatus}
  budget.exceeded -> same payload as budget.warning
  pantry.near_expiry -> payload {"user_id": str, "item": dict, "days_left": int, "threshold": int}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
BUDGET_WARNING = "budget.warning"
BUDGET_EXCEEDED = "budget.exceeded"
PANTRY_NEAR_EXPIRY = "pantry.near_expiry"

Subscriber = Callable[[str, Any], None]


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Subscriber]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Subscriber):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Subscriber):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any) -> int:
		"""Deliver to every subscriber; returns how many handled the event."""
		delivered = 0
		# one failing subscriber must not stop delivery to the others
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
				delivered += 1
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)
		return delivered


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


def create_event(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus (sugar function)."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'create_event',
	'BUDGET_WARNING', 'BUDGET_EXCEEDED', 'PANTRY_NEAR_EXPIRY'
]
