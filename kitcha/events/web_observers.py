"""Web-facing observers for budget and pantry events.

This module subscribes to the GLOBAL_EVENT_BUS and keeps a lightweight
in-memory ring buffer of recent alerts that the web layer serves from
/api/alerts so pages can poll for new alerts.

Design:
  * Each event stored with an auto-increment integer id (cursor) so clients
    can request only newer events (since=<last_id_seen>).
  * Budget alerts are recorded at most once per user per day and pantry
    expiry alerts once per user, item and day; repeated evaluations of the
    same budget therefore do not flood the feed.
  * Thread-safety with a simple Lock; state is per process.
  * A MAX_EVENTS cap prevents unbounded memory growth.
"""
from __future__ import annotations
import logging
from datetime import date, datetime, timezone
from threading import Lock
from typing import Any, Dict, List, Optional, Set, Tuple

from .Event_Bus import GLOBAL_EVENT_BUS, BUDGET_WARNING, BUDGET_EXCEEDED, PANTRY_NEAR_EXPIRY

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_seen: Set[Tuple[Any, ...]] = set()
_seen_day: Optional[date] = None
_next_id = 1
MAX_EVENTS = 300  # keep a few hundred recent events
_started = False


def _dedup_key(event_name: str, payload: Dict[str, Any], today: date) -> Tuple[Any, ...]:
    user_id = payload.get('user_id')
    if event_name == PANTRY_NEAR_EXPIRY:
        return (user_id, event_name, (payload.get('item') or {}).get('name'), today)
    # warning and exceeded share one daily slot, like a single "budget" alert
    return (user_id, 'budget', today)


def _local_today() -> date:
    """Dedup day, in local time like the budget week."""
    return datetime.now().date()


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id, _seen_day
    if not isinstance(payload, dict):
        return
    now = datetime.now(timezone.utc)
    today = _local_today()
    key = _dedup_key(event_name, payload, today)
    with _lock:
        if _seen_day != today:
            _seen.clear()
            _seen_day = today
        if key in _seen:
            return
        _seen.add(key)
        evt: Dict[str, Any] = {
            'id': _next_id,
            'type': event_name,
            'user_id': payload.get('user_id'),
            'ts': now.isoformat().replace('+00:00', 'Z'),
        }
        decision = payload.get('decision')
        if decision is not None:
            evt.update(title=decision.title, message=decision.message,
                       severity=decision.severity.value if decision.severity else None,
                       percentage_used=round(decision.percentage_used, 2))
        item = payload.get('item')
        if isinstance(item, dict):
            for k in ('name', 'quantity', 'unit', 'priority'):
                if k in item:
                    evt[k] = item[k]
        for k in ('days_left', 'threshold'):
            if k in payload:
                evt[k] = payload[k]
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]
    logger.info("Alert recorded: %s for user %s", event_name, payload.get('user_id'))


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in (BUDGET_WARNING, BUDGET_EXCEEDED, PANTRY_NEAR_EXPIRY):
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True


def reset():
    """Drop recorded events and dedup state."""
    global _next_id, _seen_day
    with _lock:
        _events.clear()
        _seen.clear()
        _seen_day = None
        _next_id = 1


def get_events(since: Optional[int] = None, user_id: Optional[str] = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), optionally for one user.

    Response includes next_cursor (largest id) so client can poll with since=next_cursor.
    """
    with _lock:
        data = [e for e in _events
                if (since is None or e['id'] > since) and (user_id is None or e.get('user_id') == user_id)]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'reset', 'get_events', 'MAX_EVENTS']
