"""In-process notifications for score updates, keyed by tournament id."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, Dict, Set

logger = logging.getLogger(__name__)

_SUBSCRIBERS: Dict[str, Set[Callable[[dict], None]]] = {}
_LOCK = Lock()


def subscribe(tournament_id: str, cb: Callable[[dict], None]) -> None:
    with _LOCK:
        _SUBSCRIBERS.setdefault(tournament_id, set()).add(cb)


def unsubscribe(tournament_id: str, cb: Callable[[dict], None]) -> None:
    with _LOCK:
        if tournament_id in _SUBSCRIBERS:
            _SUBSCRIBERS[tournament_id].discard(cb)
            if not _SUBSCRIBERS[tournament_id]:
                del _SUBSCRIBERS[tournament_id]


def publish(tournament_id: str, data: dict) -> int:
    """Deliver ``data`` to every subscriber; returns how many received it."""

    with _LOCK:
        callbacks = list(_SUBSCRIBERS.get(tournament_id, ()))
    delivered = 0
    for cb in callbacks:
        try:
            cb(data)
        except Exception:
            logger.exception(
                "subscriber failed for tournament %s event %s",
                tournament_id,
                data.get("type"),
            )
            continue
        delivered += 1
    return delivered


def subscriber_count(tournament_id: str) -> int:
    with _LOCK:
        return len(_SUBSCRIBERS.get(tournament_id, ()))


__all__ = ["publish", "subscribe", "subscriber_count", "unsubscribe"]
