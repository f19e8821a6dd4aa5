# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""EventBus — topic fan-out to subscriber queues.

Simulation systems publish dict payloads; collaborators (a renderer, the
HTTP layer, an XP hook) subscribe and drain their own queue at their own
pace.  Publishing never blocks and never fails when nobody listens.

Subscriber queues are bounded.  When a subscriber falls behind and its
queue is full, new messages for it are dropped.

Topic subscribers receive the raw payload.  Wildcard subscribers
(``subscribe()`` with no topic) receive ``{"type": topic, "data": payload}``
so they can tell events apart.
"""

from __future__ import annotations

import queue
import threading

DEFAULT_QUEUE_SIZE = 100


class EventBus:
    """Thread-safe publish/subscribe bus backed by ``queue.Queue``."""

    def __init__(self, maxsize: int = DEFAULT_QUEUE_SIZE) -> None:
        self._subscribers: dict[str, list[queue.Queue]] = {}
        self._wildcard: list[queue.Queue] = []
        self._lock = threading.Lock()
        self._maxsize = maxsize

    def publish(self, topic: str, data: object = None) -> None:
        with self._lock:
            for q in self._subscribers.get(topic, []):
                self._offer(q, data)
            for q in self._wildcard:
                self._offer(q, {"type": topic, "data": data})

    def subscribe(self, topic: str | None = None) -> queue.Queue:
        """Return a new queue receiving *topic* events (all events if None)."""
        q: queue.Queue = queue.Queue(maxsize=self._maxsize)
        with self._lock:
            if topic is None:
                self._wildcard.append(q)
            else:
                self._subscribers.setdefault(topic, []).append(q)
        return q

    def unsubscribe(self, q: queue.Queue) -> None:
        with self._lock:
            if q in self._wildcard:
                self._wildcard.remove(q)
            for subs in self._subscribers.values():
                if q in subs:
                    subs.remove(q)

    @staticmethod
    def _offer(q: queue.Queue, msg: object) -> None:
        try:
            q.put_nowait(msg)
        except queue.Full:
            pass
