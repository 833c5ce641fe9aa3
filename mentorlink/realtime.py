"""
In-process realtime hub for notification pushes
Each websocket subscriber gets its own queue, filtered by recipient id
"""

import asyncio
import logging
from collections import defaultdict
from threading import Lock
from typing import Any

logger = logging.getLogger(__name__)


class NotificationHub:
    def __init__(self):
        self._subscribers: dict[str, list[tuple[asyncio.AbstractEventLoop, asyncio.Queue]]] = (
            defaultdict(list)
        )
        self._lock = Lock()

    def subscribe(self, user_id: str) -> asyncio.Queue:
        """Register a queue for user_id; must be called from the subscriber's event loop"""
        queue: asyncio.Queue = asyncio.Queue()
        loop = asyncio.get_running_loop()
        with self._lock:
            self._subscribers[user_id].append((loop, queue))
        logger.info(f"📡 Realtime subscriber added for {user_id}")
        return queue

    def unsubscribe(self, user_id: str, queue: asyncio.Queue) -> None:
        with self._lock:
            remaining = [(loop, q) for loop, q in self._subscribers.get(user_id, []) if q is not queue]
            if remaining:
                self._subscribers[user_id] = remaining
            else:
                self._subscribers.pop(user_id, None)
        logger.info(f"📴 Realtime subscriber removed for {user_id}")

    def subscriber_count(self, user_id: str) -> int:
        with self._lock:
            return len(self._subscribers.get(user_id, []))

    def publish(self, user_id: str, payload: dict[str, Any]) -> int:
        """Push payload to every subscriber of user_id; safe to call from any thread"""
        with self._lock:
            targets = list(self._subscribers.get(user_id, []))

        delivered = 0
        for loop, queue in targets:
            try:
                loop.call_soon_threadsafe(queue.put_nowait, payload)
                delivered += 1
            except RuntimeError as e:
                # Subscriber loop already closed
                logger.warning(f"⚠️ Dropping realtime push for {user_id}: {e}")
        return delivered


hub = NotificationHub()
