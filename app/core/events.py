"""
In-process change notifications for live views.

Writers publish a topic name after their transaction commits; every
subscriber of that topic gets a wake-up and re-reads the full result set.
"""

import asyncio
import logging
import threading
from typing import Dict, List, Tuple

log = logging.getLogger(__name__)

PROJECTS_TOPIC = "projects"


def reports_topic(project_id: int) -> str:
    return f"reports:{project_id}"


def history_topic(project_id: int) -> str:
    return f"history:{project_id}"


def topics_for_project(project_id: int) -> List[str]:
    """Every topic whose result set depends on the given project."""
    return [PROJECTS_TOPIC, reports_topic(project_id), history_topic(project_id)]


class ChangeFeed:
    """
    Fan-out of change notifications to asyncio queues.

    publish() may be called from any thread (sync endpoints run in a worker
    pool); the notification is handed to each subscriber's own event loop.
    """

    def __init__(self, max_queue_size: int = 100):
        self._max_queue_size = max_queue_size
        self._subscribers: Dict[str, List[Tuple[asyncio.AbstractEventLoop, asyncio.Queue]]] = {}
        self._lock = threading.Lock()

    def subscribe(self, topic: str) -> asyncio.Queue:
        """Registers a queue for the topic. Must be called from a running event loop."""
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._max_queue_size)
        with self._lock:
            self._subscribers.setdefault(topic, []).append((loop, queue))
            count = len(self._subscribers[topic])
        log.debug("Subscribed to %s (%d subscribers)", topic, count)
        return queue

    def unsubscribe(self, topic: str, queue: asyncio.Queue) -> None:
        with self._lock:
            entries = self._subscribers.get(topic, [])
            remaining = [(loop, q) for loop, q in entries if q is not queue]
            if remaining:
                self._subscribers[topic] = remaining
            else:
                self._subscribers.pop(topic, None)
        log.debug("Unsubscribed from %s", topic)

    def subscriber_count(self, topic: str) -> int:
        with self._lock:
            return len(self._subscribers.get(topic, []))

    def publish(self, *topics: str) -> None:
        for topic in topics:
            with self._lock:
                targets = list(self._subscribers.get(topic, []))
            for loop, queue in targets:
                if loop.is_closed():
                    continue
                loop.call_soon_threadsafe(self._offer, queue, topic)

    @staticmethod
    def _offer(queue: asyncio.Queue, topic: str) -> None:
        # a pending wake-up already covers this change: the reader re-reads everything
        if queue.full():
            return
        queue.put_nowait(topic)
