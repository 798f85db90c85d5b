"""Fan-out of change signals to live-reload sessions"""

import queue
import threading


class Subscription:
    """One session's private delivery queue."""

    def __init__(self, broadcaster: 'Broadcaster'):
        self._broadcaster = broadcaster
        self._queue: queue.Queue[str | None] = queue.Queue()

    def put(self, message: str | None) -> None:
        self._queue.put(message)

    def get(self, timeout: float | None = None) -> str | None:
        """Block until the next signal; None once the broadcaster is closed.

        Raises queue.Empty on timeout.
        """
        return self._queue.get(timeout=timeout)

    def close(self) -> None:
        self._broadcaster.unsubscribe(self)

    def __enter__(self) -> 'Subscription':
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class Broadcaster:
    """Delivers every published message to every current subscriber.

    Each subscriber owns its queue, so no session can consume another's signal.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: list[Subscription] = []

    def subscribe(self) -> Subscription:
        sub = Subscription(self)
        with self._lock:
            self._subscribers.append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            if sub in self._subscribers:
                self._subscribers.remove(sub)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def publish(self, message: str) -> int:
        """Queue message for all subscribers; returns how many received it."""
        with self._lock:
            subscribers = list(self._subscribers)
        for sub in subscribers:
            sub.put(message)
        return len(subscribers)

    def close(self) -> None:
        """Wake every subscriber with the end-of-stream marker and drop them."""
        with self._lock:
            subscribers, self._subscribers = self._subscribers, []
        for sub in subscribers:
            sub.put(None)
