# booking_portal/services/refresh_service.py
import logging
import threading
import time
from typing import Callable, List

logger = logging.getLogger(__name__)

RefreshCallback = Callable[[], None]


class RefreshCoordinator:
    """
    Process-wide invalidation signal.

    Mutations call `publish()` after their effect is committed; subscribers
    re-derive whatever they show (slots, calendars) from the store. There is
    no payload, so subscribers must be idempotent.
    """

    def __init__(self) -> None:
        self._callbacks: List[RefreshCallback] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: RefreshCallback) -> Callable[[], None]:
        with self._lock:
            self._callbacks.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def publish(self, delay_seconds: float = 0.0) -> None:
        if delay_seconds > 0:
            time.sleep(delay_seconds)

        with self._lock:
            callbacks = list(self._callbacks)

        logger.debug("Publishing refresh to %d subscribers", len(callbacks))
        for callback in callbacks:
            try:
                callback()
            except Exception:
                # One broken view must not starve the others
                logger.exception("Refresh subscriber %r failed", callback)


_coordinator = RefreshCoordinator()


def get_refresh_coordinator() -> RefreshCoordinator:
    return _coordinator
