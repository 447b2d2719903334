"""
Transient toast notifications.

Only the most recent message is ever visible: each show() cancels the pending
dismissal and schedules a fresh one.
"""
import logging
import threading
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class ToastSurface(Protocol):
    def show(self, message: str) -> None: ...

    def hide(self) -> None: ...


class Toaster:
    def __init__(self, surface: Optional[ToastSurface] = None, duration: float = 3.0):
        self.surface = surface
        self.duration = duration
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._lock = threading.Lock()

    def show(self, message: str) -> None:
        if self.surface is None:
            logger.debug(f"Toast dropped, no surface: {message}")
            return

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            self._timer = threading.Timer(self.duration, self._dismiss, args=(self._generation,))
            self._timer.daemon = True
            self._timer.start()

        # surface is called without holding the lock
        self._call_surface("show", message)

    def _dismiss(self, generation: int) -> None:
        with self._lock:
            # superseded by a newer message
            if generation != self._generation:
                return
            self._timer = None

        self._call_surface("hide")

    def cancel(self) -> None:
        """Drop any pending dismissal without hiding the surface."""
        with self._lock:
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _call_surface(self, method: str, *args) -> None:
        if self.surface is None:
            return
        try:
            getattr(self.surface, method)(*args)
        except Exception:
            logger.exception(f"Toast surface {method}() failed")

    @property
    def pending(self) -> bool:
        return self._timer is not None
