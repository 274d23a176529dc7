"""
Countdown Timer

Repeating tick on a daemon thread, with an explicit cancel handle.
"""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class CountdownTimer:
    """
    Calls `on_tick` every `interval` seconds until cancelled.

    After cancel() the worker exits at its next wait. A tick already in
    flight, or one whose wait had already elapsed, may still complete after
    cancel() returns, so the tick target must check its own state before
    mutating. cancel(wait=True) also joins the worker thread.
    """

    def __init__(self, interval: float, on_tick: Callable[[], None]):
        self.interval = interval
        self._on_tick = on_tick
        self._cancelled = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._cancelled.is_set()

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()

    def start(self) -> None:
        if self._thread is not None or self._cancelled.is_set():
            return
        self._thread = threading.Thread(target=self._run, name="countdown-timer", daemon=True)
        self._thread.start()

    def cancel(self, wait: bool = False) -> None:
        self._cancelled.set()
        thread = self._thread
        if wait and thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self.interval + 1.0)

    def _run(self) -> None:
        while not self._cancelled.wait(self.interval):
            try:
                self._on_tick()
            except Exception as e:
                logger.error(f"Error in countdown tick: {e}")
