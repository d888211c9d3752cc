"""Background refresh loop that feeds a fresh "now" to a callback."""

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class CountdownTicker:
    """Calls ``callback(now)`` every ``interval`` seconds until stopped.

    At most one loop runs per ticker; stop() waits for the thread to exit,
    so a ticker can be started and stopped repeatedly without piling up
    threads. If the callback raises, the loop stops and ``on_error`` is
    called with the exception. Usable as a context manager.
    """

    def __init__(
        self,
        callback: Callable[[datetime], None],
        interval: float = 1.0,
        clock: Callable[[], datetime] = datetime.now,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> None:
        self.callback = callback
        self.interval = interval
        self.clock = clock
        self.on_error = on_error
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, name="countdown-ticker", daemon=True)
        self._thread.start()
        logger.debug("Countdown ticker started")

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread is not None:
            if self._thread is not threading.current_thread():
                self._thread.join()
            self._thread = None
            logger.debug("Countdown ticker stopped")

    def _loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.callback(self.clock())
            except Exception as e:
                logger.error(f"Countdown callback failed: {e}")
                self._stop_event.set()
                if self.on_error is not None:
                    self.on_error(e)
                break
            self._stop_event.wait(self.interval)

    def __enter__(self) -> "CountdownTicker":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
