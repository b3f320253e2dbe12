from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from PySide6.QtCore import QObject, Qt, Signal, Slot

logger = logging.getLogger(__name__)


class ReflowScheduler(QObject):
    """Runs a reflow callback on the thread this object lives on, one pass at a time.

    ``request()`` may be called from any thread. Requests made while one is
    already queued are merged into it; a request made while a pass is running
    queues exactly one follow-up pass.
    """

    _wake = Signal()

    def __init__(self, callback: Callable[[], object], parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._callback = callback
        self._lock = threading.Lock()
        self._pending = False
        self._running = False
        self._passes = 0
        self._wake.connect(self._drain, Qt.QueuedConnection)

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending

    @property
    def passes(self) -> int:
        """Number of completed passes."""
        return self._passes

    def request(self) -> None:
        with self._lock:
            if self._pending:
                return
            self._pending = True
        self._wake.emit()

    @Slot()
    def _drain(self) -> None:
        if self._running:
            # Re-entered through a nested event loop; the running pass picks it up.
            return
        self._running = True
        try:
            while True:
                with self._lock:
                    if not self._pending:
                        break
                    self._pending = False
                self._run_once()
        finally:
            self._running = False

    def _run_once(self) -> None:
        try:
            self._callback()
        except Exception:
            logger.exception("Quest list reflow failed")
        finally:
            self._passes += 1
