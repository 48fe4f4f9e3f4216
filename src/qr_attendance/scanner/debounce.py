from __future__ import annotations

import time
from typing import Callable, Hashable, Optional

from ..core.constants import DEFAULT_DEBOUNCE_MS


class Debouncer:
    """Collapse bursts of identical events into one.

    An event is suppressed when it equals the previous event and arrives less
    than ``window_ms`` after it. Suppressed events still refresh the timer, so a
    code that stays in front of the camera never fires twice.
    """

    def __init__(self, window_ms: int = DEFAULT_DEBOUNCE_MS, *, clock: Callable[[], float] = time.monotonic):
        if window_ms < 0:
            raise ValueError("window_ms must be >= 0")
        self._window = window_ms / 1000.0
        self._clock = clock
        self._last_key: Optional[Hashable] = None
        self._last_at: Optional[float] = None

    def should_dispatch(self, key: Hashable) -> bool:
        now = self._clock()
        quiet = (
            self._last_at is None
            or key != self._last_key
            or (now - self._last_at) >= self._window
        )
        self._last_key = key
        self._last_at = now
        return quiet
