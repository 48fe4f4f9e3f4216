from __future__ import annotations

import threading


class QueuedAudioCue:
    """Audio cue for the browser page.

    The server cannot play sound itself; each call queues one cue and the next
    response tells the page to play the beep asset.
    """

    def __init__(self):
        self._pending = 0
        self._lock = threading.Lock()

    def __call__(self) -> None:
        with self._lock:
            self._pending += 1

    def drain(self) -> int:
        with self._lock:
            n, self._pending = self._pending, 0
            return n
