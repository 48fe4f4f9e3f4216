from __future__ import annotations

import threading
import time
from typing import Callable, Dict, List, Optional, Protocol, Set

from ..attendance.service import AttendanceService
from ..core.app_logger import get_logger
from ..core.constants import (
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_SCAN_SESSION_TTL_S,
    MSG_ATTENDANCE_FAILED,
    MSG_NO_CODE,
    MSG_UNEXPECTED,
)
from ..core.enums import AttendanceType
from ..core.exceptions import NoCodeError, PersistenceError, ValidationError
from ..students.model import Student
from .debounce import Debouncer
from .state import Failed, Found, Idle, NotFound, ScanOutcome, ScanState

log = get_logger(__name__)


class StudentLookup(Protocol):
    def find_by_qr_code(self, qr_code: str) -> Optional[Student]:
        raise NotImplementedError


class SelectionCell:
    """Attendance type picked on the page.

    Dispatch reads the cell at scan time, so a change of selection applies to
    the very next scan.
    """

    def __init__(self, initial: AttendanceType = AttendanceType.TIME_IN):
        self._value = AttendanceType(initial)

    def get(self) -> AttendanceType:
        return self._value

    def set(self, value) -> AttendanceType:
        try:
            self._value = AttendanceType(value)
        except ValueError:
            raise ValidationError(f"Unknown attendance type: {value!r}") from None
        return self._value


class ScanSession:
    """One open scan page: selection, processed codes, debounce and view state."""

    def __init__(
        self,
        *,
        students: StudentLookup,
        attendance: AttendanceService,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        audio_cue: Optional[Callable[[], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._students = students
        self._attendance = attendance
        self._debouncer = Debouncer(debounce_ms, clock=clock)
        self._audio_cue = audio_cue
        self._lock = threading.RLock()
        self._closed = threading.Event()

        self.selection = SelectionCell()
        self._processed: Set[str] = set()
        self._state: ScanState = Idle()
        self._last_scanned: Optional[str] = None

    # ---- read side ----

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def last_scanned(self) -> Optional[str]:
        return self._last_scanned

    @property
    def audio_cue(self) -> Optional[Callable[[], None]]:
        return self._audio_cue

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def is_processed(self, code: str) -> bool:
        return code in self._processed

    # ---- write side ----

    def select_type(self, value) -> AttendanceType:
        selected = self.selection.set(value)
        log.debug("attendance type changed to %s", selected.value)
        return selected

    def on_decode(self, code: Optional[str]) -> ScanOutcome:
        """Entry point for decode events coming from the camera."""
        with self._lock:
            if self.closed:
                return ScanOutcome.CLOSED

            self._last_scanned = code
            if not self._debouncer.should_dispatch(code):
                return ScanOutcome.DEBOUNCED

            return self.handle_scan(code, self.selection.get())

    def handle_scan(self, code: Optional[str], attendance_type: AttendanceType) -> ScanOutcome:
        """Look the student up and write one attendance row for *code*."""
        with self._lock:
            try:
                return self._handle_scan(code, AttendanceType(attendance_type))
            except NoCodeError:
                # Keep a shown student on screen; only the error changes
                if isinstance(self._state, Found):
                    self._set_state(Found(self._state.student, error=MSG_NO_CODE))
                else:
                    self._set_state(Failed(MSG_NO_CODE))
                return ScanOutcome.NO_CODE
            except Exception:
                log.exception("unexpected error while handling scan %r", code)
                self._set_state(Failed(MSG_UNEXPECTED))
                return ScanOutcome.ERROR

    def _handle_scan(self, code: Optional[str], attendance_type: AttendanceType) -> ScanOutcome:
        if not code:
            raise NoCodeError(MSG_NO_CODE)

        if code in self._processed:
            log.debug("QR code %r has already been processed", code)
            return ScanOutcome.ALREADY_PROCESSED

        try:
            student = self._students.find_by_qr_code(code)
        except PersistenceError as e:
            log.error("error fetching student for %r: %s", code, e)
            student = None

        if self.closed:
            log.info("scan session closed during lookup of %r; dropping result", code)
            return ScanOutcome.CLOSED

        if student is None:
            log.warning("no student found for QR code %r", code)
            self._set_state(NotFound(code))
            return ScanOutcome.NOT_FOUND

        log.info("found student id=%s for QR code %r", student.id, code)
        self._set_state(Found(student))
        self._processed.add(code)
        self._play_cue()

        if self.closed:
            log.info("scan session closed before recording %r; skipping insert", code)
            return ScanOutcome.CLOSED

        try:
            self._attendance.record(student.id, attendance_type)
        except ValidationError as e:
            self._set_state(Found(student, error=str(e)))
            return ScanOutcome.RECORD_REJECTED
        except PersistenceError as e:
            log.error("error recording attendance for student id=%s: %s", student.id, e)
            self._set_state(Found(student, error=MSG_ATTENDANCE_FAILED))
            return ScanOutcome.RECORD_FAILED

        return ScanOutcome.RECORDED

    def _set_state(self, state: ScanState) -> None:
        if self.closed:
            return
        self._state = state

    def _play_cue(self) -> None:
        if self._audio_cue is None:
            return
        try:
            self._audio_cue()
        except Exception as e:
            log.warning("audio cue failed: %s", e)

    def close(self) -> None:
        # No lock: a scan in flight must see the flag and stop updating state
        self._closed.set()


class ScanSessionRegistry:
    """Open scan sessions keyed by browser session.

    Sessions idle for longer than *ttl_s* are closed and dropped whenever the
    registry is touched, so tabs that never sent a close do not pile up.
    """

    def __init__(
        self,
        factory: Callable[[], ScanSession],
        *,
        ttl_s: float = DEFAULT_SCAN_SESSION_TTL_S,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._factory = factory
        self._ttl_s = ttl_s
        self._clock = clock
        self._sessions: Dict[str, ScanSession] = {}
        self._last_used: Dict[str, float] = {}
        self._lock = threading.Lock()

    def open(self, key: str) -> ScanSession:
        """Start a fresh session for *key*, closing any previous one."""
        session = self._factory()
        with self._lock:
            stale = self._evict_idle()
            old = self._sessions.get(key)
            self._sessions[key] = session
            self._last_used[key] = self._clock()
        if old is not None:
            stale.append(old)
        for s in stale:
            s.close()
        log.debug("scan session opened key=%s", key)
        return session

    def get(self, key: str) -> ScanSession:
        session = self.peek(key)
        if session is None:
            return self.open(key)
        return session

    def peek(self, key: str) -> Optional[ScanSession]:
        """Live session for *key*, or None. Never creates one."""
        with self._lock:
            stale = self._evict_idle()
            session = self._sessions.get(key)
            if session is not None and not session.closed:
                self._last_used[key] = self._clock()
        for s in stale:
            s.close()
        if session is None or session.closed:
            return None
        return session

    def close(self, key: str) -> bool:
        with self._lock:
            session = self._sessions.pop(key, None)
            self._last_used.pop(key, None)
        if session is None:
            return False
        session.close()
        log.debug("scan session closed key=%s", key)
        return True

    def _evict_idle(self) -> List[ScanSession]:
        # Caller holds self._lock
        cutoff = self._clock() - self._ttl_s
        stale_keys = [k for k, used in self._last_used.items() if used < cutoff]
        evicted = []
        for k in stale_keys:
            evicted.append(self._sessions.pop(k))
            del self._last_used[k]
        if evicted:
            log.info("evicted %d idle scan session(s)", len(evicted))
        return evicted

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
