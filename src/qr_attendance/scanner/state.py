"""Scan page state as a single tagged value.

Exactly one of ``Idle``, ``Found``, ``NotFound`` or ``Failed`` is current, so
"student shown" and "error shown" can never disagree. ``Found`` carries an
optional error for an attendance write that failed after identification.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..core.constants import MSG_STUDENT_NOT_FOUND
from ..students.model import Student


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Found:
    student: Student
    error: Optional[str] = None


@dataclass(frozen=True)
class NotFound:
    code: str
    message: str = MSG_STUDENT_NOT_FOUND


@dataclass(frozen=True)
class Failed:
    message: str


ScanState = Union[Idle, Found, NotFound, Failed]


class ScanOutcome(str, Enum):
    """What a single decode event resulted in."""

    DEBOUNCED = "debounced"
    NO_CODE = "no_code"
    ALREADY_PROCESSED = "already_processed"
    NOT_FOUND = "not_found"
    RECORDED = "recorded"
    RECORD_REJECTED = "record_rejected"
    RECORD_FAILED = "record_failed"
    ERROR = "error"
    CLOSED = "closed"


def state_to_dict(state: ScanState) -> dict:
    if isinstance(state, Found):
        return {"kind": "found", "student": state.student.to_dict(), "error": state.error}
    if isinstance(state, NotFound):
        return {"kind": "not_found", "student": None, "error": state.message}
    if isinstance(state, Failed):
        return {"kind": "failed", "student": None, "error": state.message}
    return {"kind": "idle", "student": None, "error": None}
