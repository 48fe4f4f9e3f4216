from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.constants import PRESENT_STATUS
from ..core.enums import AttendanceType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance event written by a successful scan."""

    student_id: int
    date: date
    time: datetime
    type: AttendanceType
    status: str = PRESENT_STATUS
    id: Optional[int] = None


@dataclass(frozen=True)
class AttendanceLogRow:
    """Read-model for the daily log (record joined with the student name)."""

    id: int
    student_id: int
    student_name: str
    date: date
    time: datetime
    type: AttendanceType
    status: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "student_id": self.student_id,
            "student_name": self.student_name,
            "date": self.date.strftime("%Y-%m-%d"),
            "time": self.time.strftime("%H:%M:%S"),
            "type": self.type.value,
            "status": self.status,
        }
