from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..core.enums import AttendanceType
from .model import AttendanceLogRow, AttendanceRecord


class AttendanceRepository(Protocol):
    def insert(self, record: AttendanceRecord) -> int:
        raise NotImplementedError

    def exists_for(self, *, student_id: int, work_date: date, attendance_type: AttendanceType) -> bool:
        raise NotImplementedError

    def list_for_date(self, work_date: date, *, limit: int) -> Sequence[AttendanceLogRow]:
        raise NotImplementedError
