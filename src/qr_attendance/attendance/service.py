from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.app_logger import get_logger
from ..core.constants import DEFAULT_TODAY_LOG_LIMIT, PRESENT_STATUS
from ..core.enums import AttendanceType
from ..core.exceptions import ValidationError
from .model import AttendanceLogRow, AttendanceRecord
from .repository import AttendanceRepository

log = get_logger(__name__)


class AttendanceService:
    """Use case: write attendance rows for identified students.

    With ``enforce_daily_limit`` a student gets at most one ``time_in`` and one
    ``time_out`` per day, and ``time_out`` requires a ``time_in`` first.
    """

    def __init__(self, attendance: AttendanceRepository, *, enforce_daily_limit: bool = False):
        self._attendance = attendance
        self._enforce_daily_limit = bool(enforce_daily_limit)

    def _check_daily_limit(self, student_id: int, attendance_type: AttendanceType, today: date) -> None:
        if self._attendance.exists_for(student_id=student_id, work_date=today, attendance_type=attendance_type):
            label = "in" if attendance_type == AttendanceType.TIME_IN else "out"
            raise ValidationError(f"Already timed {label} today")

        if attendance_type == AttendanceType.TIME_OUT and not self._attendance.exists_for(
            student_id=student_id, work_date=today, attendance_type=AttendanceType.TIME_IN
        ):
            raise ValidationError("Cannot time out before timing in today")

    def record(self, student_id: int, attendance_type: AttendanceType, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()
        attendance_type = AttendanceType(attendance_type)

        if self._enforce_daily_limit:
            self._check_daily_limit(student_id, attendance_type, now.date())

        record = AttendanceRecord(
            student_id=int(student_id),
            date=now.date(),
            time=now,
            type=attendance_type,
            status=PRESENT_STATUS,
        )
        record_id = self._attendance.insert(record)
        log.info("attendance recorded id=%s student_id=%s type=%s", record_id, student_id, attendance_type.value)
        return AttendanceRecord(
            student_id=record.student_id,
            date=record.date,
            time=record.time,
            type=record.type,
            status=record.status,
            id=record_id,
        )

    def list_for_date(self, work_date: Optional[date] = None, *, limit: int = DEFAULT_TODAY_LOG_LIMIT) -> Sequence[AttendanceLogRow]:
        return self._attendance.list_for_date(work_date or now_local().date(), limit=limit)
