from __future__ import annotations

from enum import Enum


class AttendanceType(str, Enum):
    """Attendance event kind stored in the `type` column."""

    TIME_IN = "time_in"
    TIME_OUT = "time_out"
