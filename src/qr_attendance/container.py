from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_DEBOUNCE_MS, DEFAULT_SCAN_SESSION_TTL_S
from .database.connection import DBConfig, DatabaseConnection
from .scanner.audio import QueuedAudioCue
from .scanner.session import ScanSession, ScanSessionRegistry
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import RosterService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    students_repo: StudentRepository
    attendance_repo: AttendanceRepository

    roster_service: RosterService
    attendance_service: AttendanceService
    scan_sessions: ScanSessionRegistry


def wire_container(
    *,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    conn: Optional[DatabaseConnection] = None,
    debounce_ms: int = DEFAULT_DEBOUNCE_MS,
    enforce_daily_limit: bool = False,
    session_ttl_s: float = DEFAULT_SCAN_SESSION_TTL_S,
) -> Container:
    roster_service = RosterService(students_repo)
    attendance_service = AttendanceService(attendance_repo, enforce_daily_limit=enforce_daily_limit)

    def new_scan_session() -> ScanSession:
        return ScanSession(
            students=roster_service,
            attendance=attendance_service,
            debounce_ms=debounce_ms,
            audio_cue=QueuedAudioCue(),
        )

    return Container(
        conn=conn,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        roster_service=roster_service,
        attendance_service=attendance_service,
        scan_sessions=ScanSessionRegistry(new_scan_session, ttl_s=session_ttl_s),
    )


def build_container(
    *,
    db_config: dict,
    debounce_ms: int = DEFAULT_DEBOUNCE_MS,
    enforce_daily_limit: bool = False,
    session_ttl_s: float = DEFAULT_SCAN_SESSION_TTL_S,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        conn=conn,
        debounce_ms=debounce_ms,
        enforce_daily_limit=enforce_daily_limit,
        session_ttl_s=session_ttl_s,
    )
