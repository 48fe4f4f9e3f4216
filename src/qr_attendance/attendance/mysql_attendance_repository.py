from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import AttendanceType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceLogRow, AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(self, record: AttendanceRecord) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(student_id, date, time, type, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (record.student_id, record.date, record.time, record.type.value, record.status),
            )
            return int(cur.lastrowid)

    def exists_for(self, *, student_id: int, work_date: date, attendance_type: AttendanceType) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id FROM attendance
                WHERE student_id=%s AND date=%s AND type=%s
                LIMIT 1
                """,
                (int(student_id), work_date, attendance_type.value),
            )
            return fetchone(cur) is not None

    def list_for_date(self, work_date: date, *, limit: int) -> Sequence[AttendanceLogRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.id, a.student_id, s.name AS student_name, a.date, a.time, a.type, a.status
                FROM attendance a
                JOIN students s ON s.id = a.student_id
                WHERE a.date=%s
                ORDER BY a.time DESC
                LIMIT %s
                """,
                (work_date, int(limit)),
            )
            return [
                AttendanceLogRow(
                    id=int(r["id"]),
                    student_id=int(r["student_id"]),
                    student_name=r["student_name"],
                    date=r["date"],
                    time=r["time"],
                    type=AttendanceType(r["type"]),
                    status=r["status"],
                )
                for r in fetchall(cur)
            ]
