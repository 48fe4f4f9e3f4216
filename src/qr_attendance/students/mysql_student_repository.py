from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository

_COLUMNS = "id, name, email, qr_code, contact"


def _to_student(row: Dict[str, Any]) -> Student:
    return Student(
        id=int(row["id"]),
        name=row["name"],
        email=row.get("email") or "",
        qr_code=row["qr_code"],
        contact=row.get("contact") or "",
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY id ASC")
            return [_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE id=%s", (int(student_id),))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def get_by_qr_code(self, qr_code: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            # qr_code is UNIQUE, so at most one row comes back
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE qr_code=%s", (qr_code,))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def create(self, *, name: str, email: str, qr_code: str, contact: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(name, email, qr_code, contact)
                VALUES(%s,%s,%s,%s)
                """,
                (name, email, qr_code, contact),
            )
            return int(cur.lastrowid)

    def update(self, *, student_id: int, name: str, email: str, qr_code: str, contact: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET name=%s, email=%s, qr_code=%s, contact=%s
                WHERE id=%s
                """,
                (name, email, qr_code, contact, int(student_id)),
            )
            # MySQL reports 0 affected rows for an update that changes nothing
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM students WHERE id=%s", (int(student_id),))
            return fetchone(cur) is not None

    def delete_by_id(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE id=%s", (int(student_id),))
            return cur.rowcount > 0
