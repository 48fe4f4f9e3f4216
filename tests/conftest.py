from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pytest

from qr_attendance.attendance.model import AttendanceLogRow, AttendanceRecord
from qr_attendance.core.enums import AttendanceType
from qr_attendance.core.exceptions import PersistenceError
from qr_attendance.students.model import Student


class InMemoryStudents:
    def __init__(self, students=()):
        self._by_id: dict[int, Student] = {s.id: s for s in students}
        self._next_id = max(self._by_id, default=0) + 1
        self.lookups: list[str] = []
        self.fail_lookup = False

    def list_all(self):
        return [self._by_id[k] for k in sorted(self._by_id)]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self._by_id.get(student_id)

    def get_by_qr_code(self, qr_code: str) -> Optional[Student]:
        self.lookups.append(qr_code)
        if self.fail_lookup:
            raise PersistenceError("connection lost")
        return next((s for s in self._by_id.values() if s.qr_code == qr_code), None)

    def create(self, *, name, email, qr_code, contact) -> int:
        sid = self._next_id
        self._next_id += 1
        self._by_id[sid] = Student(id=sid, name=name, email=email, qr_code=qr_code, contact=contact)
        return sid

    def update(self, *, student_id, name, email, qr_code, contact) -> bool:
        if student_id not in self._by_id:
            return False
        self._by_id[student_id] = Student(id=student_id, name=name, email=email, qr_code=qr_code, contact=contact)
        return True

    def delete_by_id(self, student_id: int) -> bool:
        return self._by_id.pop(student_id, None) is not None


class InMemoryAttendance:
    def __init__(self):
        self.records: list[AttendanceRecord] = []
        self.fail_insert = False

    def insert(self, record: AttendanceRecord) -> int:
        if self.fail_insert:
            raise PersistenceError("insert failed")
        self.records.append(record)
        return len(self.records)

    def exists_for(self, *, student_id: int, work_date: date, attendance_type: AttendanceType) -> bool:
        return any(r.student_id == student_id and r.date == work_date and r.type == attendance_type for r in self.records)

    def list_for_date(self, work_date: date, *, limit: int):
        rows = [
            AttendanceLogRow(
                id=i + 1,
                student_id=r.student_id,
                student_name=f"student-{r.student_id}",
                date=r.date,
                time=r.time,
                type=r.type,
                status=r.status,
            )
            for i, r in enumerate(self.records)
            if r.date == work_date
        ]
        rows.sort(key=lambda r: r.time, reverse=True)
        return rows[:limit]


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: int) -> None:
        self.now += ms / 1000.0


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 6, 8, 15, 0)


@pytest.fixture
def alice() -> Student:
    return Student(id=1, name="Alice", email="alice@example.edu", qr_code="QR-A", contact="0901")


@pytest.fixture
def bob() -> Student:
    return Student(id=2, name="Bob", email="bob@example.edu", qr_code="QR-B", contact="0902")


@pytest.fixture
def students_repo(alice, bob) -> InMemoryStudents:
    return InMemoryStudents([alice, bob])


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
