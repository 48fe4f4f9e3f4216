from datetime import timedelta

import pytest

from qr_attendance.core.enums import AttendanceType
from qr_attendance.core.exceptions import PersistenceError, ValidationError
from qr_attendance.attendance.service import AttendanceService


def test_record_writes_present_row(attendance_repo, fixed_now):
    svc = AttendanceService(attendance_repo)

    rec = svc.record(1, AttendanceType.TIME_IN, now=fixed_now)

    assert rec.id == 1
    assert rec.date == fixed_now.date()
    assert rec.time == fixed_now
    assert rec.status == "Present"
    assert attendance_repo.records[0].type == AttendanceType.TIME_IN


def test_record_accepts_raw_type_value(attendance_repo, fixed_now):
    rec = AttendanceService(attendance_repo).record(1, "time_out", now=fixed_now)
    assert rec.type == AttendanceType.TIME_OUT


def test_without_limit_duplicates_are_written(attendance_repo, fixed_now):
    svc = AttendanceService(attendance_repo)

    svc.record(1, AttendanceType.TIME_IN, now=fixed_now)
    svc.record(1, AttendanceType.TIME_IN, now=fixed_now + timedelta(minutes=1))

    assert len(attendance_repo.records) == 2


def test_daily_limit_blocks_second_time_in(attendance_repo, fixed_now):
    svc = AttendanceService(attendance_repo, enforce_daily_limit=True)
    svc.record(1, AttendanceType.TIME_IN, now=fixed_now)

    with pytest.raises(ValidationError, match="Already timed in"):
        svc.record(1, AttendanceType.TIME_IN, now=fixed_now + timedelta(hours=1))

    # next day is fine
    svc.record(1, AttendanceType.TIME_IN, now=fixed_now + timedelta(days=1))
    assert len(attendance_repo.records) == 2


def test_daily_limit_time_out_requires_time_in(attendance_repo, fixed_now):
    svc = AttendanceService(attendance_repo, enforce_daily_limit=True)

    with pytest.raises(ValidationError):
        svc.record(1, AttendanceType.TIME_OUT, now=fixed_now)

    svc.record(1, AttendanceType.TIME_IN, now=fixed_now)
    svc.record(1, AttendanceType.TIME_OUT, now=fixed_now + timedelta(hours=8))

    with pytest.raises(ValidationError, match="Already timed out"):
        svc.record(1, AttendanceType.TIME_OUT, now=fixed_now + timedelta(hours=9))


def test_insert_failure_propagates(attendance_repo, fixed_now):
    attendance_repo.fail_insert = True
    with pytest.raises(PersistenceError):
        AttendanceService(attendance_repo).record(1, AttendanceType.TIME_IN, now=fixed_now)


def test_list_for_date_newest_first(attendance_repo, fixed_now):
    svc = AttendanceService(attendance_repo)
    svc.record(1, AttendanceType.TIME_IN, now=fixed_now)
    svc.record(2, AttendanceType.TIME_IN, now=fixed_now + timedelta(minutes=5))
    svc.record(3, AttendanceType.TIME_IN, now=fixed_now - timedelta(days=1))

    rows = svc.list_for_date(fixed_now.date())

    assert [r.student_id for r in rows] == [2, 1]
    assert rows[0].to_dict()["type"] == "time_in"
