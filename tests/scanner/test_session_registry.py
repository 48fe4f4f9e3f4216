from qr_attendance.attendance.service import AttendanceService
from qr_attendance.scanner.session import ScanSession, ScanSessionRegistry
from qr_attendance.students.service import RosterService


def make_registry(students_repo, attendance_repo):
    return ScanSessionRegistry(
        lambda: ScanSession(students=RosterService(students_repo), attendance=AttendanceService(attendance_repo))
    )


def test_reopening_starts_with_empty_processed_set(students_repo, attendance_repo):
    registry = make_registry(students_repo, attendance_repo)

    first = registry.open("k")
    first.on_decode("QR-A")
    assert first.is_processed("QR-A")

    second = registry.open("k")
    assert first.closed
    assert not second.is_processed("QR-A")
    assert registry.get("k") is second


def test_close_and_get_reopens(students_repo, attendance_repo):
    registry = make_registry(students_repo, attendance_repo)
    s = registry.open("k")

    assert registry.close("k")
    assert s.closed
    assert not registry.close("k")
    assert len(registry) == 0

    again = registry.get("k")
    assert again is not s
    assert not again.closed


def test_peek_never_creates_a_session(students_repo, attendance_repo):
    registry = make_registry(students_repo, attendance_repo)

    assert registry.peek("nobody") is None
    assert len(registry) == 0

    s = registry.open("k")
    assert registry.peek("k") is s
    s.close()
    assert registry.peek("k") is None


def test_idle_sessions_are_evicted(students_repo, attendance_repo, clock):
    registry = ScanSessionRegistry(
        lambda: ScanSession(students=RosterService(students_repo), attendance=AttendanceService(attendance_repo)),
        ttl_s=60,
        clock=clock,
    )
    stale = registry.open("old")
    clock.advance_ms(30_000)
    busy = registry.open("busy")

    clock.advance_ms(40_000)
    assert registry.get("busy") is busy
    assert stale.closed
    assert len(registry) == 1

    clock.advance_ms(59_000)
    assert registry.peek("busy") is busy
    assert not busy.closed
