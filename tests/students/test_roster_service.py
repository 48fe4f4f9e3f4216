import pytest

from qr_attendance.core.exceptions import NotFoundError, PersistenceError, ValidationError
from qr_attendance.students.service import RosterService


def test_add_student_trims_and_returns_entity(students_repo):
    roster = RosterService(students_repo)

    s = roster.add_student(name="  Carol ", email="carol@example.edu", qr_code=" QR-C ", contact="")

    assert s.name == "Carol"
    assert s.qr_code == "QR-C"
    assert roster.find_by_qr_code("QR-C") == s
    assert [x.name for x in roster.list_students()] == ["Alice", "Bob", "Carol"]


@pytest.mark.parametrize(
    "fields",
    [
        {"name": "", "qr_code": "QR-X"},
        {"name": "X", "qr_code": "   "},
        {"name": "X", "qr_code": "QR-X", "email": "not-an-email"},
    ],
)
def test_add_student_validation(students_repo, fields):
    with pytest.raises(ValidationError):
        RosterService(students_repo).add_student(**fields)


def test_add_student_duplicate_qr_code_rejected(students_repo):
    with pytest.raises(ValidationError):
        RosterService(students_repo).add_student(name="Copy", qr_code="QR-A")


def test_update_student_keeps_own_code_and_rejects_foreign_one(students_repo, alice):
    roster = RosterService(students_repo)

    updated = roster.update_student(alice.id, name="Alice B.", email=alice.email, qr_code="QR-A", contact="0999")
    assert updated.name == "Alice B."
    assert roster.get_student(alice.id).contact == "0999"

    with pytest.raises(ValidationError):
        roster.update_student(alice.id, name="Alice", qr_code="QR-B")


def test_update_missing_student(students_repo):
    with pytest.raises(NotFoundError):
        RosterService(students_repo).update_student(99, name="Ghost", qr_code="QR-G")


def test_delete_student(students_repo, bob):
    roster = RosterService(students_repo)

    roster.delete_student(bob.id)

    assert roster.find_by_qr_code("QR-B") is None
    with pytest.raises(NotFoundError):
        roster.delete_student(bob.id)


def test_store_errors_propagate(students_repo):
    students_repo.fail_lookup = True
    with pytest.raises(PersistenceError):
        RosterService(students_repo).add_student(name="X", qr_code="QR-X")


def test_qr_image_is_png(students_repo, alice):
    png = RosterService(students_repo).qr_image(alice.id)

    assert png.startswith(b"\x89PNG\r\n\x1a\n")


def test_qr_image_missing_student(students_repo):
    with pytest.raises(NotFoundError):
        RosterService(students_repo).qr_image(42)
