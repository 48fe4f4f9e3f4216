from __future__ import annotations

import io
from typing import Optional, Sequence

import qrcode

from ..common.validators import optional_text, require_email, require_non_empty
from ..core.app_logger import get_logger
from ..core.exceptions import NotFoundError, PersistenceError, ValidationError
from ..database.mysql_base import is_duplicate_key
from .model import Student
from .repository import StudentRepository

log = get_logger(__name__)


class RosterService:
    """Use case: manage the student roster (list/add/edit/delete)."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def list_students(self) -> Sequence[Student]:
        return self._students.list_all()

    def get_student(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Student not found")
        return student

    def find_by_qr_code(self, qr_code: str) -> Optional[Student]:
        return self._students.get_by_qr_code(qr_code)

    def _clean(self, *, name, email, qr_code, contact) -> dict:
        return {
            "name": require_non_empty(name, "Name"),
            "email": require_email(email),
            "qr_code": require_non_empty(qr_code, "QR code"),
            "contact": optional_text(contact),
        }

    def add_student(self, *, name: str, email: str = "", qr_code: str, contact: str = "") -> Student:
        fields = self._clean(name=name, email=email, qr_code=qr_code, contact=contact)

        if self._students.get_by_qr_code(fields["qr_code"]):
            raise ValidationError("QR code is already assigned to another student")

        try:
            student_id = self._students.create(**fields)
        except PersistenceError as e:
            # Lost a race with a concurrent insert of the same code
            if is_duplicate_key(e):
                raise ValidationError("QR code is already assigned to another student") from e
            raise

        log.info("student added id=%s qr_code=%s", student_id, fields["qr_code"])
        return Student(id=student_id, **fields)

    def update_student(
        self,
        student_id: int,
        *,
        name: str,
        email: str = "",
        qr_code: str,
        contact: str = "",
    ) -> Student:
        student_id = int(student_id)
        fields = self._clean(name=name, email=email, qr_code=qr_code, contact=contact)

        owner = self._students.get_by_qr_code(fields["qr_code"])
        if owner and owner.id != student_id:
            raise ValidationError("QR code is already assigned to another student")

        if not self._students.update(student_id=student_id, **fields):
            raise NotFoundError("Student not found")

        log.info("student updated id=%s", student_id)
        return Student(id=student_id, **fields)

    def delete_student(self, student_id: int) -> None:
        if not self._students.delete_by_id(int(student_id)):
            raise NotFoundError("Student not found")
        log.info("student deleted id=%s", student_id)

    def qr_image(self, student_id: int) -> bytes:
        """Render the student's QR code as PNG bytes."""
        student = self.get_student(student_id)

        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=2,
        )
        qr.add_data(student.qr_code)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()
