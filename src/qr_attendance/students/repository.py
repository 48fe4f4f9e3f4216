from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Repository interface for Student.

    Services depend on this protocol, not on a concrete database.
    """

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_qr_code(self, qr_code: str) -> Optional[Student]:
        raise NotImplementedError

    def create(self, *, name: str, email: str, qr_code: str, contact: str) -> int:
        raise NotImplementedError

    def update(self, *, student_id: int, name: str, email: str, qr_code: str, contact: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, student_id: int) -> bool:
        raise NotImplementedError
