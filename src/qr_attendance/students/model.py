from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Student:
    """Domain entity: a roster entry identified at the scanner by its QR code."""

    id: int
    name: str
    email: str
    qr_code: str
    contact: str = ""

    def to_dict(self) -> dict:
        return asdict(self)
