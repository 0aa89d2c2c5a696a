from __future__ import annotations

from typing import Protocol, Sequence

from .model import NewStudent, Student


class StudentRepository(Protocol):
    """Repository interface for the roster.

    Note (DIP): services depend on this interface, not on the Record Store transport.
    """

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def create(self, student: NewStudent) -> None:
        raise NotImplementedError

    def delete(self, student_id: str) -> None:
        raise NotImplementedError
