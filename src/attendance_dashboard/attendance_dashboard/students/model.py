from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a student on the roster.

    Note: ``student_id`` is assigned by the Record Store, never by this application.
    ``class_id`` is a free-text label; two students share a class iff the strings are equal.
    """

    student_id: str
    name: str
    roll_no: str
    class_id: str
    parent_name: Optional[str] = None
    parent_phone: Optional[str] = None


@dataclass(frozen=True)
class NewStudent:
    """Payload for creating a student (everything but the id)."""

    name: str
    roll_no: str
    class_id: str
    parent_name: Optional[str] = None
    parent_phone: Optional[str] = None
