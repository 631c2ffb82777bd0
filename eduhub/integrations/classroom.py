"""Google Classroom sync.

Only the provider seam exists: no real Classroom behaviour is implemented, so
the default provider does nothing and reports nothing synced.
"""
from __future__ import annotations

from typing import Any, Optional


class ClassroomProvider:
    def auth_url(self) -> str:
        raise NotImplementedError

    def handle_callback(self, code: str) -> Optional[dict[str, Any]]:
        raise NotImplementedError

    def sync_courses(self, teacher_id: int) -> list[dict[str, Any]]:
        raise NotImplementedError

    def push_assignment(self, assignment_id: int, course_id: str) -> Optional[str]:
        raise NotImplementedError

    def import_grades(self, class_id: int, course_id: str) -> list[dict[str, Any]]:
        raise NotImplementedError

    def export_grades(self, class_id: int, course_id: str) -> list[dict[str, Any]]:
        raise NotImplementedError


class NullClassroomProvider(ClassroomProvider):
    def auth_url(self) -> str:
        return ""

    def handle_callback(self, code: str) -> Optional[dict[str, Any]]:
        return None

    def sync_courses(self, teacher_id: int) -> list[dict[str, Any]]:
        return []

    def push_assignment(self, assignment_id: int, course_id: str) -> Optional[str]:
        return None

    def import_grades(self, class_id: int, course_id: str) -> list[dict[str, Any]]:
        return []

    def export_grades(self, class_id: int, course_id: str) -> list[dict[str, Any]]:
        return []
