"""Which role may perform which operation.

Handlers never branch on role themselves; they declare the permission they
need through ``require_permission`` and the check happens here.
"""
from enum import Enum

from eduhub.models import UserRole


class Permission(str, Enum):
    CLASSES_READ = "classes:read"
    ATTENDANCE_READ = "attendance:read"
    ATTENDANCE_WRITE = "attendance:write"
    ASSIGNMENTS_READ = "assignments:read"
    ASSIGNMENTS_WRITE = "assignments:write"
    GRADEBOOK_READ = "gradebook:read"
    GRADES_WRITE = "grades:write"
    STUDENTS_READ = "students:read"
    BEHAVIOR_WRITE = "behavior:write"
    TEACHER_DASHBOARD = "dashboard:teacher"
    ADMIN_DASHBOARD = "dashboard:admin"
    MESSAGES_SEND = "messages:send"
    USERS_READ = "users:read"


_COMMUNICATION = frozenset({Permission.MESSAGES_SEND, Permission.USERS_READ})

ROLE_PERMISSIONS: dict[UserRole, frozenset[Permission]] = {
    UserRole.ADMIN: _COMMUNICATION | {Permission.ADMIN_DASHBOARD},
    UserRole.TEACHER: _COMMUNICATION | {
        Permission.CLASSES_READ,
        Permission.ATTENDANCE_READ,
        Permission.ATTENDANCE_WRITE,
        Permission.ASSIGNMENTS_READ,
        Permission.ASSIGNMENTS_WRITE,
        Permission.GRADEBOOK_READ,
        Permission.GRADES_WRITE,
        Permission.STUDENTS_READ,
        Permission.BEHAVIOR_WRITE,
        Permission.TEACHER_DASHBOARD,
    },
    UserRole.PARENT: _COMMUNICATION,
    UserRole.STUDENT: _COMMUNICATION,
}


def has_permission(role: UserRole | str, permission: Permission) -> bool:
    try:
        role = UserRole(role)
    except ValueError:
        return False
    return permission in ROLE_PERMISSIONS.get(role, frozenset())
