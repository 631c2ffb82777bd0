# Re-export models so external code can keep using: from eduhub.models import User, SchoolClass, ...
from .user import User, UserRole, TeacherProfile, StudentProfile, ParentProfile, AdminProfile, StudentParent
from .session import AuthSession
from .school_class import SchoolClass, ClassTeacher, ClassEnrollment
from .assignment import Assignment, AssignmentClass, AssignmentType, StudentAssignment, SubmissionStatus
from .grade import Grade
from .attendance import Attendance, AttendanceStatus
from .message import Message, MessageRecipient
from .behavior import BehaviorNote, BehaviorType

__all__ = [
    # people
    "User", "UserRole", "TeacherProfile", "StudentProfile", "ParentProfile", "AdminProfile", "StudentParent",
    "AuthSession",
    # roster
    "SchoolClass", "ClassTeacher", "ClassEnrollment",
    # coursework
    "Assignment", "AssignmentClass", "AssignmentType", "StudentAssignment", "SubmissionStatus", "Grade",
    # attendance, messaging & behavior
    "Attendance", "AttendanceStatus",
    "Message", "MessageRecipient",
    "BehaviorNote", "BehaviorType",
]
