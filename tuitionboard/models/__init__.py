"""Database models package."""

from tuitionboard.models.attendance import AttendanceRecord
from tuitionboard.models.base import RecordStatus
from tuitionboard.models.class_log import ClassLog
from tuitionboard.models.student import Student
from tuitionboard.models.tuition import Tuition
from tuitionboard.models.user import User, UserRole

__all__ = [
    # User
    "User",
    "UserRole",
    # Tuition
    "Tuition",
    "RecordStatus",
    # Student
    "Student",
    # Attendance
    "AttendanceRecord",
    # Class log
    "ClassLog",
]
