from app.models.catalog import Course, Room
from app.models.login_state import LoginState
from app.models.stored_file import StoredFile
from app.models.timetable import ClassOfDay, ClassOfWeek, ClassRef, Time, TimetableCell, Week
from app.models.user import User, UserSession

__all__ = [
    "User",
    "UserSession",
    "TimetableCell",
    "Week",
    "Time",
    "ClassRef",
    "ClassOfDay",
    "ClassOfWeek",
    "Room",
    "Course",
    "LoginState",
    "StoredFile",
]
