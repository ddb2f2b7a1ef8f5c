"""Timetable models: the fixed weekly grid of class slots.

Each user owns exactly one TimetableCell row per (week, time) pair,
created empty together with the user and only ever overwritten. The
non-table models below give the grid a fixed shape for API responses,
with one field per day and per period instead of a free-form mapping.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from app.models.user import User


class Week(str, Enum):
    """Days of the week on which classes are taught."""
    monday = "monday"
    tuesday = "tuesday"
    wednesday = "wednesday"
    thursday = "thursday"
    friday = "friday"
    saturday = "saturday"


class Time(str, Enum):
    """Class periods of a day."""
    class1 = "class1"
    class2 = "class2"
    class3 = "class3"
    class4 = "class4"
    class5 = "class5"


class TimetableCell(SQLModel, table=True):
    """One slot of a user's weekly timetable.

    Attributes:
        user_id: Owner of the timetable.
        week: Day of the slot.
        time: Period of the slot.
        course_id: Class registered in this slot, or None when empty.
            Not checked against the class catalog.
        user: Reference to the owning User.
    """
    user_id: str = Field(foreign_key="user.id", primary_key=True)
    week: Week = Field(primary_key=True)
    time: Time = Field(primary_key=True)
    course_id: str | None = None

    # Relationship
    user: Optional["User"] = Relationship(back_populates="timetable_cells")


class ClassRef(SQLModel):
    """Reference to a class by id, without class details."""
    id: str


class ClassOfDay(SQLModel):
    """Classes registered for each period of one day."""
    class1: ClassRef | None = None
    class2: ClassRef | None = None
    class3: ClassRef | None = None
    class4: ClassRef | None = None
    class5: ClassRef | None = None


class ClassOfWeek(SQLModel):
    """The full 6x5 timetable grid."""
    monday: ClassOfDay = Field(default_factory=ClassOfDay)
    tuesday: ClassOfDay = Field(default_factory=ClassOfDay)
    wednesday: ClassOfDay = Field(default_factory=ClassOfDay)
    thursday: ClassOfDay = Field(default_factory=ClassOfDay)
    friday: ClassOfDay = Field(default_factory=ClassOfDay)
    saturday: ClassOfDay = Field(default_factory=ClassOfDay)
