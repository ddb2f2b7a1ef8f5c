"""Room and class reference data.

Rooms and classes are loaded once from seed data and never modified
through the API. Many users may register the same class.
"""

from sqlmodel import Field, SQLModel

from app.models.timetable import Time, Week


class Room(SQLModel, table=True):
    """A lecture room.

    Attributes:
        id: Room identifier.
        name: Display name of the room.
    """
    id: str = Field(primary_key=True)
    name: str


class Course(SQLModel, table=True):
    """A class taught at a fixed slot of the week.

    Attributes:
        id: Class identifier.
        name: Name of the class.
        teacher: Name of the teacher.
        room_id: Room in which the class is taught.
        week: Day the class is taught.
        time: Period the class is taught.
    """
    id: str = Field(primary_key=True)
    name: str
    teacher: str
    room_id: str = Field(foreign_key="room.id", index=True)
    week: Week
    time: Time


class WeekAndTime(SQLModel):
    week: Week
    time: Time


class RoomOut(SQLModel):
    id: str
    name: str


class CourseOut(SQLModel):
    """A class with its room resolved."""
    id: str
    name: str
    teacher: str
    room: RoomOut
    week_and_time: WeekAndTime
