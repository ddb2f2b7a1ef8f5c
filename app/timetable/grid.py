"""Conversion between timetable cell rows and the fixed grid shape."""
from collections.abc import Iterable

from app.models import ClassOfDay, ClassOfWeek, ClassRef, Time, TimetableCell, Week


def empty_cells(user_id: str) -> list[TimetableCell]:
    """Create the 30 empty cells a new user starts with."""
    return [
        TimetableCell(user_id=user_id, week=week, time=time, course_id=None)
        for week in Week
        for time in Time
    ]


def _class_ref(course_id: str | None) -> ClassRef | None:
    if course_id is None:
        return None
    return ClassRef(id=course_id)


def cells_to_grid(cells: Iterable[TimetableCell]) -> ClassOfWeek:
    """Build the weekly grid from a user's cell rows. Slots without a row are empty."""
    grid = ClassOfWeek()
    for cell in cells:
        day: ClassOfDay = getattr(grid, Week(cell.week).value)
        setattr(day, Time(cell.time).value, _class_ref(cell.course_id))
    return grid


def grid_cell(grid: ClassOfWeek, week: Week, time: Time) -> ClassRef | None:
    """Read one slot of the grid."""
    return getattr(getattr(grid, week.value), time.value)
