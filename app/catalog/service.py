"""Read access to the room and class catalog, and seed data loading."""
import json
import logging
from pathlib import Path

from sqlmodel import Session, select

from app.core.database import commit, storage_errors
from app.core.exceptions import NotFoundError
from app.models import Course, Room, Time, Week
from app.models.catalog import CourseOut, RoomOut, WeekAndTime

logger = logging.getLogger(__name__)


def list_rooms(session: Session) -> list[RoomOut]:
    with storage_errors(session, "listing rooms"):
        rooms = session.exec(select(Room).order_by(Room.id)).all()
    return [RoomOut(id=room.id, name=room.name) for room in rooms]


def get_room(session: Session, room_id: str) -> RoomOut:
    with storage_errors(session, f"reading room {room_id}"):
        room = session.get(Room, room_id)
    if room is None:
        raise NotFoundError(f"Room {room_id} does not exist")
    return RoomOut(id=room.id, name=room.name)


def _course_out(session: Session, course: Course) -> CourseOut:
    return CourseOut(
        id=course.id,
        name=course.name,
        teacher=course.teacher,
        room=get_room(session, course.room_id),
        week_and_time=WeekAndTime(week=course.week, time=course.time),
    )


def list_classes(session: Session) -> list[CourseOut]:
    with storage_errors(session, "listing classes"):
        courses = session.exec(select(Course).order_by(Course.id)).all()
    return [_course_out(session, course) for course in courses]


def get_class(session: Session, course_id: str) -> CourseOut:
    with storage_errors(session, f"reading class {course_id}"):
        course = session.get(Course, course_id)
    if course is None:
        raise NotFoundError(f"Class {course_id} does not exist")
    return _course_out(session, course)


def load_seed_data(session: Session, path: str | Path) -> dict:
    """
    Load rooms and classes from a JSON seed file.

    The file holds two lists, ``rooms`` (id, name) and ``classes`` (id,
    name, teacher, room, week, time). Nothing is loaded if the catalog
    already has rooms, so the call is safe on every startup.

    Returns dict with load statistics.
    """
    if session.exec(select(Room)).first() is not None:
        logger.info("Catalog already loaded, skipping seed data")
        return {"rooms": 0, "classes": 0}

    seed = json.loads(Path(path).read_text(encoding="utf-8"))
    for room in seed.get("rooms", []):
        session.add(Room(id=room["id"], name=room["name"]))
    for entry in seed.get("classes", []):
        session.add(
            Course(
                id=entry["id"],
                name=entry["name"],
                teacher=entry["teacher"],
                room_id=entry["room"],
                week=Week(entry["week"]),
                time=Time(entry["time"]),
            )
        )
    commit(session)

    stats = {"rooms": len(seed.get("rooms", [])), "classes": len(seed.get("classes", []))}
    logger.info(f"Loaded seed data from {path}: {stats}")
    return stats
