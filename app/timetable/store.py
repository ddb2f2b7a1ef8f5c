"""Per-user weekly timetable reads and single-cell overwrites."""
import logging

from sqlalchemy import exists, update
from sqlmodel import Session, select

from app.auth.hashing import hash_access_token
from app.auth.session import get_user_by_access_token, load_user_session
from app.core.database import commit, storage_errors
from app.core.exceptions import InvalidSessionError, NotFoundError
from app.models import ClassOfWeek, Time, TimetableCell, User, UserSession, Week
from app.timetable.grid import cells_to_grid

logger = logging.getLogger(__name__)


def get_timetable(session: Session, user_id: str) -> ClassOfWeek:
    """
    Return the 30 cells of a user's timetable.

    Cells hold class references by id only; class details are resolved
    through the catalog.
    """
    with storage_errors(session, "reading a timetable"):
        if session.get(User, user_id) is None:
            raise NotFoundError(f"User {user_id} does not exist")
        cells = session.exec(
            select(TimetableCell)
            .where(TimetableCell.user_id == user_id)
            .execution_options(populate_existing=True)
        ).all()
    return cells_to_grid(cells)


def set_timetable_cell(
    session: Session,
    access_token: str,
    week: Week,
    time: Time,
    course_id: str | None,
) -> UserSession:
    """
    Overwrite one cell of the caller's timetable.

    The access token is verified first. The write touches only the
    targeted (week, time) row and is conditional on the token hash still
    being current, so a token revoked by a concurrent login cannot write.
    The class id is stored as given, without checking the catalog.

    Writing the same value twice leaves the timetable unchanged and
    returns the same snapshot. Returns the user with the full updated
    timetable.
    """
    user = get_user_by_access_token(session, access_token)
    token_hash = hash_access_token(access_token)

    with storage_errors(session, f"writing {week.value}/{time.value}"):
        result = session.connection().execute(
            update(TimetableCell)
            .where(TimetableCell.user_id == user.id)
            .where(TimetableCell.week == week)
            .where(TimetableCell.time == time)
            .where(
                exists().where(User.id == TimetableCell.user_id, User.access_token_hash == token_hash)
            )
            .values(course_id=course_id)
        )
        if result.rowcount == 0:
            session.rollback()
            raise InvalidSessionError()

        snapshot = load_user_session(session, user)
    commit(session)
    logger.info(f"User {snapshot.id} set {week.value}/{time.value} to {course_id}")
    return snapshot
