"""Access token issuance and session verification.

Each user has exactly one valid access token: the one whose hash is
stored in ``User.access_token_hash``. Issuing a new token overwrites
the hash, which revokes every token issued before it. Logging in on a
second device therefore logs the first one out.
"""
import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.auth.hashing import create_access_token, hash_access_token
from app.core.database import commit, storage_errors
from app.core.exceptions import InvalidSessionError, NotFoundError
from app.models import TimetableCell, User, UserSession
from app.timetable.grid import cells_to_grid, empty_cells

logger = logging.getLogger(__name__)


def issue_token(session: Session, user_id: str) -> str:
    """
    Issue a new access token for a user, revoking all previous ones.

    The hash is replaced with a single UPDATE so that two concurrent
    logins leave exactly one of the two tokens valid. The raw token is
    returned to the caller and not stored.
    """
    access_token = create_access_token()
    with storage_errors(session, f"issuing a token for user {user_id}"):
        result = session.connection().execute(
            update(User)
            .where(User.id == user_id)
            .values(access_token_hash=hash_access_token(access_token))
        )
        if result.rowcount == 0:
            session.rollback()
            raise NotFoundError(f"User {user_id} does not exist")
    commit(session)
    logger.info(f"Issued access token for user {user_id}")
    return access_token


def find_user_by_line_user_id(session: Session, line_user_id: str) -> User | None:
    """Look up the user linked to a LINE account."""
    with storage_errors(session, f"looking up LINE account {line_user_id}"):
        return session.exec(select(User).where(User.line_user_id == line_user_id)).first()


def create_user_from_external_identity(
    session: Session, name: str, line_user_id: str, image_file_hash: str = ""
) -> str:
    """
    Create a user for a LINE account and return their first access token.

    The user is created together with an empty 6x5 timetable. If the
    same account was registered concurrently, the existing user gets a
    fresh token instead.
    """
    access_token = create_access_token()
    user = User(
        name=name,
        line_user_id=line_user_id,
        image_file_hash=image_file_hash,
        access_token_hash=hash_access_token(access_token),
    )
    with storage_errors(session, f"creating a user for LINE account {line_user_id}"):
        session.add(user)
        for cell in empty_cells(user.id):
            session.add(cell)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            logger.warning(f"LINE account {line_user_id} was registered concurrently")
            return reissue_token_for_existing_user(session, line_user_id)
    logger.info(f"Created user {user.id} for LINE account {line_user_id}")
    return access_token


def reissue_token_for_existing_user(session: Session, line_user_id: str) -> str:
    """Issue a new access token for the user linked to a LINE account."""
    user = find_user_by_line_user_id(session, line_user_id)
    if user is None:
        raise NotFoundError(f"No user for LINE account {line_user_id}")
    return issue_token(session, user.id)


def get_user_by_access_token(session: Session, access_token: str) -> User:
    """Find the user whose current token is ``access_token``.

    Raises InvalidSessionError when no user matches, including when the
    token was revoked by a newer login.
    """
    token_hash = hash_access_token(access_token)
    with storage_errors(session, "verifying an access token"):
        user = session.exec(select(User).where(User.access_token_hash == token_hash)).first()
    if user is None:
        raise InvalidSessionError()
    return user


def load_user_session(session: Session, user: User) -> UserSession:
    """Build the session view of a user, reading the timetable fresh."""
    with storage_errors(session, f"loading the timetable of user {user.id}"):
        cells = session.exec(
            select(TimetableCell)
            .where(TimetableCell.user_id == user.id)
            .execution_options(populate_existing=True)
        ).all()
    return UserSession(
        id=user.id,
        name=user.name,
        image_file_hash=user.image_file_hash,
        timetable=cells_to_grid(cells),
    )


def verify_session(session: Session, access_token: str) -> UserSession:
    """Verify an access token and return the user with their timetable."""
    user = get_user_by_access_token(session, access_token)
    return load_user_session(session, user)
