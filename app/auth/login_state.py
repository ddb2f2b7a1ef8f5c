"""One-time login states protecting the LINE Login callback.

A state is stored when an authorization URL is issued and must come
back unchanged on the callback. Consuming it deletes the row; whichever
request's DELETE removes the row wins, so a replayed or duplicated
redirect can never be accepted twice. States expire after
``login_state_ttl_minutes``.
"""
import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy import delete
from sqlmodel import Session

from app.auth.hashing import create_random_state
from app.core.config import settings
from app.core.database import commit, storage_errors
from app.models import LoginState

logger = logging.getLogger(__name__)


def _expiry_cutoff() -> datetime:
    return datetime.now(UTC) - timedelta(minutes=settings.login_state_ttl_minutes)


def issue_login_state(session: Session) -> str:
    """Create and persist a new login state."""
    state = create_random_state()
    session.add(LoginState(state=state))
    commit(session)
    return state


def consume_login_state(session: Session, state: str) -> bool:
    """
    Consume a login state.

    Returns True if the state existed, had not expired, and was deleted
    by this call. Returns False for unknown, already consumed, or expired
    states; an expired state is removed as well.
    """
    with storage_errors(session, "consuming a login state"):
        connection = session.connection()
        result = connection.execute(
            delete(LoginState)
            .where(LoginState.state == state)
            .where(LoginState.created_at >= _expiry_cutoff())
        )
        if result.rowcount == 1:
            session.commit()
            return True

        expired = connection.execute(delete(LoginState).where(LoginState.state == state))
        session.commit()
    if expired.rowcount:
        logger.warning("Rejected expired login state")
    else:
        logger.warning("Rejected unknown or already consumed login state")
    return False


def purge_expired_login_states(session: Session) -> int:
    """Delete all expired login states. Returns the number removed."""
    with storage_errors(session, "purging expired login states"):
        result = session.connection().execute(
            delete(LoginState).where(LoginState.created_at < _expiry_cutoff())
        )
        session.commit()
    return result.rowcount
