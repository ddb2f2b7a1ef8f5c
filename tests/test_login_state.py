"""Tests for one-time login states."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlmodel import Session, select

from app.auth.login_state import (
    consume_login_state,
    issue_login_state,
    purge_expired_login_states,
)
from app.core.exceptions import UpstreamFailureError
from app.models import LoginState


def add_expired_state(session: Session, state: str) -> None:
    session.add(LoginState(state=state, created_at=datetime.now(UTC) - timedelta(hours=1)))
    session.commit()


class TestIssueLoginState:
    """Tests for issuing login states."""

    def test_persisted(self, session: Session):
        """Test an issued state is stored."""
        state = issue_login_state(session)
        assert session.get(LoginState, state) is not None

    def test_unique(self, session: Session):
        """Test two issued states differ."""
        assert issue_login_state(session) != issue_login_state(session)


class TestConsumeLoginState:
    """Tests for consuming login states."""

    def test_consumed_exactly_once(self, session: Session):
        """Test a state can be consumed only once."""
        state = issue_login_state(session)

        assert consume_login_state(session, state) is True
        assert consume_login_state(session, state) is False
        assert session.get(LoginState, state) is None

    def test_unknown_state(self, session: Session):
        """Test a state that was never issued is rejected."""
        assert consume_login_state(session, "never-issued") is False

    def test_does_not_touch_other_states(self, session: Session):
        """Test consuming one state leaves the others."""
        first = issue_login_state(session)
        second = issue_login_state(session)

        assert consume_login_state(session, first) is True
        assert session.get(LoginState, second) is not None
        assert consume_login_state(session, second) is True

    def test_expired_state_rejected_and_removed(self, session: Session):
        """Test an expired state is rejected and deleted."""
        add_expired_state(session, "stale")

        assert consume_login_state(session, "stale") is False
        session.expire_all()
        assert session.get(LoginState, "stale") is None

    def test_storage_failure(self, session: Session, engine):
        """Test a failing delete is reported as an upstream failure."""
        state = issue_login_state(session)
        LoginState.__table__.drop(engine)

        with pytest.raises(UpstreamFailureError):
            consume_login_state(session, state)


class TestPurgeExpiredLoginStates:
    """Tests for the expired state purge."""

    def test_removes_only_expired(self, session: Session):
        """Test only expired states are purged."""
        add_expired_state(session, "stale-1")
        add_expired_state(session, "stale-2")
        fresh = issue_login_state(session)

        assert purge_expired_login_states(session) == 2

        session.expire_all()
        remaining = [s.state for s in session.exec(select(LoginState)).all()]
        assert remaining == [fresh]
