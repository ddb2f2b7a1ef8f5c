"""Login state model for the LINE Login handshake.

A LoginState is written when an authorization URL is handed out and
deleted when the provider redirects back with it. A state that is not
found at callback time means the redirect was forged or replayed.
"""

from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class LoginState(SQLModel, table=True):
    """A one-time anti-replay value for the OAuth callback.

    Attributes:
        state: Random hex value embedded in the authorization URL.
        created_at: When the authorization URL was issued. States older
            than the configured TTL are rejected.
    """
    state: str = Field(primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), index=True)
