"""User model and the session view returned to authenticated clients.

A User is created the first time a LINE account logs in. Only the hash
of the user's current access token is stored; the raw token is handed
to the client once and never persisted.
"""

import secrets
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship, SQLModel

from app.models.timetable import ClassOfWeek

if TYPE_CHECKING:
    from app.models.timetable import TimetableCell


def create_random_id() -> str:
    """Random 128-bit identifier rendered as 32 hex characters."""
    return secrets.token_hex(16)


class User(SQLModel, table=True):
    """A student using the timetable application.

    Attributes:
        id: Random hex identifier.
        name: Display name taken from the LINE profile.
        line_user_id: The ``sub`` claim of the LINE ID token (unique).
        image_file_hash: Hash of the stored profile image, see StoredFile.
        access_token_hash: SHA-256 of the only access token currently
            valid for this user. Replaced on every login.
        created_at: When the user first logged in.
        timetable_cells: The 30 cells of the weekly timetable.
    """
    id: str = Field(default_factory=create_random_id, primary_key=True)
    name: str
    line_user_id: str = Field(index=True, unique=True)
    image_file_hash: str = ""
    access_token_hash: str = Field(index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationship
    timetable_cells: list["TimetableCell"] = Relationship(back_populates="user")


class UserSession(SQLModel):
    """A verified user together with their timetable."""
    id: str
    name: str
    image_file_hash: str
    timetable: ClassOfWeek
