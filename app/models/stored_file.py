"""Content-addressed file storage, used for profile images."""

from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class StoredFile(SQLModel, table=True):
    """A binary file keyed by the hash of its content and MIME type.

    Attributes:
        hash: SHA-256 hex digest of the bytes followed by the MIME type.
        mime_type: Content type the file is served with.
        data: Raw file content.
        created_at: When the file was first stored.
    """
    hash: str = Field(primary_key=True, max_length=64)
    mime_type: str
    data: bytes
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
