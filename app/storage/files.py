"""Content-addressed file storage backed by the database."""
import hashlib
import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.auth.line import fetch_image
from app.core.database import storage_errors
from app.core.exceptions import NotFoundError
from app.models import StoredFile

logger = logging.getLogger(__name__)

FILE_HASH_LENGTH = 64


def create_file_hash(data: bytes, mime_type: str) -> str:
    """SHA-256 over the file bytes followed by the UTF-8 MIME type."""
    digest = hashlib.sha256()
    digest.update(data)
    digest.update(mime_type.encode("utf-8"))
    return digest.hexdigest()


def parse_file_hash(value: str) -> str:
    """Validate a file hash: 64 lowercase hex characters."""
    if len(value) != FILE_HASH_LENGTH:
        raise ValueError(f"Hash length must be {FILE_HASH_LENGTH}")
    if any(char not in "0123456789abcdef" for char in value):
        raise ValueError("Hash characters must match [0-9a-f]")
    return value


def save_file(session: Session, data: bytes, mime_type: str) -> str:
    """Store a file and return its hash. Storing the same file twice is a no-op."""
    file_hash = create_file_hash(data, mime_type)
    with storage_errors(session, f"storing file {file_hash}"):
        if session.get(StoredFile, file_hash) is not None:
            return file_hash
        session.add(StoredFile(hash=file_hash, mime_type=mime_type, data=data))
        try:
            session.commit()
        except IntegrityError:
            # Stored by a concurrent request; same hash, same content
            session.rollback()
            return file_hash
    logger.info(f"Stored file {file_hash} ({mime_type}, {len(data)} bytes)")
    return file_hash


async def save_image_from_url(session: Session, url: str) -> str:
    """Download an image and store it, returning its hash."""
    data, mime_type = await fetch_image(url)
    return save_file(session, data, mime_type)


def get_file(session: Session, file_hash: str) -> StoredFile:
    with storage_errors(session, f"reading file {file_hash}"):
        stored = session.get(StoredFile, file_hash)
    if stored is None:
        raise NotFoundError(f"File {file_hash} does not exist")
    return stored
