"""Tests for content-addressed file storage."""

import hashlib

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from app.core.exceptions import NotFoundError
from app.models import StoredFile
from app.storage.files import create_file_hash, get_file, parse_file_hash, save_file


class TestCreateFileHash:
    """Tests for file hash computation."""

    def test_hashes_bytes_then_mime_type(self):
        """Test the hash covers the bytes followed by the MIME type."""
        expected = hashlib.sha256(b"image-bytes" + b"image/png").hexdigest()
        assert create_file_hash(b"image-bytes", "image/png") == expected

    def test_mime_type_changes_hash(self):
        """Test the same bytes with another MIME type get another hash."""
        assert create_file_hash(b"x", "image/png") != create_file_hash(b"x", "image/jpeg")


class TestParseFileHash:
    """Tests for file hash validation."""

    def test_valid(self):
        """Test a well-formed hash is returned unchanged."""
        value = "0123456789abcdef" * 4
        assert parse_file_hash(value) == value

    def test_wrong_length(self):
        """Test hashes of the wrong length are rejected."""
        with pytest.raises(ValueError):
            parse_file_hash("abc")

    def test_uppercase_rejected(self):
        """Test uppercase hex is rejected."""
        with pytest.raises(ValueError):
            parse_file_hash("A" * 64)


class TestSaveFile:
    """Tests for storing and reading files."""

    def test_save_and_get(self, session: Session):
        """Test a stored file can be read back."""
        file_hash = save_file(session, b"\x89PNG", "image/png")

        stored = get_file(session, file_hash)
        assert stored.data == b"\x89PNG"
        assert stored.mime_type == "image/png"

    def test_same_file_stored_once(self, session: Session):
        """Test storing a file twice keeps one row."""
        first = save_file(session, b"\x89PNG", "image/png")
        second = save_file(session, b"\x89PNG", "image/png")

        assert first == second
        assert len(session.exec(select(StoredFile)).all()) == 1

    def test_concurrent_save(self, session: Session, engine, monkeypatch):
        """Test a file stored by another request in the meantime is not an error."""
        with Session(engine) as other:
            first = save_file(other, b"\x89PNG", "image/png")
        monkeypatch.setattr(session, "get", lambda *args, **kwargs: None)

        assert save_file(session, b"\x89PNG", "image/png") == first
        assert len(session.exec(select(StoredFile)).all()) == 1

    def test_get_missing(self, session: Session):
        """Test reading an unknown hash raises NotFoundError."""
        with pytest.raises(NotFoundError):
            get_file(session, "0" * 64)


class TestFileRoute:
    """Tests for the file download endpoint."""

    def test_serves_file_with_cache_headers(self, client: TestClient, session: Session):
        """Test files are served with their MIME type and long caching."""
        file_hash = save_file(session, b"\xff\xd8jpeg", "image/jpeg")

        response = client.get(f"/file/{file_hash}")
        assert response.status_code == 200
        assert response.content == b"\xff\xd8jpeg"
        assert response.headers["content-type"] == "image/jpeg"
        assert response.headers["cache-control"] == "public, max-age=31536000"

    def test_invalid_hash(self, client: TestClient):
        """Test a malformed hash returns 400."""
        response = client.get("/file/not-a-hash")
        assert response.status_code == 400

    def test_unknown_hash(self, client: TestClient):
        """Test an unknown hash returns 404."""
        response = client.get(f"/file/{'0' * 64}")
        assert response.status_code == 404
