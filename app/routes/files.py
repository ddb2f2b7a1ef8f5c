"""Route serving stored files such as profile images."""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlmodel import Session

from app.core.database import get_session
from app.storage.files import get_file, parse_file_hash

router = APIRouter(prefix="/file", tags=["files"])


@router.get("/{file_hash}")
async def file(file_hash: str, session: Session = Depends(get_session)):
    """
    Get a stored file by hash.

    Files are content-addressed and never change, so responses may be
    cached for a year.
    """
    try:
        parse_file_hash(file_hash)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    stored = get_file(session, file_hash)
    return Response(
        content=stored.data,
        media_type=stored.mime_type,
        headers={"cache-control": "public, max-age=31536000"},
    )
