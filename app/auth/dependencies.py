"""FastAPI dependencies for access-token authentication."""
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import InvalidSessionError

bearer_scheme = HTTPBearer(auto_error=False)


def get_access_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Extract the access token from an ``Authorization: Bearer`` header."""
    if credentials is None or not credentials.credentials:
        raise InvalidSessionError("Missing access token")
    return credentials.credentials
