"""LINE Login client.

Handles the provider side of the social login: building the
authorization URL, exchanging the authorization code for an ID token,
and verifying that ID token. ID tokens are HS256 JWTs signed with the
channel secret.
"""
import logging
from dataclasses import dataclass
from urllib.parse import quote, urlencode

import httpx
from jose import JWTError, jwt

from app.core.config import settings
from app.core.exceptions import UpstreamFailureError

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://access.line.me/oauth2/v2.1/authorize"
TOKEN_URL = "https://api.line.me/oauth2/v2.1/token"
ISSUER = "https://access.line.me"
SCOPES = ["profile", "openid"]


@dataclass(frozen=True)
class LineIdentity:
    """Claims taken from a verified LINE ID token."""
    sub: str
    name: str
    picture: str


def build_login_url(state: str) -> str:
    """Build the authorization URL the client should navigate to."""
    params = {
        "response_type": "code",
        "client_id": settings.line_client_id,
        "redirect_uri": settings.line_redirect_uri,
        "scope": " ".join(SCOPES),
        "state": state,
    }
    return f"{AUTHORIZE_URL}?{urlencode(params, quote_via=quote, safe='')}"


async def exchange_code(code: str) -> str:
    """Exchange an authorization code for an ID token."""
    data = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": settings.line_redirect_uri,
        "client_id": settings.line_client_id,
        "client_secret": settings.line_channel_secret,
    }
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
            response = await client.post(TOKEN_URL, data=data)
            response.raise_for_status()
            id_token = response.json().get("id_token")
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"LINE token exchange failed: {e}")
        raise UpstreamFailureError("LINE token exchange failed") from e

    if not isinstance(id_token, str):
        logger.error("LINE token response did not contain an id_token")
        raise UpstreamFailureError("LINE token exchange failed")
    return id_token


def verify_id_token(id_token: str) -> LineIdentity:
    """
    Verify a LINE ID token and extract the user's identity.

    Checks the signature against the channel secret, the issuer and the
    audience (our channel id), and that ``sub``, ``name`` and ``picture``
    are strings.
    """
    try:
        claims = jwt.decode(
            id_token,
            settings.line_channel_secret,
            algorithms=["HS256"],
            audience=settings.line_client_id,
            issuer=ISSUER,
        )
    except JWTError as e:
        logger.warning(f"LINE ID token rejected: {e}")
        raise UpstreamFailureError("LINE ID token is invalid") from e

    sub, name, picture = claims.get("sub"), claims.get("name"), claims.get("picture")
    if not all(isinstance(value, str) for value in (sub, name, picture)):
        logger.warning("LINE ID token is missing profile claims")
        raise UpstreamFailureError("LINE ID token is missing profile claims")
    return LineIdentity(sub=sub, name=name, picture=picture)


async def fetch_image(url: str) -> tuple[bytes, str]:
    """Download an image, returning its bytes and MIME type."""
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
            response = await client.get(url, follow_redirects=True)
            response.raise_for_status()
    except httpx.HTTPError as e:
        logger.error(f"Failed to download profile image: {e}")
        raise UpstreamFailureError("Failed to download profile image") from e
    mime_type = response.headers.get("content-type", "application/octet-stream")
    return response.content, mime_type.split(";")[0].strip()
