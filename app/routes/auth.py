"""LINE Login routes."""
import logging
from urllib.parse import urlencode

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from sqlmodel import Session

from app.auth.line import build_login_url, exchange_code, verify_id_token
from app.auth.login_state import consume_login_state, issue_login_state
from app.auth.session import (
    create_user_from_external_identity,
    find_user_by_line_user_id,
    issue_token,
)
from app.core.config import settings
from app.core.database import get_session
from app.core.exceptions import InvalidStateError
from app.storage.files import save_image_from_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def access_token_url(access_token: str) -> str:
    """Application URL carrying the access token in the fragment.

    The fragment is not sent to servers, so the token does not end up in
    access logs of the application host.
    """
    return f"{settings.app_url.rstrip('/')}/#{urlencode({'accessToken': access_token})}"


@router.post("/line/login-url")
async def line_login_url(session: Session = Depends(get_session)):
    """
    Get the URL to sign up or log in with LINE.

    Issues a one-time login state and embeds it in the LINE authorization
    URL. The client navigates to the returned URL.
    """
    state = issue_login_state(session)
    return {"url": build_login_url(state)}


@router.get("/line/callback")
async def line_callback(
    code: str | None = None,
    state: str | None = None,
    session: Session = Depends(get_session),
):
    """
    Redirect target after LINE Login.

    Consumes the login state, exchanges the code for an ID token and
    verifies it. A new user is created for an unknown LINE account;
    a known user gets a new access token, which logs out any other
    device. Redirects to the application with the access token in the
    URL fragment.
    """
    if not code or not state:
        return RedirectResponse(settings.app_url)

    if not consume_login_state(session, state):
        raise InvalidStateError("LINE Login state was not issued by this server or was already used")

    id_token = await exchange_code(code)
    identity = verify_id_token(id_token)

    user = find_user_by_line_user_id(session, identity.sub)
    if user is None:
        image_file_hash = await save_image_from_url(session, identity.picture)
        access_token = create_user_from_external_identity(
            session, identity.name, identity.sub, image_file_hash
        )
    else:
        access_token = issue_token(session, user.id)

    return RedirectResponse(access_token_url(access_token))
