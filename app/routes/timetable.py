"""Routes for the signed-in user and their timetable."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel import Session

from app.auth.dependencies import get_access_token
from app.auth.session import verify_session
from app.core.database import get_session
from app.models import ClassOfWeek, Time, UserSession, Week
from app.timetable.store import get_timetable, set_timetable_cell

router = APIRouter(prefix="/api", tags=["timetable"])


class SetClassRequest(BaseModel):
    class_id: str | None = None


@router.get("/me", response_model=UserSession)
async def me(
    access_token: str = Depends(get_access_token),
    session: Session = Depends(get_session),
):
    """Get the signed-in user with their timetable."""
    return verify_session(session, access_token)


@router.put("/me/timetable/{week}/{time}", response_model=UserSession)
async def set_class(
    week: Week,
    time: Time,
    body: SetClassRequest,
    access_token: str = Depends(get_access_token),
    session: Session = Depends(get_session),
):
    """
    Overwrite one slot of the signed-in user's timetable.

    Send ``{"class_id": null}`` to clear the slot. Returns the user with
    the updated timetable.
    """
    return set_timetable_cell(session, access_token, week, time, body.class_id)


@router.get("/users/{user_id}/timetable", response_model=ClassOfWeek)
async def user_timetable(user_id: str, session: Session = Depends(get_session)):
    """Get a user's timetable with class references only."""
    return get_timetable(session, user_id)
