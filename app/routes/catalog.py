"""Read-only routes for rooms and classes."""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.catalog.service import get_class, get_room, list_classes, list_rooms
from app.core.database import get_session
from app.models.catalog import CourseOut, RoomOut

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/hello")
async def hello():
    """Greet the API."""
    return {"message": "Hi, this is the Clavision API server"}


@router.get("/rooms", response_model=list[RoomOut])
async def rooms(session: Session = Depends(get_session)):
    """List all rooms."""
    return list_rooms(session)


@router.get("/rooms/{room_id}", response_model=RoomOut)
async def room(room_id: str, session: Session = Depends(get_session)):
    return get_room(session, room_id)


@router.get("/classes", response_model=list[CourseOut])
async def classes(session: Session = Depends(get_session)):
    """List all classes with their room and weekly slot."""
    return list_classes(session)


@router.get("/classes/{class_id}", response_model=CourseOut)
async def class_detail(class_id: str, session: Session = Depends(get_session)):
    return get_class(session, class_id)
