# routers/rooms.py

from typing import List

from fastapi import APIRouter, Depends

from core.session_manager import SessionManager
from dependencies.auth import get_console, get_current_session
from models.room import Room, RoomReassign, RoomStatusUpdate
from models.user import Session


router = APIRouter(
    prefix="/rooms",
    tags=["Rooms"],
)


# -----------------------------------------------------
# LIST ROOMS
# -----------------------------------------------------
@router.get("/", response_model=List[Room])
def list_rooms(
    console: SessionManager = Depends(get_console),
    session: Session = Depends(get_current_session),
):
    return console.store.list_rooms()


# -----------------------------------------------------
# DASHBOARD FIGURES
# -----------------------------------------------------
@router.get("/stats", summary="Occupancy, sentiment and leaderboard figures")
def stats(console: SessionManager = Depends(get_console)):
    return console.dashboard()


# -----------------------------------------------------
# REASSIGN RESIDENT (reassign-room)
# -----------------------------------------------------
@router.post("/reassign", response_model=Room)
def reassign(payload: RoomReassign, console: SessionManager = Depends(get_console)):
    return console.reassign_room(payload.resident_id, payload.target_room_id)


# -----------------------------------------------------
# SET ROOM STATUS (manage-rooms)
# -----------------------------------------------------
@router.patch("/{room_id}/status", response_model=Room)
def set_status(room_id: str, payload: RoomStatusUpdate, console: SessionManager = Depends(get_console)):
    return console.set_room_status(room_id, payload.status)


# -----------------------------------------------------
# RESIDENT CHECK-IN
# -----------------------------------------------------
@router.post("/check-in/request", summary="Student asks for arrival validation")
def request_check_in(console: SessionManager = Depends(get_console)):
    session = console.request_check_in()
    return {"check_in_status": session.check_in_status}


@router.post("/check-in/{resident_id}/approve", summary="Validate a resident's arrival")
def approve_check_in(resident_id: str, console: SessionManager = Depends(get_console)):
    resident = console.approve_check_in(resident_id)
    return {"resident_id": resident.id, "check_in_status": resident.check_in_status}
