from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, Response

from ..deps import get_storage
from ..errors import Conflict, NotFound
from ..schemas import RoomOut, RoomCreateIn, RoomStatusIn
from ..services.status_engine import set_room_status
from ..storage import Storage

router = APIRouter(prefix="/api/rooms", tags=["rooms"])

@router.get("/{hotel_id}", response_model=List[RoomOut])
def api_rooms(hotel_id: int, storage: Storage = Depends(get_storage)):
    return storage.get_rooms_by_hotel(hotel_id)

@router.post("", response_model=RoomOut, status_code=201)
def api_create_room(payload: RoomCreateIn, storage: Storage = Depends(get_storage)):
    if storage.get_room_by_number(payload.hotel_id, payload.room_number):
        raise Conflict(f"Room {payload.room_number} already exists")
    return storage.create_room(
        hotel_id=payload.hotel_id,
        room_number=payload.room_number.strip(),
        type=payload.type.value,
        status=payload.status.value,
        price_per_night=Decimal(str(payload.price_per_night)),
        max_guests=payload.max_guests,
        amenities=payload.amenities,
    )

@router.patch("/{room_id}/status", response_model=RoomOut)
def api_room_status(room_id: int, payload: RoomStatusIn, storage: Storage = Depends(get_storage)):
    return set_room_status(storage, room_id, payload.status)

@router.delete("/{room_id}", status_code=204)
def api_delete_room(room_id: int, storage: Storage = Depends(get_storage)):
    if not storage.delete_room(room_id):
        raise NotFound("Room not found")
    return Response(status_code=204)
