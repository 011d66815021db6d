from fastapi import APIRouter, Depends

from ..deps import get_storage
from ..errors import NotFound
from ..schemas import HotelOut
from ..storage import Storage

router = APIRouter(prefix="/api/hotels", tags=["hotels"])

@router.get("/{hotel_id}", response_model=HotelOut)
def api_hotel(hotel_id: int, storage: Storage = Depends(get_storage)):
    hotel = storage.get_hotel(hotel_id)
    if not hotel:
        raise NotFound("Hotel not found")
    return hotel
