from typing import Optional, List

from fastapi import APIRouter, Depends, Query

from ..config import settings
from ..deps import get_storage
from ..schemas import BookingOut, RecentBookingOut, BookingCreateIn, BookingStatusIn, PaymentStatusIn
from ..services.dashboard import list_recent_bookings
from ..services.reservations import place_booking
from ..services.status_engine import set_booking_status, set_payment_status
from ..storage import Storage

router = APIRouter(prefix="/api/bookings", tags=["bookings"])

@router.get("/recent/{hotel_id}", response_model=List[RecentBookingOut])
def api_recent_bookings(hotel_id: int, limit: Optional[int] = Query(None, ge=1), storage: Storage = Depends(get_storage)):
    return list_recent_bookings(storage, hotel_id, limit or settings.RECENT_BOOKINGS_DEFAULT_LIMIT)

@router.get("/hotel/{hotel_id}", response_model=List[BookingOut])
def api_hotel_bookings(hotel_id: int, storage: Storage = Depends(get_storage)):
    return storage.get_bookings_by_hotel(hotel_id)

@router.post("", response_model=BookingOut, status_code=201)
def api_create_booking(payload: BookingCreateIn, storage: Storage = Depends(get_storage)):
    return place_booking(storage, payload)

@router.patch("/{booking_id}/status", response_model=BookingOut)
def api_booking_status(booking_id: int, payload: BookingStatusIn, storage: Storage = Depends(get_storage)):
    return set_booking_status(storage, booking_id, payload.status)

@router.patch("/{booking_id}/payment", response_model=BookingOut)
def api_booking_payment(booking_id: int, payload: PaymentStatusIn, storage: Storage = Depends(get_storage)):
    return set_payment_status(storage, booking_id, payload.payment_status)
