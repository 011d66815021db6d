"""
Booking lifecycle and its effect on room availability.

Booking status changes drive the room status one way only:

    checked_in               -> room occupied
    checked_out / cancelled  -> room available
    pending / confirmed      -> room untouched

A new booking always reserves its room. Room status edits never touch
bookings. The booking write and the room write are separate commits; if the
second one cannot be applied the first is kept.
"""
import logging

from ..config import settings
from ..errors import Conflict, NotFound
from ..models import Booking, BookingStatus, Room, RoomStatus
from ..storage import Storage

logger = logging.getLogger(__name__)

ROOM_STATUS_FOR_BOOKING = {
    BookingStatus.CHECKED_IN.value: RoomStatus.OCCUPIED.value,
    BookingStatus.CHECKED_OUT.value: RoomStatus.AVAILABLE.value,
    BookingStatus.CANCELLED.value: RoomStatus.AVAILABLE.value,
}

# Only enforced when BOOKING_STRICT_TRANSITIONS is on
LEGAL_TRANSITIONS = {
    BookingStatus.PENDING.value: {
        BookingStatus.CONFIRMED.value,
        BookingStatus.CHECKED_IN.value,
        BookingStatus.CANCELLED.value,
    },
    BookingStatus.CONFIRMED.value: {
        BookingStatus.PENDING.value,
        BookingStatus.CHECKED_IN.value,
        BookingStatus.CANCELLED.value,
    },
    BookingStatus.CHECKED_IN.value: {BookingStatus.CHECKED_OUT.value},
    BookingStatus.CHECKED_OUT.value: set(),
    BookingStatus.CANCELLED.value: set(),
}


def _value(status) -> str:
    return getattr(status, "value", status)


def is_legal_transition(current: str, new: str) -> bool:
    if current == new:
        return True
    return new in LEGAL_TRANSITIONS.get(current, set())


def create_booking(storage: Storage, **fields) -> Booking:
    """Persist a booking and mark its room reserved, whatever status the booking carries."""
    booking = storage.create_booking(**fields)
    if storage.save_room_status(booking.room_id, RoomStatus.RESERVED.value) is None:
        logger.warning("Booking %s references missing room %s; room not reserved", booking.id, booking.room_id)
    logger.info("Booking %s created for room %s (status=%s)", booking.id, booking.room_id, booking.status)
    return booking


def set_booking_status(storage: Storage, booking_id: int, new_status) -> Booking:
    new_status = _value(new_status)
    booking = storage.get_booking(booking_id)
    if booking is None:
        raise NotFound("Booking not found")

    if settings.BOOKING_STRICT_TRANSITIONS and not is_legal_transition(booking.status, new_status):
        raise Conflict(f"Cannot move booking from {booking.status} to {new_status}")

    previous = booking.status
    booking = storage.save_booking_status(booking_id, new_status)
    logger.info("Booking %s status %s -> %s", booking_id, previous, new_status)

    room_status = ROOM_STATUS_FOR_BOOKING.get(new_status)
    if room_status is not None and booking.room_id is None:
        logger.warning("Booking %s has no room; room status left as is", booking_id)
    elif room_status is not None:
        if storage.save_room_status(booking.room_id, room_status) is None:
            logger.warning("Booking %s references missing room %s; room status left as is", booking_id, booking.room_id)
    return booking


def set_room_status(storage: Storage, room_id: int, new_status) -> Room:
    room = storage.save_room_status(room_id, _value(new_status))
    if room is None:
        raise NotFound("Room not found")
    return room


def set_payment_status(storage: Storage, booking_id: int, payment_status) -> Booking:
    booking = storage.save_payment_status(booking_id, _value(payment_status))
    if booking is None:
        raise NotFound("Booking not found")
    return booking
