import logging
import math
from datetime import date, datetime, timezone
from decimal import Decimal

from ..errors import ValidationError
from ..models import Booking, BookingStatus, PaymentStatus, Room, RoomStatus
from ..storage import Storage
from .status_engine import create_booking

logger = logging.getLogger(__name__)


def normalize_room_type(room_type: str | None) -> str:
    return (room_type or "").strip().lower().replace(" ", "_")


def split_guest_name(full_name: str | None) -> tuple[str, str]:
    parts = (full_name or "").split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def _as_datetime(value: date | datetime) -> datetime:
    # Stored naive, in UTC
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    return datetime.combine(value, datetime.min.time())


def count_nights(check_in: datetime, check_out: datetime) -> int:
    """Whole nights between two instants, rounding a partial day up."""
    return math.ceil((check_out - check_in).total_seconds() / 86400)


def find_available_room(storage: Storage, hotel_id: int, room_type: str) -> Room | None:
    wanted = normalize_room_type(room_type)
    return next(
        (r for r in storage.get_rooms_by_hotel(hotel_id) if r.type == wanted and r.status == RoomStatus.AVAILABLE.value),
        None,
    )


def place_booking(storage: Storage, request) -> Booking:
    """
    Book the first available room of the requested type for a guest.

    ``request`` carries guest_name, email, phone, address, check_in_date,
    check_out_date, room_type, number_of_guests, special_requests and hotel_id.
    Nothing is written unless a room is free and the dates make sense. The
    guest is looked up by email and created on first booking.
    """
    room = find_available_room(storage, request.hotel_id, request.room_type)
    if room is None:
        raise ValidationError("No available rooms of the requested type")

    check_in = _as_datetime(request.check_in_date)
    check_out = _as_datetime(request.check_out_date)
    if check_out <= check_in:
        raise ValidationError(
            "Check-out date must be after check-in date",
            details=[{"field": "checkOutDate", "message": "must be after checkInDate"}],
        )

    guest = storage.get_guest_by_email(request.email)
    if guest is None:
        first_name, last_name = split_guest_name(request.guest_name)
        guest = storage.create_guest(
            first_name=first_name,
            last_name=last_name,
            email=request.email,
            phone=request.phone or "",
            address=request.address or "",
        )
        logger.info("Guest %s created for %s", guest.id, guest.email)

    nights = count_nights(check_in, check_out)
    total_amount = (Decimal(room.price_per_night) * nights).quantize(Decimal("0.01"))

    return create_booking(
        storage,
        hotel_id=request.hotel_id,
        room_id=room.id,
        guest_id=guest.id,
        check_in_date=check_in,
        check_out_date=check_out,
        total_amount=total_amount,
        number_of_guests=request.number_of_guests or 1,
        special_requests=request.special_requests or None,
        status=BookingStatus.CONFIRMED.value,
        payment_status=PaymentStatus.PENDING.value,
    )
