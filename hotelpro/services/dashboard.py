from decimal import Decimal, ROUND_HALF_UP

from ..models import Booking, PaymentStatus, RoomStatus
from ..storage import Storage


def compute_dashboard_stats(storage: Storage, hotel_id: int) -> dict:
    """Room counts by status, occupancy and paid revenue for one hotel.

    Recomputed from scratch on every call. Revenue only counts bookings whose
    payment status is ``paid``; occupancy is 0 for a hotel without rooms.
    """
    rooms = storage.get_rooms_by_hotel(hotel_id)
    bookings = storage.get_bookings_by_hotel(hotel_id)

    total_rooms = len(rooms)
    by_status = {status.value: 0 for status in RoomStatus}
    for room in rooms:
        if room.status in by_status:
            by_status[room.status] += 1
    occupied = by_status[RoomStatus.OCCUPIED.value]

    occupancy_rate = 0
    if total_rooms:
        # Halves round up: 1 of 8 rooms is 13%
        occupancy_rate = int((Decimal(occupied * 100) / total_rooms).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    revenue = sum(
        (b.total_amount for b in bookings if b.payment_status == PaymentStatus.PAID.value),
        start=0,
    )

    return {
        "total_bookings": len(bookings),
        "occupancy_rate": occupancy_rate,
        "revenue": float(revenue),
        "available_rooms": by_status[RoomStatus.AVAILABLE.value],
        "total_rooms": total_rooms,
        "occupied_rooms": occupied,
        "maintenance_rooms": by_status[RoomStatus.MAINTENANCE.value],
        "reserved_rooms": by_status[RoomStatus.RESERVED.value],
    }


def _booking_fields(booking: Booking) -> dict:
    return {column.key: getattr(booking, column.key) for column in Booking.__table__.columns}


def list_recent_bookings(storage: Storage, hotel_id: int, limit: int = 10) -> list[dict]:
    """Newest bookings of a hotel with guest and room details folded in.

    A guest or room that can no longer be found leaves its part as None; the
    booking itself is still returned.
    """
    entries = []
    for booking in storage.get_recent_bookings(hotel_id, limit):
        guest = storage.get_guest(booking.guest_id) if booking.guest_id is not None else None
        room = storage.get_room(booking.room_id) if booking.room_id is not None else None
        entry = _booking_fields(booking)
        entry["guest"] = {"name": guest.full_name, "email": guest.email} if guest else None
        entry["room"] = {"number": room.room_number, "type": room.type} if room else None
        entry["guest_name"] = guest.full_name if guest else None
        entry["guest_email"] = guest.email if guest else None
        entry["room_number"] = room.room_number if room else None
        entry["room_type"] = room.type if room else None
        entries.append(entry)
    return entries
