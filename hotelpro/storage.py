"""
Record storage behind one interface.

``MemStorage`` keeps everything in process-local dicts and is handy for demos
and tests; ``DatabaseStorage`` persists through a SQLAlchemy session. Both hand
back the ORM classes from ``hotelpro.models`` so callers never care which one
they got. Every write is a single, self-contained operation: there is no
transaction spanning several calls.
"""
import logging
from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from typing import Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from .models import (
    User, UserRole, Hotel, Room, RoomStatus, Guest, Booking, BookingStatus,
    PaymentStatus, Staff, Task, TaskStatus, TaskPriority,
)

logger = logging.getLogger(__name__)


def _today_bounds() -> tuple[datetime, datetime]:
    start = datetime.combine(date.today(), datetime.min.time())
    return start, start + timedelta(days=1)


class Storage(ABC):

    # Users
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    def create_user(self, **fields) -> User: ...

    @abstractmethod
    def update_user(self, user_id: int, **fields) -> Optional[User]: ...

    # Hotels
    @abstractmethod
    def get_hotel(self, hotel_id: int) -> Optional[Hotel]: ...

    @abstractmethod
    def get_hotels_by_owner(self, owner_id: int) -> list[Hotel]: ...

    @abstractmethod
    def create_hotel(self, **fields) -> Hotel: ...

    # Rooms
    @abstractmethod
    def get_room(self, room_id: int) -> Optional[Room]: ...

    @abstractmethod
    def get_rooms_by_hotel(self, hotel_id: int) -> list[Room]: ...

    @abstractmethod
    def get_room_by_number(self, hotel_id: int, room_number: str) -> Optional[Room]: ...

    @abstractmethod
    def create_room(self, **fields) -> Room: ...

    @abstractmethod
    def save_room_status(self, room_id: int, status: str) -> Optional[Room]: ...

    @abstractmethod
    def delete_room(self, room_id: int) -> bool: ...

    # Guests
    @abstractmethod
    def get_guest(self, guest_id: int) -> Optional[Guest]: ...

    @abstractmethod
    def get_guest_by_email(self, email: str) -> Optional[Guest]: ...

    @abstractmethod
    def create_guest(self, **fields) -> Guest: ...

    @abstractmethod
    def delete_guest(self, guest_id: int) -> bool: ...

    # Bookings
    @abstractmethod
    def get_booking(self, booking_id: int) -> Optional[Booking]: ...

    @abstractmethod
    def get_bookings_by_hotel(self, hotel_id: int) -> list[Booking]: ...

    @abstractmethod
    def get_recent_bookings(self, hotel_id: int, limit: int = 10) -> list[Booking]: ...

    @abstractmethod
    def create_booking(self, **fields) -> Booking: ...

    @abstractmethod
    def save_booking_status(self, booking_id: int, status: str) -> Optional[Booking]: ...

    @abstractmethod
    def save_payment_status(self, booking_id: int, payment_status: str) -> Optional[Booking]: ...

    # Staff
    @abstractmethod
    def get_staff(self, staff_id: int) -> Optional[Staff]: ...

    @abstractmethod
    def get_staff_by_hotel(self, hotel_id: int) -> list[Staff]: ...

    @abstractmethod
    def create_staff(self, **fields) -> Staff: ...

    # Tasks
    @abstractmethod
    def get_task(self, task_id: int) -> Optional[Task]: ...

    @abstractmethod
    def get_tasks_by_hotel(self, hotel_id: int) -> list[Task]: ...

    @abstractmethod
    def get_today_tasks(self, hotel_id: int) -> list[Task]: ...

    @abstractmethod
    def create_task(self, **fields) -> Task: ...

    @abstractmethod
    def save_task_status(self, task_id: int, status: str, completed_at: datetime | None = None) -> Optional[Task]: ...


# Column defaults only fire on INSERT, so the in-memory store fills them itself.
_DEFAULTS = {
    User: {"role": UserRole.MANAGER.value, "hotel_id": None},
    Hotel: {"total_rooms": 0},
    Room: {"status": RoomStatus.AVAILABLE.value, "max_guests": 2, "amenities": None},
    Guest: {"address": None, "id_type": None, "id_number": None},
    Booking: {
        "status": BookingStatus.PENDING.value,
        "payment_status": PaymentStatus.PENDING.value,
        "number_of_guests": 1,
        "special_requests": None,
    },
    Staff: {"salary": None, "is_active": True},
    Task: {
        "description": None,
        "assigned_to": None,
        "status": TaskStatus.PENDING.value,
        "priority": TaskPriority.MEDIUM.value,
        "due_date": None,
        "completed_at": None,
    },
}


class MemStorage(Storage):
    """Map-based storage. One id counter is shared by every table."""

    def __init__(self):
        self._tables: dict[type, dict[int, object]] = {model: {} for model in _DEFAULTS}
        # No lock: concurrent creates may race between read and increment
        self._current_id = 1

    def _next_id(self) -> int:
        new_id = self._current_id
        self._current_id += 1
        return new_id

    def _insert(self, model, fields: dict):
        values = dict(_DEFAULTS[model])
        values.update({k: v for k, v in fields.items() if v is not None})
        values["id"] = self._next_id()
        values.setdefault("created_at", datetime.utcnow())
        record = model(**values)
        self._tables[model][record.id] = record
        return record

    def _all(self, model) -> list:
        return list(self._tables[model].values())

    # Users
    def get_user(self, user_id):
        return self._tables[User].get(user_id)

    def get_user_by_username(self, username):
        return next((u for u in self._all(User) if u.username == username), None)

    def get_user_by_email(self, email):
        return next((u for u in self._all(User) if u.email == email), None)

    def create_user(self, **fields):
        return self._insert(User, fields)

    def update_user(self, user_id, **fields):
        user = self.get_user(user_id)
        if user is None:
            return None
        for key, value in fields.items():
            setattr(user, key, value)
        return user

    # Hotels
    def get_hotel(self, hotel_id):
        return self._tables[Hotel].get(hotel_id)

    def get_hotels_by_owner(self, owner_id):
        return [h for h in self._all(Hotel) if h.owner_id == owner_id]

    def create_hotel(self, **fields):
        return self._insert(Hotel, fields)

    # Rooms
    def get_room(self, room_id):
        return self._tables[Room].get(room_id)

    def get_rooms_by_hotel(self, hotel_id):
        return [r for r in self._all(Room) if r.hotel_id == hotel_id]

    def get_room_by_number(self, hotel_id, room_number):
        return next((r for r in self._all(Room) if r.hotel_id == hotel_id and r.room_number == room_number), None)

    def create_room(self, **fields):
        return self._insert(Room, fields)

    def save_room_status(self, room_id, status):
        room = self.get_room(room_id)
        if room is None:
            return None
        room.status = status
        return room

    def delete_room(self, room_id):
        if self._tables[Room].pop(room_id, None) is None:
            return False
        for booking in self._all(Booking):
            if booking.room_id == room_id:
                booking.room_id = None
        return True

    # Guests
    def get_guest(self, guest_id):
        return self._tables[Guest].get(guest_id)

    def get_guest_by_email(self, email):
        return next((g for g in self._all(Guest) if g.email == email), None)

    def create_guest(self, **fields):
        return self._insert(Guest, fields)

    def delete_guest(self, guest_id):
        if self._tables[Guest].pop(guest_id, None) is None:
            return False
        for booking in self._all(Booking):
            if booking.guest_id == guest_id:
                booking.guest_id = None
        return True

    # Bookings
    def get_booking(self, booking_id):
        return self._tables[Booking].get(booking_id)

    def get_bookings_by_hotel(self, hotel_id):
        return [b for b in self._all(Booking) if b.hotel_id == hotel_id]

    def get_recent_bookings(self, hotel_id, limit=10):
        bookings = sorted(
            self.get_bookings_by_hotel(hotel_id),
            key=lambda b: (b.created_at, b.id),
            reverse=True,
        )
        return bookings[:limit]

    def create_booking(self, **fields):
        return self._insert(Booking, fields)

    def save_booking_status(self, booking_id, status):
        booking = self.get_booking(booking_id)
        if booking is None:
            return None
        booking.status = status
        return booking

    def save_payment_status(self, booking_id, payment_status):
        booking = self.get_booking(booking_id)
        if booking is None:
            return None
        booking.payment_status = payment_status
        return booking

    # Staff
    def get_staff(self, staff_id):
        return self._tables[Staff].get(staff_id)

    def get_staff_by_hotel(self, hotel_id):
        return [s for s in self._all(Staff) if s.hotel_id == hotel_id]

    def create_staff(self, **fields):
        return self._insert(Staff, fields)

    # Tasks
    def get_task(self, task_id):
        return self._tables[Task].get(task_id)

    def get_tasks_by_hotel(self, hotel_id):
        return [t for t in self._all(Task) if t.hotel_id == hotel_id]

    def get_today_tasks(self, hotel_id):
        start, end = _today_bounds()
        return [
            t for t in self.get_tasks_by_hotel(hotel_id)
            if t.due_date is None or start <= t.due_date < end
        ]

    def create_task(self, **fields):
        return self._insert(Task, fields)

    def save_task_status(self, task_id, status, completed_at=None):
        task = self.get_task(task_id)
        if task is None:
            return None
        task.status = status
        if completed_at is not None:
            task.completed_at = completed_at
        return task


class DatabaseStorage(Storage):
    """SQLAlchemy-backed storage. Each write commits immediately."""

    def __init__(self, db: Session):
        self.db = db

    def _add(self, model, fields: dict):
        record = model(**{k: v for k, v in fields.items() if v is not None})
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def _delete(self, model, record_id: int, booking_column=None) -> bool:
        record = self.db.get(model, record_id)
        if record is None:
            return False
        if booking_column is not None:
            # Same as ON DELETE SET NULL, for SQLite connections without foreign_keys
            self.db.query(Booking).filter(booking_column == record_id).update(
                {booking_column: None}, synchronize_session="fetch"
            )
        self.db.delete(record)
        self.db.commit()
        return True

    # Users
    def get_user(self, user_id):
        return self.db.get(User, user_id)

    def get_user_by_username(self, username):
        return self.db.query(User).filter(User.username == username).first()

    def get_user_by_email(self, email):
        return self.db.query(User).filter(User.email == email).first()

    def create_user(self, **fields):
        return self._add(User, fields)

    def update_user(self, user_id, **fields):
        user = self.get_user(user_id)
        if user is None:
            return None
        for key, value in fields.items():
            setattr(user, key, value)
        self.db.commit()
        self.db.refresh(user)
        return user

    # Hotels
    def get_hotel(self, hotel_id):
        return self.db.get(Hotel, hotel_id)

    def get_hotels_by_owner(self, owner_id):
        return self.db.query(Hotel).filter(Hotel.owner_id == owner_id).all()

    def create_hotel(self, **fields):
        return self._add(Hotel, fields)

    # Rooms
    def get_room(self, room_id):
        return self.db.get(Room, room_id)

    def get_rooms_by_hotel(self, hotel_id):
        return self.db.query(Room).filter(Room.hotel_id == hotel_id).order_by(Room.id.asc()).all()

    def get_room_by_number(self, hotel_id, room_number):
        return self.db.query(Room).filter(Room.hotel_id == hotel_id, Room.room_number == room_number).first()

    def create_room(self, **fields):
        return self._add(Room, fields)

    def save_room_status(self, room_id, status):
        room = self.get_room(room_id)
        if room is None:
            return None
        room.status = status
        self.db.commit()
        self.db.refresh(room)
        return room

    def delete_room(self, room_id):
        return self._delete(Room, room_id, Booking.room_id)

    # Guests
    def get_guest(self, guest_id):
        return self.db.get(Guest, guest_id)

    def get_guest_by_email(self, email):
        return self.db.query(Guest).filter(Guest.email == email).first()

    def create_guest(self, **fields):
        return self._add(Guest, fields)

    def delete_guest(self, guest_id):
        return self._delete(Guest, guest_id, Booking.guest_id)

    # Bookings
    def get_booking(self, booking_id):
        return self.db.get(Booking, booking_id)

    def get_bookings_by_hotel(self, hotel_id):
        return self.db.query(Booking).filter(Booking.hotel_id == hotel_id).all()

    def get_recent_bookings(self, hotel_id, limit=10):
        return (
            self.db.query(Booking)
            .filter(Booking.hotel_id == hotel_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .limit(limit)
            .all()
        )

    def create_booking(self, **fields):
        return self._add(Booking, fields)

    def save_booking_status(self, booking_id, status):
        booking = self.get_booking(booking_id)
        if booking is None:
            return None
        booking.status = status
        self.db.commit()
        self.db.refresh(booking)
        return booking

    def save_payment_status(self, booking_id, payment_status):
        booking = self.get_booking(booking_id)
        if booking is None:
            return None
        booking.payment_status = payment_status
        self.db.commit()
        self.db.refresh(booking)
        return booking

    # Staff
    def get_staff(self, staff_id):
        return self.db.get(Staff, staff_id)

    def get_staff_by_hotel(self, hotel_id):
        return self.db.query(Staff).filter(Staff.hotel_id == hotel_id).order_by(Staff.id.asc()).all()

    def create_staff(self, **fields):
        return self._add(Staff, fields)

    # Tasks
    def get_task(self, task_id):
        return self.db.get(Task, task_id)

    def get_tasks_by_hotel(self, hotel_id):
        return self.db.query(Task).filter(Task.hotel_id == hotel_id).order_by(Task.id.asc()).all()

    def get_today_tasks(self, hotel_id):
        start, end = _today_bounds()
        return (
            self.db.query(Task)
            .filter(
                Task.hotel_id == hotel_id,
                or_(Task.due_date.is_(None), and_(Task.due_date >= start, Task.due_date < end)),
            )
            .order_by(Task.id.asc())
            .all()
        )

    def create_task(self, **fields):
        return self._add(Task, fields)

    def save_task_status(self, task_id, status, completed_at=None):
        task = self.get_task(task_id)
        if task is None:
            return None
        task.status = status
        if completed_at is not None:
            task.completed_at = completed_at
        self.db.commit()
        self.db.refresh(task)
        return task


_memory_storage: MemStorage | None = None


def get_memory_storage() -> MemStorage:
    """Process-wide in-memory store, created on first use."""
    global _memory_storage
    if _memory_storage is None:
        logger.info("Using in-memory storage")
        _memory_storage = MemStorage()
    return _memory_storage


def reset_memory_storage() -> None:
    global _memory_storage
    _memory_storage = None
