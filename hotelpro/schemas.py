from datetime import date, datetime
from typing import Annotated, Optional, List

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints
from pydantic.alias_generators import to_camel

from .models import (
    UserRole, RoomType, RoomStatus, BookingStatus, PaymentStatus,
    StaffPosition, TaskStatus, TaskPriority,
)


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ==== Auth & users ====

Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]

class UserOut(ApiModel):
    id: int
    username: str
    email: str
    role: str
    hotel_id: Optional[int] = None
    created_at: datetime

class AuthOut(ApiModel):
    user: UserOut
    token: str

class LoginIn(ApiModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)

class SignupIn(ApiModel):
    username: Username
    email: EmailStr
    password: str = Field(min_length=1)
    role: Optional[UserRole] = None

class UserUpdateIn(ApiModel):
    username: Optional[Username] = None
    email: Optional[EmailStr] = None

class PasswordChangeIn(ApiModel):
    current_password: str
    new_password: str = Field(min_length=6)

class MessageOut(ApiModel):
    message: str


# ==== Hotels ====

class HotelOut(ApiModel):
    id: int
    name: str
    address: str
    phone: str
    email: str
    total_rooms: int
    owner_id: int
    created_at: datetime


# ==== Rooms ====

class RoomOut(ApiModel):
    id: int
    hotel_id: int
    room_number: str
    type: str
    status: str
    price_per_night: float
    max_guests: int
    amenities: Optional[List[str]] = None
    created_at: datetime

class RoomCreateIn(ApiModel):
    hotel_id: int
    room_number: str = Field(min_length=1, max_length=20)
    type: RoomType
    status: RoomStatus = RoomStatus.AVAILABLE
    price_per_night: float = Field(ge=0)
    max_guests: int = Field(default=2, ge=1)
    amenities: Optional[List[str]] = None

class RoomStatusIn(ApiModel):
    status: RoomStatus


# ==== Guests ====

class GuestOut(ApiModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    address: Optional[str] = None
    id_type: Optional[str] = None
    id_number: Optional[str] = None
    created_at: datetime


# ==== Bookings ====

class BookingOut(ApiModel):
    id: int
    hotel_id: int
    room_id: Optional[int] = None
    guest_id: Optional[int] = None
    check_in_date: datetime
    check_out_date: datetime
    total_amount: float
    status: str
    payment_status: str
    number_of_guests: int
    special_requests: Optional[str] = None
    created_at: datetime

class GuestSummary(ApiModel):
    name: str
    email: str

class RoomSummary(ApiModel):
    number: str
    type: str

class RecentBookingOut(BookingOut):
    guest: Optional[GuestSummary] = None
    room: Optional[RoomSummary] = None
    guest_name: Optional[str] = None
    guest_email: Optional[str] = None
    room_number: Optional[str] = None
    room_type: Optional[str] = None

class BookingCreateIn(ApiModel):
    guest_name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    address: Optional[str] = None
    check_in_date: datetime | date
    check_out_date: datetime | date
    # Free text such as "Deluxe" or "presidential"; normalised before matching
    room_type: str = Field(min_length=1)
    number_of_guests: int = Field(default=1, ge=1)
    special_requests: Optional[str] = None
    hotel_id: int

class BookingStatusIn(ApiModel):
    status: BookingStatus

class PaymentStatusIn(ApiModel):
    payment_status: PaymentStatus


# ==== Dashboard ====

class DashboardStatsOut(ApiModel):
    total_bookings: int
    occupancy_rate: int
    revenue: float
    available_rooms: int
    total_rooms: int
    occupied_rooms: int
    maintenance_rooms: int
    reserved_rooms: int


# ==== Staff ====

class StaffOut(ApiModel):
    id: int
    hotel_id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    position: str
    department: str
    salary: Optional[float] = None
    hire_date: datetime
    is_active: bool
    created_at: datetime

class StaffCreateIn(ApiModel):
    hotel_id: int
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    phone: str = Field(min_length=1)
    position: StaffPosition
    department: str = Field(min_length=1)
    salary: Optional[float] = Field(default=None, ge=0)
    hire_date: datetime
    is_active: bool = True


# ==== Tasks ====

class TaskOut(ApiModel):
    id: int
    hotel_id: int
    title: str
    description: Optional[str] = None
    assigned_to: Optional[int] = None
    status: str
    priority: str
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime

class TaskCreateIn(ApiModel):
    hotel_id: int
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    assigned_to: Optional[int] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[datetime] = None

class TaskStatusIn(ApiModel):
    status: TaskStatus
