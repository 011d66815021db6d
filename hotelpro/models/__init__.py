from .user import User, UserRole
from .hotel import Hotel
from .room import Room, RoomType, RoomStatus
from .guest import Guest, IdType
from .booking import Booking, BookingStatus, PaymentStatus
from .staff import Staff, StaffPosition
from .task import Task, TaskStatus, TaskPriority
