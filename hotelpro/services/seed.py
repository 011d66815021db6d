import logging
from datetime import datetime, timedelta
from decimal import Decimal

from ..config import settings
from ..models import UserRole
from ..security import hash_password
from ..storage import Storage

logger = logging.getLogger(__name__)

AMENITIES = {
    "standard": ["WiFi", "TV"],
    "deluxe": ["WiFi", "TV", "Mini Bar", "Balcony"],
    "suite": ["WiFi", "TV", "Mini Bar", "Balcony", "Kitchen"],
}

ROOMS = [
    ("101", "standard", "120.00", "available", 2),
    ("102", "standard", "120.00", "occupied", 2),
    ("103", "deluxe", "180.00", "available", 3),
    ("104", "deluxe", "180.00", "reserved", 3),
    ("105", "suite", "350.00", "maintenance", 4),
    ("201", "standard", "125.00", "available", 2),
    ("202", "standard", "125.00", "occupied", 2),
    ("203", "deluxe", "185.00", "available", 3),
    ("204", "deluxe", "185.00", "occupied", 3),
    ("205", "suite", "360.00", "available", 4),
]

GUESTS = [
    ("John", "Smith", "john.smith@email.com", "+1-555-0101"),
    ("Sarah", "Johnson", "sarah.johnson@email.com", "+1-555-0102"),
    ("Mike", "Wilson", "mike.wilson@email.com", "+1-555-0103"),
    ("Emily", "Brown", "emily.brown@email.com", "+1-555-0104"),
]

STAFF = [
    ("Alice", "Manager", "alice@grandplaza.com", "+1-555-0201", "manager", "management", "65000.00"),
    ("Bob", "Receptionist", "bob@grandplaza.com", "+1-555-0202", "receptionist", "front desk", "35000.00"),
    ("Carol", "Housekeeper", "carol@grandplaza.com", "+1-555-0203", "housekeeper", "housekeeping", "30000.00"),
    ("David", "Maintenance", "david@grandplaza.com", "+1-555-0204", "maintenance", "maintenance", "40000.00"),
]


def seed_database(storage: Storage) -> bool:
    """
    Load demo data: an admin, one hotel with rooms, guests, bookings, staff and tasks.
    Skipped when the admin user already exists. Returns True if anything was written.
    """
    if storage.get_user_by_username(settings.ADMIN_USERNAME):
        logger.info("Seed data already present, skipping.")
        return False

    logger.info("Seeding database...")
    admin = storage.create_user(
        username=settings.ADMIN_USERNAME,
        email=settings.ADMIN_EMAIL,
        hashed_password=hash_password(settings.ADMIN_PASSWORD),
        role=UserRole.ADMIN.value,
    )
    hotel = storage.create_hotel(
        name="Grand Plaza Hotel",
        address="123 Downtown Avenue, City Center",
        phone="+1-555-0123",
        email="info@grandplaza.com",
        total_rooms=len(ROOMS),
        owner_id=admin.id,
    )
    storage.update_user(admin.id, hotel_id=hotel.id)

    rooms = {}
    for number, room_type, price, status, max_guests in ROOMS:
        rooms[number] = storage.create_room(
            hotel_id=hotel.id,
            room_number=number,
            type=room_type,
            status=status,
            price_per_night=Decimal(price),
            max_guests=max_guests,
            amenities=AMENITIES[room_type],
        )

    guests = [
        storage.create_guest(first_name=first, last_name=last, email=email, phone=phone)
        for first, last, email, phone in GUESTS
    ]

    # Inserted as-is: the seeded room statuses already reflect these stays
    now = datetime.now().replace(hour=14, minute=0, second=0, microsecond=0)
    day = timedelta(days=1)
    for room_number, guest, check_in, nights, guests_count, amount, payment in [
        ("104", guests[0], now, 3, 2, "540.00", "paid"),
        ("102", guests[1], now - day, 2, 1, "240.00", "paid"),
        ("202", guests[2], now, 2, 2, "250.00", "pending"),
    ]:
        storage.create_booking(
            hotel_id=hotel.id,
            room_id=rooms[room_number].id,
            guest_id=guest.id,
            check_in_date=check_in,
            check_out_date=check_in + nights * day,
            number_of_guests=guests_count,
            total_amount=Decimal(amount),
            status="confirmed",
            payment_status=payment,
        )

    staff = [
        storage.create_staff(
            hotel_id=hotel.id,
            first_name=first,
            last_name=last,
            email=email,
            phone=phone,
            position=position,
            department=department,
            salary=Decimal(salary),
            hire_date=now - 365 * day,
        )
        for first, last, email, phone, position, department, salary in STAFF
    ]

    for title, priority, assignee, status in [
        ("Room 205 cleaning", "medium", staff[2], "pending"),
        ("Update booking rates", "low", staff[0], "completed"),
        ("Staff meeting at 3 PM", "high", None, "pending"),
        ("Review maintenance requests", "medium", staff[3], "pending"),
    ]:
        task = storage.create_task(
            hotel_id=hotel.id,
            title=title,
            priority=priority,
            assigned_to=assignee.id if assignee else None,
            status=status,
            due_date=now,
        )
        if status == "completed":
            storage.save_task_status(task.id, status, now)

    logger.info("Seed complete: hotel %s with %d rooms.", hotel.id, len(rooms))
    return True
