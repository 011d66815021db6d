"""
Tests for hotelpro/storage.py and hotelpro/services/tasks.py
Covers: id allocation, defaults, lookups, deletes, today's tasks,
        set_task_status completion stamping, seed_database
"""
from datetime import datetime, timedelta

import pytest

from hotelpro.config import settings
from hotelpro.errors import NotFound
from hotelpro.security import verify_password
from hotelpro.services.seed import seed_database
from hotelpro.services.tasks import create_task, set_task_status
from hotelpro.storage import MemStorage, get_memory_storage, reset_memory_storage

from conftest import make_guest, make_hotel, make_room


class TestMemStorage:

    def test_ids_shared_across_tables(self):
        storage = MemStorage()
        hotel = make_hotel(storage)
        room = make_room(storage, hotel.id)
        guest = make_guest(storage)
        assert [hotel.id, room.id, guest.id] == [1, 2, 3]

    def test_singleton_reset(self):
        first = get_memory_storage()
        assert get_memory_storage() is first
        reset_memory_storage()
        assert get_memory_storage() is not first


class TestStorageBackends:

    def test_room_defaults(self, storage, hotel):
        room = storage.create_room(hotel_id=hotel.id, room_number="301", type="suite", price_per_night=350)
        assert room.status == "available"
        assert room.max_guests == 2
        assert room.created_at is not None

    def test_room_by_number(self, storage, hotel):
        room = make_room(storage, hotel.id, "102")
        assert storage.get_room_by_number(hotel.id, "102").id == room.id
        assert storage.get_room_by_number(hotel.id, "999") is None

    def test_delete_room(self, storage, hotel):
        room = make_room(storage, hotel.id)
        assert storage.delete_room(room.id) is True
        assert storage.get_room(room.id) is None
        assert storage.delete_room(room.id) is False

    def test_update_user(self, storage, hotel):
        user = storage.create_user(username="frontdesk", email="frontdesk@grandplaza.com", hashed_password="x")
        assert user.role == "manager"
        updated = storage.update_user(user.id, hotel_id=hotel.id)
        assert updated.hotel_id == hotel.id
        assert storage.update_user(424242, hotel_id=hotel.id) is None

    def test_guest_by_email(self, storage):
        guest = make_guest(storage)
        assert storage.get_guest_by_email("john.smith@email.com").id == guest.id
        assert storage.get_guest_by_email("nobody@email.com") is None

    def test_today_tasks(self, storage, hotel):
        today = datetime.now().replace(hour=12, minute=0, second=0, microsecond=0)
        due_today = storage.create_task(hotel_id=hotel.id, title="Inspect minibars", due_date=today)
        undated = storage.create_task(hotel_id=hotel.id, title="Restock towels")
        storage.create_task(hotel_id=hotel.id, title="Fire drill", due_date=today + timedelta(days=2))
        storage.create_task(hotel_id=hotel.id, title="Old audit", due_date=today - timedelta(days=3))
        ids = {t.id for t in storage.get_today_tasks(hotel.id)}
        assert ids == {due_today.id, undated.id}
        assert len(storage.get_tasks_by_hotel(hotel.id)) == 4

    def test_task_defaults(self, storage, hotel):
        task = storage.create_task(hotel_id=hotel.id, title="Restock towels")
        assert task.status == "pending"
        assert task.priority == "medium"
        assert task.completed_at is None


class TestTaskStatus:

    def test_completion_stamped_once(self, storage, hotel):
        task = storage.create_task(hotel_id=hotel.id, title="Room 205 cleaning")
        done = set_task_status(storage, task.id, "completed")
        stamped = done.completed_at
        assert stamped is not None
        again = set_task_status(storage, task.id, "completed")
        assert again.completed_at == stamped

    def test_reopening_keeps_stamp(self, storage, hotel):
        task = storage.create_task(hotel_id=hotel.id, title="Room 205 cleaning")
        set_task_status(storage, task.id, "completed")
        reopened = set_task_status(storage, task.id, "in_progress")
        assert reopened.status == "in_progress"
        assert reopened.completed_at is not None

    def test_in_progress_not_stamped(self, storage, hotel):
        task = storage.create_task(hotel_id=hotel.id, title="Room 205 cleaning")
        assert set_task_status(storage, task.id, "in_progress").completed_at is None

    def test_created_completed_is_stamped(self, storage, hotel):
        task = create_task(storage, hotel_id=hotel.id, title="Update booking rates", status="completed")
        assert task.completed_at is not None
        assert create_task(storage, hotel_id=hotel.id, title="Restock towels").completed_at is None

    def test_unknown_task(self, storage):
        with pytest.raises(NotFound):
            set_task_status(storage, 424242, "completed")


class TestSeed:

    def test_seed_contents(self, storage):
        assert seed_database(storage) is True
        admin = storage.get_user_by_username(settings.ADMIN_USERNAME)
        assert admin.role == "admin"
        assert verify_password(settings.ADMIN_PASSWORD, admin.hashed_password)
        hotel = storage.get_hotel(admin.hotel_id)
        assert hotel.name == "Grand Plaza Hotel"
        assert len(storage.get_rooms_by_hotel(hotel.id)) == 10
        assert len(storage.get_bookings_by_hotel(hotel.id)) == 3
        assert len(storage.get_staff_by_hotel(hotel.id)) == 4
        tasks = storage.get_tasks_by_hotel(hotel.id)
        assert len(tasks) == 4
        assert [t.title for t in tasks if t.completed_at is not None] == ["Update booking rates"]
        assert len(storage.get_today_tasks(hotel.id)) == 4

    def test_seed_idempotent(self, storage):
        seed_database(storage)
        admin = storage.get_user_by_username(settings.ADMIN_USERNAME)
        assert seed_database(storage) is False
        assert len(storage.get_rooms_by_hotel(admin.hotel_id)) == 10
