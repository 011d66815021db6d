"""
Tests for hotelpro/routers/bookings_api.py and dashboard_api.py
Covers: create booking, status and payment updates, hotel and recent listings,
        dashboard stats over HTTP
"""
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from hotelpro.db import get_db
from hotelpro.main import app
from hotelpro.storage import DatabaseStorage

from conftest import make_booking, make_guest, make_hotel, make_room


def _booking_payload(hotel_id, **overrides):
    payload = {
        "guestName": "Mike Wilson",
        "email": "mike.wilson@email.com",
        "phone": "+1-555-0103",
        "checkInDate": "2026-11-02",
        "checkOutDate": "2026-11-04",
        "roomType": "Standard",
        "numberOfGuests": 2,
        "hotelId": hotel_id,
    }
    payload.update(overrides)
    return payload


class TestCreateBooking:

    def test_create(self, client, db_storage, api_hotel):
        room = make_room(db_storage, api_hotel.id, "201", price="125.00")
        res = client.post("/api/bookings", json=_booking_payload(api_hotel.id))
        assert res.status_code == 201
        body = res.json()
        assert body["roomId"] == room.id
        assert body["status"] == "confirmed"
        assert body["paymentStatus"] == "pending"
        assert body["totalAmount"] == 250.0
        assert body["numberOfGuests"] == 2
        rooms = client.get(f"/api/rooms/{api_hotel.id}").json()
        assert rooms[0]["status"] == "reserved"

    def test_no_room_available(self, client, db_storage, api_hotel):
        make_room(db_storage, api_hotel.id, "201", status="occupied")
        res = client.post("/api/bookings", json=_booking_payload(api_hotel.id))
        assert res.status_code == 400
        assert res.json()["error"] == "No available rooms of the requested type"
        assert db_storage.get_guest_by_email("mike.wilson@email.com") is None

    def test_bad_dates(self, client, db_storage, api_hotel):
        make_room(db_storage, api_hotel.id, "201")
        res = client.post("/api/bookings", json=_booking_payload(api_hotel.id, checkOutDate="2026-11-01"))
        assert res.status_code == 400
        assert res.json()["details"][0]["field"] == "checkOutDate"

    def test_missing_fields(self, client, api_hotel):
        res = client.post("/api/bookings", json={"hotelId": api_hotel.id})
        assert res.status_code == 400
        assert res.json()["error"] == "Validation error"


class TestBookingStatus:

    def _booking(self, db_storage, hotel):
        room = make_room(db_storage, hotel.id, "101", status="reserved")
        guest = make_guest(db_storage)
        return room, make_booking(db_storage, hotel.id, room.id, guest.id, status="confirmed")

    def test_check_in_then_out(self, client, db_storage, api_hotel):
        room, booking = self._booking(db_storage, api_hotel)
        res = client.patch(f"/api/bookings/{booking.id}/status", json={"status": "checked_in"})
        assert res.status_code == 200
        assert res.json()["status"] == "checked_in"
        assert db_storage.get_room(room.id).status == "occupied"

        client.patch(f"/api/bookings/{booking.id}/status", json={"status": "checked_out"})
        assert db_storage.get_room(room.id).status == "available"

    def test_invalid_status(self, client, db_storage, api_hotel):
        room, booking = self._booking(db_storage, api_hotel)
        res = client.patch(f"/api/bookings/{booking.id}/status", json={"status": "teleported"})
        assert res.status_code == 400

    def test_unknown_booking(self, client):
        res = client.patch("/api/bookings/424242/status", json={"status": "cancelled"})
        assert res.status_code == 404
        assert res.json() == {"error": "Booking not found"}

    def test_bad_id(self, client):
        res = client.patch("/api/bookings/abc/status", json={"status": "cancelled"})
        assert res.status_code == 400

    def test_payment(self, client, db_storage, api_hotel):
        room, booking = self._booking(db_storage, api_hotel)
        res = client.patch(f"/api/bookings/{booking.id}/payment", json={"paymentStatus": "paid"})
        assert res.status_code == 200
        assert res.json()["paymentStatus"] == "paid"
        stats = client.get(f"/api/dashboard/stats/{api_hotel.id}").json()
        assert stats["revenue"] == 240.0

    def test_payment_unknown_booking(self, client):
        res = client.patch("/api/bookings/424242/payment", json={"paymentStatus": "paid"})
        assert res.status_code == 404


class TestListings:

    def test_hotel_bookings(self, client, db_storage, api_hotel):
        room = make_room(db_storage, api_hotel.id)
        guest = make_guest(db_storage)
        make_booking(db_storage, api_hotel.id, room.id, guest.id)
        make_booking(db_storage, api_hotel.id, room.id, guest.id)
        res = client.get(f"/api/bookings/hotel/{api_hotel.id}")
        assert res.status_code == 200
        assert len(res.json()) == 2

    def test_recent(self, client, db_storage, api_hotel):
        room = make_room(db_storage, api_hotel.id, "104", room_type="deluxe")
        guest = make_guest(db_storage)
        base = datetime(2026, 10, 1, 9, 0)
        ids = [
            make_booking(db_storage, api_hotel.id, room.id, guest.id, created_at=base + timedelta(hours=i)).id
            for i in range(3)
        ]
        res = client.get(f"/api/bookings/recent/{api_hotel.id}", params={"limit": 2})
        assert res.status_code == 200
        body = res.json()
        assert [b["id"] for b in body] == [ids[2], ids[1]]
        assert body[0]["guest"] == {"name": "John Smith", "email": "john.smith@email.com"}
        assert body[0]["room"] == {"number": "104", "type": "deluxe"}
        assert body[0]["guestName"] == "John Smith"
        assert body[0]["roomNumber"] == "104"

    def test_recent_default_limit(self, client, db_storage, api_hotel):
        room = make_room(db_storage, api_hotel.id)
        guest = make_guest(db_storage)
        for _ in range(12):
            make_booking(db_storage, api_hotel.id, room.id, guest.id)
        res = client.get(f"/api/bookings/recent/{api_hotel.id}")
        assert len(res.json()) == 10

    def test_recent_deleted_guest(self, client, db_storage, api_hotel):
        room = make_room(db_storage, api_hotel.id)
        guest = make_guest(db_storage)
        make_booking(db_storage, api_hotel.id, room.id, guest.id)
        client.delete(f"/api/guests/{guest.id}")
        body = client.get(f"/api/bookings/recent/{api_hotel.id}").json()
        assert body[0]["guest"] is None
        assert body[0]["guestName"] is None
        assert body[0]["room"]["number"] == "101"

    def test_recent_bad_limit(self, client, api_hotel):
        res = client.get(f"/api/bookings/recent/{api_hotel.id}", params={"limit": 0})
        assert res.status_code == 400


class TestDashboard:

    def test_stats(self, client, db_storage, api_hotel):
        make_room(db_storage, api_hotel.id, "101", status="available")
        make_room(db_storage, api_hotel.id, "102", status="occupied")
        res = client.get(f"/api/dashboard/stats/{api_hotel.id}")
        assert res.status_code == 200
        assert res.json() == {
            "totalBookings": 0,
            "occupancyRate": 50,
            "revenue": 0.0,
            "availableRooms": 1,
            "totalRooms": 2,
            "occupiedRooms": 1,
            "maintenanceRooms": 0,
            "reservedRooms": 0,
        }

    def test_stats_bad_id(self, client):
        res = client.get("/api/dashboard/stats/not-a-number")
        assert res.status_code == 400


class TestDeletedReferences:

    @pytest.fixture
    def fk_client(self, fk_session):
        def override_get_db():
            yield fk_session

        app.dependency_overrides[get_db] = override_get_db
        with TestClient(app) as test_client:
            yield test_client
        app.dependency_overrides.clear()

    def _booked(self, fk_session):
        storage = DatabaseStorage(fk_session)
        hotel = make_hotel(storage)
        room = make_room(storage, hotel.id, "101")
        guest = make_guest(storage)
        booking = make_booking(storage, hotel.id, room.id, guest.id, status="confirmed")
        return hotel, room, guest, booking

    def test_delete_booked_room(self, fk_client, fk_session):
        hotel, room, guest, booking = self._booked(fk_session)
        res = fk_client.delete(f"/api/rooms/{room.id}")
        assert res.status_code == 204
        body = fk_client.get(f"/api/bookings/hotel/{hotel.id}").json()
        assert body[0]["id"] == booking.id
        assert body[0]["roomId"] is None
        recent = fk_client.get(f"/api/bookings/recent/{hotel.id}").json()
        assert recent[0]["room"] is None
        assert recent[0]["guest"]["name"] == "John Smith"

    def test_delete_booked_guest(self, fk_client, fk_session):
        hotel, room, guest, booking = self._booked(fk_session)
        assert fk_client.delete(f"/api/guests/{guest.id}").status_code == 204
        recent = fk_client.get(f"/api/bookings/recent/{hotel.id}").json()
        assert recent[0]["guestId"] is None
        assert recent[0]["guest"] is None
        assert recent[0]["room"]["number"] == "101"

    def test_status_change_after_room_deleted(self, fk_client, fk_session):
        hotel, room, guest, booking = self._booked(fk_session)
        fk_client.delete(f"/api/rooms/{room.id}")
        res = fk_client.patch(f"/api/bookings/{booking.id}/status", json={"status": "checked_in"})
        assert res.status_code == 200
        assert res.json()["status"] == "checked_in"
