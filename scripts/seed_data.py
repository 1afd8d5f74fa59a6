"""Seed the database with sample rooms, guests and bookings.

Bookings are laid out around today so the current month of the booking
calendar and the dashboard both have something to show.

Run from the project root:
    python -m scripts.seed_data
"""

import asyncio
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import delete

from hotel_desk.database import async_session_factory, engine
from hotel_desk.models.booking import Booking
from hotel_desk.models.guest import Guest
from hotel_desk.models.room import Room

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

ROOMS = [
    {
        "room_number": "101",
        "room_type": "Standard Room",
        "floor": 1,
        "price_per_night": Decimal("95.00"),
        "max_occupancy": 2,
        "amenities": ["WiFi", "TV", "AC"],
        "description": "Queen bed, courtyard view.",
    },
    {
        "room_number": "102",
        "room_type": "Standard Room",
        "floor": 1,
        "price_per_night": Decimal("95.00"),
        "max_occupancy": 2,
        "amenities": ["WiFi", "TV", "AC"],
        "description": "Twin beds, courtyard view.",
    },
    {
        "room_number": "201",
        "room_type": "Deluxe Room",
        "floor": 2,
        "price_per_night": Decimal("140.00"),
        "max_occupancy": 3,
        "amenities": ["WiFi", "TV", "AC", "Minibar"],
        "description": "King bed with a sofa bed and city view.",
    },
    {
        "room_number": "202",
        "room_type": "Deluxe Room",
        "floor": 2,
        "price_per_night": Decimal("140.00"),
        "max_occupancy": 3,
        "amenities": ["WiFi", "TV", "AC", "Minibar"],
        "description": "King bed, balcony.",
        "status": "cleaning",
    },
    {
        "room_number": "301",
        "room_type": "Suite",
        "floor": 3,
        "price_per_night": Decimal("260.00"),
        "max_occupancy": 4,
        "amenities": ["WiFi", "TV", "AC", "Minibar", "Bathtub", "Lounge"],
        "description": "Two-room suite with separate lounge.",
    },
    {
        "room_number": "302",
        "room_type": "Family Room",
        "floor": 3,
        "price_per_night": Decimal("180.00"),
        "max_occupancy": 5,
        "amenities": ["WiFi", "TV", "AC", "Kitchenette"],
        "description": "Two queen beds and a bunk bed.",
        "status": "maintenance",
    },
]

GUESTS = [
    {
        "first_name": "Sarah",
        "last_name": "Johnson",
        "email": "sarah.johnson@example.com",
        "phone": "+1-555-0101",
        "address": "42 Elm Street, Portland, OR",
        "id_type": "drivers_license",
        "id_number": "OR4471920",
    },
    {
        "first_name": "Kenji",
        "last_name": "Tanaka",
        "email": "kenji.tanaka@example.com",
        "phone": "+81-90-1234-5678",
        "address": "3-14 Shibuya, Tokyo",
        "id_type": "passport",
        "id_number": "TZ8812034",
    },
    {
        "first_name": "Amelie",
        "last_name": "Laurent",
        "email": "amelie.laurent@example.com",
        "phone": "+33-6-12-34-56-78",
        "address": "18 Rue Cler, Paris",
        "id_type": "national_id",
        "id_number": "FR19087734",
    },
    {
        "first_name": "Marcus",
        "last_name": "Reid",
        "email": "marcus.reid@example.com",
        "phone": "+44-7700-900123",
        "id_type": "passport",
        "id_number": "GB5520981",
    },
    {
        "first_name": "Priya",
        "last_name": "Sharma",
        "email": "priya.sharma@example.com",
        "phone": "+91-98200-11223",
        "address": "Bandra West, Mumbai",
        "id_type": "passport",
        "id_number": "IN7731645",
    },
]


def _build_bookings(rooms: dict[str, Room], guests: dict[str, Guest], today: date) -> list[dict]:
    """Bookings spread over last month, this month and next month.

    Mix of statuses; stays that hold a room today are checked in.
    """
    return [
        # --- Past ---
        {
            "room": rooms["101"],
            "guest": guests["Sarah"],
            "check_in": today - timedelta(days=20),
            "check_out": today - timedelta(days=17),
            "adults": 2,
            "status": "checked-out",
        },
        {
            "room": rooms["301"],
            "guest": guests["Marcus"],
            "check_in": today - timedelta(days=12),
            "check_out": today - timedelta(days=9),
            "adults": 1,
            "status": "cancelled",
        },
        # --- Current ---
        {
            "room": rooms["101"],
            "guest": guests["Kenji"],
            "check_in": today - timedelta(days=2),
            "check_out": today + timedelta(days=3),
            "adults": 1,
            "status": "checked-in",
            "special_requests": "Quiet room, late checkout if possible",
        },
        {
            "room": rooms["201"],
            "guest": guests["Amelie"],
            "check_in": today - timedelta(days=1),
            "check_out": today + timedelta(days=2),
            "adults": 2,
            "children": 1,
            "status": "checked-in",
            "special_requests": "Extra cot",
        },
        # --- Future ---
        {
            "room": rooms["102"],
            "guest": guests["Priya"],
            "check_in": today + timedelta(days=4),
            "check_out": today + timedelta(days=8),
            "adults": 2,
            "status": "confirmed",
        },
        {
            "room": rooms["301"],
            "guest": guests["Sarah"],
            "check_in": today + timedelta(days=6),
            "check_out": today + timedelta(days=9),
            "adults": 3,
            "status": "pending",
            "special_requests": "Anniversary, flowers in room",
        },
        {
            "room": rooms["201"],
            "guest": guests["Marcus"],
            "check_in": today + timedelta(days=14),
            "check_out": today + timedelta(days=16),
            "adults": 1,
            "status": "confirmed",
        },
    ]


async def seed() -> None:
    """Replace all rooms, guests and bookings with the sample data."""
    async with async_session_factory() as session:
        await session.execute(delete(Booking))
        await session.execute(delete(Guest))
        await session.execute(delete(Room))
        await session.flush()

        # ------------------------------------------------------------------
        # 1. Rooms
        # ------------------------------------------------------------------
        rooms: dict[str, Room] = {}
        for room_data in ROOMS:
            room = Room(**room_data)
            session.add(room)
            rooms[room.room_number] = room
        await session.flush()
        print(f"Created {len(rooms)} rooms")

        # ------------------------------------------------------------------
        # 2. Guests
        # ------------------------------------------------------------------
        guests: dict[str, Guest] = {}
        for guest_data in GUESTS:
            guest = Guest(**guest_data)
            session.add(guest)
            guests[guest.first_name] = guest
        await session.flush()
        print(f"Created {len(guests)} guests")

        # ------------------------------------------------------------------
        # 3. Bookings
        # ------------------------------------------------------------------
        today = date.today()
        bookings_data = _build_bookings(rooms, guests, today)
        for bdata in bookings_data:
            room: Room = bdata.pop("room")
            guest: Guest = bdata.pop("guest")
            booking = Booking(room_id=room.id, guest_id=guest.id, **bdata)
            booking.total_amount = room.price_per_night * booking.nights
            session.add(booking)
            if bdata["status"] == "checked-in":
                room.status = "occupied"

        await session.commit()
        print(f"Created {len(bookings_data)} bookings")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
