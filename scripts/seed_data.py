"""Seed the database with demo rental data.

Creates one user per role, two properties with their units, guests,
bookings, recurring and one-off expenses, contacts and inquiries.

Run from the project root:
    python -m scripts.seed_data
"""

import asyncio
from datetime import date
from decimal import Decimal

from sqlalchemy import delete

from rentledger.auth.passwords import hash_password
from rentledger.database import async_session_factory, engine
from rentledger.models import (
    Booking,
    Contact,
    FixedExpense,
    Guest,
    Inquiry,
    Property,
    Unit,
    User,
    VariableExpense,
)

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

DEMO_USERS = [
    {"email": "admin@example.com", "password": "change-me", "name": "Admin User", "role": "ADMIN"},
    {"email": "staff@example.com", "password": "staff-password", "name": "Staff User", "role": "STAFF"},
    {"email": "viewer@example.com", "password": "viewer-password", "name": "Viewer User", "role": "VIEWER"},
]

# Keyed by property name; each unit dict maps straight onto the Unit model.
PROPERTIES = {
    "Villa Serena": {
        "address": "Via Roma 123, Milano",
        "notes": "Villa with garden and pool",
        "units": [
            {"name": "Deluxe Room", "unit_type": "ROOM", "beds": 2, "baths": 1, "surface": 25,
             "base_price": Decimal("80.00"), "notes": "Garden view"},
            {"name": "Premium Suite", "unit_type": "ROOM", "beds": 3, "baths": 2, "surface": 35,
             "base_price": Decimal("120.00"), "notes": "Suite with balcony"},
            {"name": "Garden Apartment", "unit_type": "APARTMENT", "beds": 4, "baths": 2, "surface": 70,
             "base_price": Decimal("150.00"), "notes": "Direct access to the garden"},
        ],
    },
    "Residence Belvedere": {
        "address": "Via Garibaldi 45, Roma",
        "notes": "Residence with panoramic view",
        "units": [
            {"name": "Standard Room", "unit_type": "ROOM", "beds": 2, "baths": 1, "surface": 20,
             "base_price": Decimal("65.00"), "notes": "City view"},
            {"name": "Superior Room", "unit_type": "ROOM", "beds": 2, "baths": 1, "surface": 25,
             "base_price": Decimal("85.00"), "notes": "Panoramic view"},
            {"name": "Panoramic Apartment", "unit_type": "APARTMENT", "beds": 5, "baths": 2, "surface": 90,
             "base_price": Decimal("180.00"), "notes": "Apartment with panoramic terrace"},
        ],
    },
}

GUESTS = [
    {"first_name": "Mario", "last_name": "Rossi", "email": "mario.rossi@example.com",
     "phone": "+39 333 1234567", "address": "Via Verdi 10, Torino"},
    {"first_name": "Giulia", "last_name": "Bianchi", "email": "giulia.bianchi@example.com",
     "phone": "+39 345 7654321", "address": "Via Dante 25, Firenze"},
    {"first_name": "Paolo", "last_name": "Verdi", "email": "paolo.verdi@example.com",
     "phone": "+39 347 9876543", "address": "Via Manzoni 5, Bologna"},
]

# (property, unit, guest email, start, end, price, source, notes)
BOOKINGS = [
    ("Villa Serena", "Deluxe Room", "mario.rossi@example.com",
     date(2024, 8, 1), date(2024, 8, 7), Decimal("560.00"), "Booking.com", "Late check-out requested"),
    ("Villa Serena", "Premium Suite", "giulia.bianchi@example.com",
     date(2024, 8, 10), date(2024, 8, 17), Decimal("840.00"), "Airbnb", "Room service requested"),
    ("Residence Belvedere", "Panoramic Apartment", "paolo.verdi@example.com",
     date(2024, 9, 1), date(2024, 9, 10), Decimal("1800.00"), "Direct", "Family with children"),
    ("Residence Belvedere", "Standard Room", "mario.rossi@example.com",
     date(2024, 9, 15), date(2024, 9, 20), Decimal("325.00"), "Expedia", "Business trip"),
    ("Villa Serena", "Garden Apartment", "giulia.bianchi@example.com",
     date(2024, 10, 1), date(2024, 10, 15), Decimal("2250.00"), "Direct", "Long stay"),
]

# (property, unit or None, description, amount, recurrence)
FIXED_EXPENSES = [
    ("Villa Serena", None, "Rent", Decimal("1500.00"), "MONTHLY"),
    ("Villa Serena", None, "Insurance", Decimal("1200.00"), "ANNUAL"),
    ("Villa Serena", "Garden Apartment", "Garden maintenance", Decimal("100.00"), "MONTHLY"),
    ("Residence Belvedere", None, "Condominium fees", Decimal("800.00"), "MONTHLY"),
    ("Residence Belvedere", None, "Municipal taxes", Decimal("950.00"), "ANNUAL"),
]
FIXED_EXPENSES_START = date(2024, 1, 1)

# (property, unit or None, date, description, amount, category)
VARIABLE_EXPENSES = [
    ("Villa Serena", None, date(2024, 7, 15), "Air conditioner repair", Decimal("250.00"), "Maintenance"),
    ("Villa Serena", "Premium Suite", date(2024, 7, 20), "Fridge replacement", Decimal("450.00"), "Appliances"),
    ("Residence Belvedere", None, date(2024, 7, 10), "Extra cleaning", Decimal("180.00"), "Cleaning"),
    ("Residence Belvedere", "Panoramic Apartment", date(2024, 7, 25), "Water leak repair",
     Decimal("320.00"), "Plumbing"),
]

CONTACTS = [
    {
        "first_name": "Roberto",
        "last_name": "Neri",
        "email": "roberto.neri@example.com",
        "phone": "+39 348 1122334",
        "company": "Sole Travel Agency",
        "tags": ["agency", "partner"],
        "notes": "Main contact for group bookings",
        "inquiries": [
            {
                "subject": "Availability for a tour group",
                "message": "Availability request for a group of 15 people from 15 to 20 September",
                "status": "NEW",
            },
        ],
    },
    {
        "first_name": "Laura",
        "last_name": "Gialli",
        "email": "laura.gialli@example.com",
        "phone": "+39 349 5566778",
        "company": None,
        "tags": ["client", "vip"],
        "notes": "Returning client",
        "inquiries": [
            {
                "subject": "Panoramic apartment details",
                "message": "I would like detailed information about the panoramic apartment and included services",
                "status": "IN_PROGRESS",
            },
        ],
    },
]


# ---------------------------------------------------------------------------
# Main seed function
# ---------------------------------------------------------------------------


async def seed() -> None:
    """Populate the database with demo data.

    Idempotent: wipes every table first, children before parents, and then
    re-creates the full data set.
    """
    async with async_session_factory() as session:
        for model in (Inquiry, Contact, VariableExpense, FixedExpense, Booking, Guest, Unit, Property, User):
            await session.execute(delete(model))
        await session.flush()

        # ------------------------------------------------------------------
        # 1. Users
        # ------------------------------------------------------------------
        for user_data in DEMO_USERS:
            session.add(
                User(
                    email=user_data["email"],
                    hashed_password=hash_password(user_data["password"]),
                    name=user_data["name"],
                    role=user_data["role"],
                    is_active=True,
                )
            )
        await session.flush()
        print(f"Created {len(DEMO_USERS)} users")

        # ------------------------------------------------------------------
        # 2. Properties and units
        # ------------------------------------------------------------------
        properties: dict[str, Property] = {}
        units: dict[tuple[str, str], Unit] = {}
        for prop_name, prop_data in PROPERTIES.items():
            prop = Property(name=prop_name, address=prop_data["address"], notes=prop_data["notes"])
            session.add(prop)
            await session.flush()
            properties[prop_name] = prop

            for unit_data in prop_data["units"]:
                unit = Unit(property_id=prop.id, **unit_data)
                session.add(unit)
                units[(prop_name, unit.name)] = unit
            await session.flush()
            print(f"   {prop.name}: {len(prop_data['units'])} units")

        # ------------------------------------------------------------------
        # 3. Guests and bookings
        # ------------------------------------------------------------------
        guests: dict[str, Guest] = {}
        for guest_data in GUESTS:
            guest = Guest(**guest_data)
            session.add(guest)
            guests[guest.email] = guest
        await session.flush()

        for prop_name, unit_name, guest_email, start, end, price, source, notes in BOOKINGS:
            session.add(
                Booking(
                    unit_id=units[(prop_name, unit_name)].id,
                    guest_id=guests[guest_email].id,
                    start_date=start,
                    end_date=end,
                    price=price,
                    source=source,
                    notes=notes,
                )
            )
        await session.flush()
        print(f"Created {len(guests)} guests and {len(BOOKINGS)} bookings")

        # ------------------------------------------------------------------
        # 4. Expenses
        # ------------------------------------------------------------------
        for prop_name, unit_name, description, amount, recurrence in FIXED_EXPENSES:
            session.add(
                FixedExpense(
                    property_id=properties[prop_name].id,
                    unit_id=units[(prop_name, unit_name)].id if unit_name else None,
                    description=description,
                    amount=amount,
                    recurrence=recurrence,
                    start_date=FIXED_EXPENSES_START,
                )
            )

        for prop_name, unit_name, expense_date, description, amount, category in VARIABLE_EXPENSES:
            session.add(
                VariableExpense(
                    property_id=properties[prop_name].id,
                    unit_id=units[(prop_name, unit_name)].id if unit_name else None,
                    date=expense_date,
                    description=description,
                    amount=amount,
                    category=category,
                )
            )
        await session.flush()
        print(f"Created {len(FIXED_EXPENSES)} fixed and {len(VARIABLE_EXPENSES)} variable expenses")

        # ------------------------------------------------------------------
        # 5. Contacts and inquiries
        # ------------------------------------------------------------------
        inquiry_count = 0
        for contact_data in CONTACTS:
            inquiries = contact_data["inquiries"]
            contact = Contact(**{k: v for k, v in contact_data.items() if k != "inquiries"})
            session.add(contact)
            await session.flush()
            for inquiry_data in inquiries:
                session.add(Inquiry(contact_id=contact.id, **inquiry_data))
                inquiry_count += 1

        await session.commit()
        print(f"Created {len(CONTACTS)} contacts and {inquiry_count} inquiries")

    print()
    print("=" * 60)
    print("Demo logins:")
    for user_data in DEMO_USERS:
        print(f"   {user_data['role']:<7} {user_data['email']} / {user_data['password']}")
    print("=" * 60)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
