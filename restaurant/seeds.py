"""
Demo data: menu items, two companies and one user per role.

Seeding clears the menu, company and user collections first. Orders are left
alone. All demo users share the password ``password123``.
"""

import logging
from datetime import UTC, datetime

from restaurant.auth.security import hash_password
from restaurant.database import COMPANIES_COLLECTION, MENU_COLLECTION, USERS_COLLECTION, get_collection, new_id
from restaurant.models import Company, MenuItem, MenuItemCreate, Role, User
from restaurant.models.schemas import Address, Contact

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"  # pragma: allowlist secret

_IMAGE = "https://images.pexels.com/photos/{}/pexels-photo-{}.jpeg?auto=compress&cs=tinysrgb&w=1260&h=750&dpr=2"

SAMPLE_MENU = [
    MenuItemCreate(
        name="Grilled Salmon",
        description="Fresh Atlantic salmon, grilled to perfection and served with seasonal vegetables.",
        price=18.99,
        category="Main Course",
        image=_IMAGE.format(1583884, 1583884),
    ),
    MenuItemCreate(
        name="Pasta Carbonara",
        description="Creamy pasta with pancetta, eggs, Parmesan cheese, and freshly ground black pepper.",
        price=15.99,
        category="Main Course",
        image=_IMAGE.format(2664216, 2664216),
    ),
    MenuItemCreate(
        name="Caesar Salad",
        description="Romaine lettuce, croutons, Parmesan cheese, and our homemade Caesar dressing.",
        price=9.99,
        category="Starters",
        image=_IMAGE.format(1211887, 1211887),
    ),
    MenuItemCreate(
        name="Chocolate Cake",
        description="Rich and moist chocolate cake with a decadent ganache frosting.",
        price=8.99,
        category="Desserts",
        image=_IMAGE.format(2233729, 2233729),
    ),
    MenuItemCreate(
        name="Fish and Chips",
        description="Beer-battered cod fillets served with crispy fries and tartar sauce.",
        price=16.99,
        category="Main Course",
        image=_IMAGE.format(4409273, 4409273),
    ),
    MenuItemCreate(
        name="Garlic Bread",
        description="Freshly baked bread topped with garlic butter and herbs.",
        price=5.99,
        category="Starters",
        image=_IMAGE.format(1082343, 1082343),
    ),
    MenuItemCreate(
        name="Tiramisu",
        description="Classic Italian dessert made with coffee-soaked ladyfingers and mascarpone cream.",
        price=7.99,
        category="Desserts",
        image=_IMAGE.format(6133303, 6133303),
    ),
    MenuItemCreate(
        name="Veggie Burger",
        description="Plant-based patty with lettuce, tomato, and special sauce on a brioche bun.",
        price=14.99,
        category="Main Course",
        image=_IMAGE.format(1633578, 1633578),
    ),
]

SAMPLE_COMPANIES = [
    (
        "Acme Corp",
        Contact(name="John Doe", email="john@acmecorp.com", phone="555-123-4567"),
        Address(street="123 Business St", city="Cityville", state="ST", zip="12345"),
    ),
    (
        "TechStart Inc",
        Contact(name="Jane Smith", email="jane@techstart.com", phone="555-987-6543"),
        Address(street="456 Innovation Ave", city="Techtown", state="ST", zip="54321"),
    ),
]

# (name, email, role, index into SAMPLE_COMPANIES)
SAMPLE_USERS = [
    ("Admin User", "admin@example.com", Role.ADMIN, None),
    ("Staff User", "staff@example.com", Role.STAFF, None),
    ("Regular Customer", "customer@example.com", Role.CUSTOMER, None),
    ("Acme Rep", "rep@acmecorp.com", Role.COMPANY, 0),
    ("TechStart Rep", "rep@techstart.com", Role.COMPANY, 1),
]


async def seed_database() -> None:
    """Reset menu items, companies and users to the demo data set."""
    menu_col = get_collection(MENU_COLLECTION)
    companies_col = get_collection(COMPANIES_COLLECTION)
    users_col = get_collection(USERS_COLLECTION)

    await menu_col.delete_many({})
    await companies_col.delete_many({})
    await users_col.delete_many({})

    now = datetime.now(UTC)

    menu = [MenuItem(id=new_id(), **item.model_dump(), created_at=now, updated_at=now) for item in SAMPLE_MENU]
    await menu_col.insert_many([item.model_dump() for item in menu])
    logger.info(f"✅ Seeded {len(menu)} menu items")

    companies = [Company(id=new_id(), name=name, contact=contact, address=address, created_at=now) for name, contact, address in SAMPLE_COMPANIES]
    await companies_col.insert_many([company.model_dump() for company in companies])
    logger.info(f"✅ Seeded {len(companies)} companies")

    password_hash = hash_password(DEMO_PASSWORD)
    users = [
        User(
            id=new_id(),
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            company_id=companies[company_index].id if company_index is not None else None,
            created_at=now,
        )
        for name, email, role, company_index in SAMPLE_USERS
    ]
    await users_col.insert_many([user.model_dump() for user in users])
    logger.info(f"✅ Seeded {len(users)} users")
