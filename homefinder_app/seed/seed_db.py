import asyncio
import logging

from sqlalchemy import select

from core.get_db import AsyncSessionLocal
from models.enums import PropertyType, UserRole
from models.models import Property, User

logger = logging.getLogger(__name__)

SEED_PASSWORD = "password123"

SEED_USERS = [
    {
        "username": "propertyowner",
        "full_name": "Property Owner",
        "email": "owner@example.com",
        "role": UserRole.OWNER,
    },
    {
        "username": "propertytenant",
        "full_name": "Property Tenant",
        "email": "tenant@example.com",
        "role": UserRole.TENANT,
    },
]

SEED_PROPERTIES = [
    {
        "name": "Skyline Apartment",
        "description": "Modern apartment with 2 bedrooms, fully furnished with city views and close to public transportation.",
        "price": 3500000,
        "location": "Central Jakarta",
        "type": PropertyType.APARTMENT,
        "image_url": "https://images.unsplash.com/photo-1522708323590-d24dbb6b0267?auto=format&fit=crop&w=1470&q=80",
    },
    {
        "name": "Family Villa",
        "description": "Spacious 3-bedroom house with garden, perfect for families. Includes garage and security.",
        "price": 7000000,
        "location": "South Jakarta",
        "type": PropertyType.HOUSE,
        "image_url": "https://images.unsplash.com/photo-1502672260266-1c1ef2d93688?auto=format&fit=crop&w=1470&q=80",
    },
]


async def seed(db) -> bool:
    """Insert demo users and listings into an empty database.

    Returns False without touching anything when users already exist.
    """
    existing = await db.execute(select(User.id).limit(1))
    if existing.scalar_one_or_none() is not None:
        logger.info("Users already exist, skipping seed")
        return False

    users = {}
    for data in SEED_USERS:
        user = User(**data)
        user.set_password(SEED_PASSWORD)
        db.add(user)
        users[data["role"]] = user
    await db.flush()

    owner = users[UserRole.OWNER]
    for data in SEED_PROPERTIES:
        db.add(Property(owner_id=owner.id, **data))

    await db.commit()
    logger.info(
        f"Seeded {len(SEED_USERS)} users and {len(SEED_PROPERTIES)} properties"
    )
    return True


async def run():
    async with AsyncSessionLocal() as db:
        await seed(db)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(run())
