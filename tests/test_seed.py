import asyncio

from sqlalchemy import func, select

from models.models import Property, User
from seed.seed_db import SEED_PASSWORD, seed


def test_seed_is_idempotent(session_factory):
    async def scenario():
        async with session_factory() as db:
            first = await seed(db)
        async with session_factory() as db:
            second = await seed(db)
            users = await db.scalar(select(func.count(User.id)))
            properties = await db.scalar(select(func.count(Property.id)))
        return first, second, users, properties

    first, second, users, properties = asyncio.run(scenario())

    assert (first, second) == (True, False)
    assert (users, properties) == (2, 2)


def test_seeded_owner_can_log_in_and_see_listings(session_factory, client):
    async def run_seed():
        async with session_factory() as db:
            await seed(db)

    asyncio.run(run_seed())

    login = client.post(
        "/api/auth/login",
        json={"email": "owner@example.com", "password": SEED_PASSWORD},
    )
    assert login.status_code == 200
    assert login.json()["user"]["role"] == "owner"

    listings = client.get(
        "/api/my-properties",
        headers={"Authorization": f"Bearer {login.json()['token']}"},
    ).json()["properties"]
    assert {p["name"] for p in listings} == {"Skyline Apartment", "Family Villa"}
