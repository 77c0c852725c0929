"""Seed countries, states, categories and subcategories. Safe to run repeatedly."""

import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

import asyncio
import logging
from sqlalchemy import select
from eventhub.core.config import get_settings
from eventhub.core.database import DatabaseSessionManager
from eventhub.models.category import Category, Subcategory
from eventhub.models.location import Country, State

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

COUNTRIES = [
    {"name": "India", "code": "+91"},
    {"name": "United States", "code": "+1"},
    {"name": "United Kingdom", "code": "+44"},
    {"name": "Australia", "code": "+61"},
    {"name": "Canada", "code": "+1"},
]

# state name -> country name
STATES = [
    ("Gujarat", "India"),
    ("Maharashtra", "India"),
    ("California", "United States"),
    ("Texas", "United States"),
    ("England", "United Kingdom"),
    ("Scotland", "United Kingdom"),
    ("New South Wales", "Australia"),
    ("Victoria", "Australia"),
    ("Ontario", "Canada"),
    ("Quebec", "Canada"),
]

CATEGORIES = ["Spiritual", "Education", "Health", "Technology", "Community"]

# subcategory name -> category name
SUBCATEGORIES = [
    ("Bhajan", "Spiritual"),
    ("Satsang", "Education"),
    ("Online Courses", "Health"),
    ("Mental Wellness", "Technology"),
    ("Mobile Apps", "Community"),
]


async def seed_lookups(db) -> dict:
    """Insert any missing lookup rows and return how many were added per table."""
    added = {"countries": 0, "states": 0, "categories": 0, "subcategories": 0}

    countries = {c.name: c for c in (await db.execute(select(Country))).scalars().all()}
    for country in COUNTRIES:
        if country["name"] not in countries:
            row = Country(**country)
            db.add(row)
            countries[row.name] = row
            added["countries"] += 1
    await db.flush()

    existing_states = {
        (s.name, s.country_id) for s in (await db.execute(select(State))).scalars().all()
    }
    for state_name, country_name in STATES:
        country_id = countries[country_name].id
        if (state_name, country_id) not in existing_states:
            db.add(State(name=state_name, country_id=country_id))
            added["states"] += 1

    categories = {c.category_name: c for c in (await db.execute(select(Category))).scalars().all()}
    for name in CATEGORIES:
        if name not in categories:
            row = Category(category_name=name, is_active=True)
            db.add(row)
            categories[name] = row
            added["categories"] += 1
    await db.flush()

    existing_subcategories = set((await db.execute(select(Subcategory.subcategory_name))).scalars().all())
    for name, category_name in SUBCATEGORIES:
        if name not in existing_subcategories:
            db.add(Subcategory(subcategory_name=name, category_id=categories[category_name].id, is_active=True))
            added["subcategories"] += 1

    await db.commit()
    return added


async def main():
    settings = get_settings()
    session_manager = DatabaseSessionManager(settings.DATABASE_URL, models=settings.DB_MODELS)
    await session_manager.init()
    try:
        async with session_manager.get_session() as db:
            added = await seed_lookups(db)
        logger.info(f"✅ Seed data inserted: {added}")
    finally:
        await session_manager.close()


if __name__ == "__main__":
    asyncio.run(main())
