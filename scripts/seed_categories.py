#!/usr/bin/env python3
"""
Seed the skill categories shown in the skill picker.
Existing categories are left untouched, so the script is safe to re-run.
"""

import asyncio
import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from skillswap.core.database import AsyncSessionLocal, engine
from skillswap.repositories.skill_repository import CategoryRepository


CATEGORIES = [
    {"name": "Technology", "description": "Programming, Web Dev, AI, Data Science", "icon": "💻"},
    {"name": "Design", "description": "Graphic Design, UI/UX, Illustration", "icon": "🎨"},
    {"name": "Business", "description": "Marketing, Management, Sales", "icon": "💼"},
    {"name": "Languages", "description": "English, Spanish, French, etc.", "icon": "🌍"},
    {"name": "Arts", "description": "Music, Photography, Drawing", "icon": "🎭"},
    {"name": "Fitness", "description": "Yoga, Sports, Gym", "icon": "💪"},
    {"name": "Cooking", "description": "Baking, Cuisine, Recipes", "icon": "🍳"},
    {"name": "Lifestyle", "description": "Fashion, Travel, Wellness", "icon": "✨"},
]


async def seed_categories() -> int:
    """Insert missing categories. Returns how many were created."""
    repo = CategoryRepository()
    created = 0
    async with AsyncSessionLocal() as session:
        try:
            for data in CATEGORIES:
                if await repo.get_by_name(session, data["name"]):
                    continue
                await repo.create(session, data)
                created += 1
            await session.commit()
        except Exception as e:
            await session.rollback()
            print(f"❌ Error seeding categories: {str(e)}")
            raise
    return created


async def main():
    print("🌱 Seeding categories...")
    try:
        created = await seed_categories()
        print(f"✅ Categories seeded! ({created} new, {len(CATEGORIES) - created} already present)")
    except Exception as e:
        print(f"❌ Seeding failed: {str(e)}")
        sys.exit(1)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
