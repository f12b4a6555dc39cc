"""
Seed a development database with a demo user, an admin and sample library content.

Usage: python seed.py   (reads MONGO_URI / MONGO_DB from the environment or .env)
Existing users, categories and contents are wiped first.
"""

import asyncio
import logging

from app.core.security import get_password_hash
from app.db.session import engine
from app.domains.library.models import CategoryModel, ContentModel
from app.domains.library.services import slugify
from app.domains.users.models import ROLE_ADMIN, ROLE_USER, Profile, UserModel

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("seed")

DEMO_PASSWORD = "password123"

CATEGORIES = [
    ("Nutrition Basics", "Fundamentals of balanced nutrition", "🥗", "#4f46e5"),
    ("Meal Planning", "Organising your meals week by week", "📅", "#10b981"),
    ("Weight Management", "Sustainable approaches to weight goals", "⚖️", "#f59e0b"),
    ("Healthy Eating", "Everyday habits and healthy choices", "🍎", "#ef4444"),
    ("Fitness", "Combining nutrition with physical activity", "🏃", "#a855f7"),
]

CONTENTS = [
    {
        "title": "Introduction to Nutrition Basics",
        "type": "video",
        "description": "Learn the fundamentals of balanced nutrition and macronutrients.",
        "media_url": "https://example.com/video1.mp4",
        "category": "nutrition-basics",
        "tags": ["nutrition", "basics", "introduction"],
        "content": "In this video, we cover the basics of nutrition...",
    },
    {
        "title": "Weekly Meal Planning Guide",
        "type": "post",
        "description": "Step-by-step guide to planning your weekly meals for optimal nutrition.",
        "media_url": "https://example.com/guide1.pdf",
        "category": "meal-planning",
        "tags": ["meal-planning", "weekly", "guide"],
        "content": "Meal planning is essential for maintaining a healthy diet...",
    },
    {
        "title": "Macro Calculator Infographic",
        "type": "infographic",
        "description": "Visual guide to calculating your daily macronutrient requirements.",
        "media_url": "https://example.com/infographic1.png",
        "category": "nutrition-basics",
        "tags": ["macros", "calculator", "infographic"],
    },
    {
        "title": "Healthy Weight Loss Strategies",
        "type": "post",
        "description": "Proven strategies for sustainable and healthy weight loss.",
        "media_url": "https://example.com/article1.html",
        "category": "weight-management",
        "tags": ["weight-loss", "health", "tips"],
        "content": "Weight loss requires a combination of diet and exercise...",
    },
    {
        "title": "Top 10 Healthy Snacks",
        "type": "infographic",
        "description": "Discover the best nutritious snacks to keep you energized.",
        "media_url": "https://example.com/snacks.png",
        "category": "healthy-eating",
        "tags": ["snacks", "healthy", "quick-tips"],
    },
    {
        "title": "Nutrition and Fitness Integration",
        "type": "video",
        "description": "How to combine nutrition and exercise for maximum results.",
        "media_url": "https://example.com/video2.mp4",
        "category": "fitness",
        "tags": ["fitness", "nutrition", "exercise"],
        "content": "Proper nutrition is crucial for fitness success...",
    },
]


async def seed() -> None:
    for model in (UserModel, CategoryModel, ContentModel):
        await engine.get_collection(model).delete_many({})

    password_hash = get_password_hash(DEMO_PASSWORD)
    users = [
        UserModel(
            name="John Doe",
            email="user@example.com",
            password_hash=password_hash,
            role=ROLE_USER,
            profile=Profile(
                age=30,
                gender="male",
                lifestyle="moderate",
                dietary_preferences=["vegetarian"],
                calorie_goal=2000,
                protein_goal=100,
                carb_goal=250,
                fat_goal=65,
            ),
        ),
        UserModel(
            name="Admin User",
            email="admin@nutrition.com",
            password_hash=password_hash,
            role=ROLE_ADMIN,
        ),
    ]
    await engine.save_all(users)
    logger.info(f"Created users: {len(users)}")

    categories = [
        CategoryModel(name=name, slug=slugify(name), description=description, icon=icon, color=color, order=i)
        for i, (name, description, icon, color) in enumerate(CATEGORIES)
    ]
    await engine.save_all(categories)
    logger.info(f"Created categories: {len(categories)}")

    contents = [ContentModel(**data) for data in CONTENTS]
    await engine.save_all(contents)
    logger.info(f"Created content: {len(contents)}")
    logger.info("Database seeding completed successfully!")


if __name__ == "__main__":
    asyncio.run(seed())
