"""Initialize database tables and the board owner"""
import asyncio
from canvasflow.database import engine, Base, AsyncSessionLocal
from canvasflow.models import *  # noqa: F401,F403 - Import all models to register them
from canvasflow.services.board_service import get_or_create_default_user, get_user_settings


async def init():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("Database tables created successfully.")

    async with AsyncSessionLocal() as session:
        owner = await get_or_create_default_user(session)
        user_settings = await get_user_settings(session, owner)
    print(f"Board owner {owner.email} ready (language: {user_settings.language}).")


if __name__ == "__main__":
    asyncio.run(init())
