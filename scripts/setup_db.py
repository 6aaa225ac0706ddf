"""
Database setup script - creates tables and a small demo board
"""
import asyncio
from datetime import date, timedelta
from canvasflow.database import engine, Base, AsyncSessionLocal
from canvasflow.models import *  # noqa: F401,F403 - Import all models to register them
from canvasflow.models.activity import ActivityStatus
from canvasflow.services import board_service


async def setup_database():
    """Create tables and seed a demo board for the configured owner"""
    print("Creating database tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("Tables created")

    async with AsyncSessionLocal() as session:
        owner = await board_service.get_or_create_default_user(session)
        if await board_service.list_projects(session, owner):
            print(f"Board for {owner.email} already has projects, skipping demo data")
            return

        today = date.today()
        website = await board_service.create_project(session, owner, "Website", "#4A90D9")
        launch = await board_service.create_project(session, owner, "Launch", "#FF9F43")

        demo = [
            ("Wireframes", website.id, today - timedelta(days=10), 5, ActivityStatus.DOING),
            ("Copywriting", website.id, today - timedelta(days=3), 10, ActivityStatus.DOING),
            ("Press kit", launch.id, today - timedelta(days=2), None, ActivityStatus.DOING),
            ("Partner outreach", launch.id, today - timedelta(days=4), 7, ActivityStatus.TODO),
            ("Book dentist", None, today + timedelta(days=3), 1, ActivityStatus.TODO),
        ]
        for title, project_id, start, duration, status in demo:
            activity = await board_service.create_activity(
                session, owner, title,
                project_id=project_id, start_date=start, duration_days=duration,
            )
            if status != ActivityStatus.TODO:
                await board_service.move_activity(session, owner, activity.id, status)

        print(f"Seeded {len(demo)} demo activities")

    print("\nDatabase setup complete!")
    print(f"Board owner: {owner.email}")


if __name__ == "__main__":
    asyncio.run(setup_database())
