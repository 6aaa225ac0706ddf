"""
Main FastAPI application
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from canvasflow.config import get_settings
from canvasflow.database import engine, Base, AsyncSessionLocal
from canvasflow.models import *  # noqa: F401,F403 - Import all models to register them
from canvasflow.services.board_service import get_or_create_default_user, get_user_settings
from canvasflow.api import projects, activities, timeline, settings as user_settings, chat

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")

    # Seed the board owner and their settings
    async with AsyncSessionLocal() as session:
        owner = await get_or_create_default_user(session)
        await get_user_settings(session, owner)
        logger.info(f"Board owner ready: {owner.email}")

    yield

    await engine.dispose()

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(projects.router, prefix="/api/projects", tags=["Projects"])
app.include_router(activities.router, prefix="/api/activities", tags=["Activities"])
app.include_router(timeline.router, prefix="/api/timeline", tags=["Timeline"])
app.include_router(user_settings.router, prefix="/api/settings", tags=["Settings"])
app.include_router(chat.router, prefix="/api/chat", tags=["Chat"])


@app.get("/")
async def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "canvasflow.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
