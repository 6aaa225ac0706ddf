"""
Board service - persistence operations for projects, activities and settings.

REST routers and the AI assistant both go through these functions, so the
board rules live in one place:
- a user's projects each carry a distinct palette color
- new activities start in todo, on today's date unless told otherwise
- moving an activity to finished deletes it
- deleting a project deletes its activities
"""
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from canvasflow.config import get_settings
from canvasflow.models.user import User
from canvasflow.models.project import Project
from canvasflow.models.activity import Activity, ActivityStatus
from canvasflow.models.user_settings import UserSettings
from canvasflow.utils.colors import get_random_available_color
from canvasflow.utils.logger import get_logger
from canvasflow.utils.sorting import sort_activities, sort_projects
from canvasflow.utils.validators import (
    validate_duration_days,
    validate_language,
    validate_name,
    validate_progress,
    validate_project_color,
)

settings = get_settings()
logger = get_logger(__name__)

ACTIVITY_FIELDS = ("title", "project_id", "status", "start_date", "duration_days", "progress", "notes")
SETTINGS_FIELDS = ("company_name", "brand_color", "language")


class BoardError(Exception):
    """Base class for board rule violations"""


class NotFoundError(BoardError):
    pass


class ConflictError(BoardError):
    pass


class BoardValidationError(BoardError):
    pass


def _as_datetime(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _validated(check, value):
    try:
        return check(value)
    except ValueError as e:
        raise BoardValidationError(str(e)) from e


# --- Users ---

async def get_or_create_default_user(db: AsyncSession) -> User:
    """The configured board owner, created on first use"""
    result = await db.execute(select(User).where(User.email == settings.DEFAULT_USER_EMAIL))
    user = result.scalar_one_or_none()
    if user is None:
        user = User(email=settings.DEFAULT_USER_EMAIL, full_name=settings.DEFAULT_USER_NAME)
        db.add(user)
        await db.commit()
        await db.refresh(user)
        logger.info(f"Created default board owner {user.email}")
    return user


# --- Projects ---

async def list_projects(db: AsyncSession, user: User) -> List[Project]:
    result = await db.execute(select(Project).where(Project.user_id == user.id))
    return sort_projects(result.scalars().all())


async def get_project(db: AsyncSession, user: User, project_id: int) -> Project:
    result = await db.execute(
        select(Project).where(Project.id == project_id, Project.user_id == user.id)
    )
    project = result.scalar_one_or_none()
    if project is None:
        raise NotFoundError("Project not found")
    return project


async def get_used_colors(db: AsyncSession, user: User) -> List[str]:
    result = await db.execute(select(Project.color).where(Project.user_id == user.id))
    return list(result.scalars().all())


async def create_project(
    db: AsyncSession,
    user: User,
    name: str,
    color: Optional[str] = None,
) -> Project:
    """Create a project; without a color one is picked from the unused palette entries"""
    used = await get_used_colors(db, user)
    if color is None:
        color = get_random_available_color(used)
        if color is None:
            raise ConflictError("All palette colors are already in use")
    else:
        color = _validated(validate_project_color, color)
        if color in used:
            raise ConflictError(f"Color {color} is already used by another project")

    project = Project(user_id=user.id, name=_validated(validate_name, name), color=color)
    db.add(project)
    await db.commit()
    await db.refresh(project)
    logger.info(f"Created project {project.id} ({project.name}, {project.color})")
    return project


async def update_project(
    db: AsyncSession,
    user: User,
    project_id: int,
    name: Optional[str] = None,
    color: Optional[str] = None,
) -> Project:
    project = await get_project(db, user, project_id)
    if name is not None:
        name = _validated(validate_name, name)

    if color is not None:
        color = _validated(validate_project_color, color)
        if color != project.color and color in await get_used_colors(db, user):
            raise ConflictError(f"Color {color} is already used by another project")
        project.color = color
    if name is not None:
        project.name = name

    await db.commit()
    await db.refresh(project)
    return project


async def delete_project(db: AsyncSession, user: User, project_id: int) -> None:
    """Delete a project together with all of its activities"""
    project = await get_project(db, user, project_id)
    result = await db.execute(
        delete(Activity).where(Activity.project_id == project.id, Activity.user_id == user.id)
    )
    await db.delete(project)
    await db.commit()
    logger.info(f"Deleted project {project_id} and {result.rowcount} activities")


# --- Activities ---

async def list_activities(
    db: AsyncSession,
    user: User,
    project_id: Optional[int] = None,
    status: Optional[ActivityStatus] = None,
) -> List[Activity]:
    """Activities in board order (project name, start date, title)"""
    query = select(Activity).where(Activity.user_id == user.id)
    if project_id is not None:
        query = query.where(Activity.project_id == project_id)
    if status is not None:
        query = query.where(Activity.status == _validated(ActivityStatus, status))

    result = await db.execute(query)
    projects = await list_projects(db, user)
    return sort_activities(result.scalars().all(), projects, settings.PRIVATE_LABEL)


async def get_activity(db: AsyncSession, user: User, activity_id: int) -> Activity:
    result = await db.execute(
        select(Activity).where(Activity.id == activity_id, Activity.user_id == user.id)
    )
    activity = result.scalar_one_or_none()
    if activity is None:
        raise NotFoundError("Activity not found")
    return activity


async def create_activity(
    db: AsyncSession,
    user: User,
    title: str,
    project_id: Optional[int] = None,
    start_date: Optional[Union[date, datetime]] = None,
    duration_days: Optional[int] = None,
    progress: Optional[int] = None,
    notes: Optional[str] = None,
) -> Activity:
    """Create an activity in the todo column"""
    if project_id is not None:
        await get_project(db, user, project_id)

    activity = Activity(
        user_id=user.id,
        project_id=project_id,
        title=_validated(validate_name, title),
        status=ActivityStatus.TODO,
        start_date=_as_datetime(start_date) if start_date is not None else datetime.combine(date.today(), time.min),
        duration_days=_validated(validate_duration_days, duration_days),
        progress=_validated(validate_progress, progress) if progress is not None else 0,
        notes=notes,
    )
    db.add(activity)
    await db.commit()
    await db.refresh(activity)
    logger.info(f"Created activity {activity.id} ({activity.title})")
    return activity


async def update_activity(
    db: AsyncSession,
    user: User,
    activity_id: int,
    changes: Dict[str, Any],
) -> Optional[Activity]:
    """
    Apply a partial update.

    Only keys present in ``changes`` are written, so ``project_id=None``
    turns the activity private. A status of finished deletes the activity
    and returns None.
    """
    activity = await get_activity(db, user, activity_id)

    unknown = set(changes) - set(ACTIVITY_FIELDS)
    if unknown:
        raise BoardValidationError(f"Unknown activity fields: {sorted(unknown)}")
    title = changes.get("title")
    if title is not None:
        title = _validated(validate_name, title)

    if "status" in changes and changes["status"] is not None:
        status = _validated(ActivityStatus, changes["status"])
        if status == ActivityStatus.FINISHED:
            await db.delete(activity)
            await db.commit()
            logger.info(f"Activity {activity_id} finished and removed")
            return None
        activity.status = status

    if "project_id" in changes:
        if changes["project_id"] is not None:
            await get_project(db, user, changes["project_id"])
        activity.project_id = changes["project_id"]
    if title is not None:
        activity.title = title
    if changes.get("start_date") is not None:
        activity.start_date = _as_datetime(changes["start_date"])
    if "duration_days" in changes:
        activity.duration_days = _validated(validate_duration_days, changes["duration_days"])
    if changes.get("progress") is not None:
        activity.progress = _validated(validate_progress, changes["progress"])
    if "notes" in changes:
        activity.notes = changes["notes"]

    activity.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(activity)
    return activity


async def move_activity(
    db: AsyncSession,
    user: User,
    activity_id: int,
    status: ActivityStatus,
) -> Optional[Activity]:
    """Move an activity to another column; finished removes it"""
    return await update_activity(db, user, activity_id, {"status": status})


async def delete_activity(db: AsyncSession, user: User, activity_id: int) -> None:
    activity = await get_activity(db, user, activity_id)
    await db.delete(activity)
    await db.commit()
    logger.info(f"Deleted activity {activity_id}")


# --- Settings ---

async def get_user_settings(db: AsyncSession, user: User) -> UserSettings:
    """The user's settings row, created with defaults on first read"""
    result = await db.execute(select(UserSettings).where(UserSettings.user_id == user.id))
    user_settings = result.scalar_one_or_none()
    if user_settings is None:
        user_settings = UserSettings(user_id=user.id, language="en")
        db.add(user_settings)
        await db.commit()
        await db.refresh(user_settings)
    return user_settings


async def update_user_settings(db: AsyncSession, user: User, changes: Dict[str, Any]) -> UserSettings:
    user_settings = await get_user_settings(db, user)

    unknown = set(changes) - set(SETTINGS_FIELDS)
    if unknown:
        raise BoardValidationError(f"Unknown settings fields: {sorted(unknown)}")

    if changes.get("language") is not None:
        user_settings.language = _validated(validate_language, changes["language"])
    if "company_name" in changes:
        user_settings.company_name = changes["company_name"]
    if "brand_color" in changes:
        user_settings.brand_color = changes["brand_color"]

    user_settings.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(user_settings)
    return user_settings
