"""
Timeline API - Gantt layout for activities in progress
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from datetime import date

from canvasflow.config import get_settings
from canvasflow.database import get_db
from canvasflow.models.user import User
from canvasflow.models.activity import ActivityStatus
from canvasflow.api.deps import get_current_user
from canvasflow.services import board_service
from canvasflow.services.timeline_layout import TimelineLayout, ViewMode, compute_timeline_layout

settings = get_settings()
router = APIRouter()


@router.get("/", response_model=TimelineLayout)
async def get_timeline(
    view: ViewMode = ViewMode.DAY,
    project_id: Optional[int] = None,
    today: Optional[date] = None,
    language: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Lay out doing activities for the day, week or month view.
    Column labels follow the user's language unless ``language`` is given.
    """
    if language is None:
        language = (await board_service.get_user_settings(db, current_user)).language

    activities = await board_service.list_activities(
        db, current_user, project_id=project_id, status=ActivityStatus.DOING
    )
    projects = await board_service.list_projects(db, current_user)

    try:
        return compute_timeline_layout(
            activities,
            view,
            today or date.today(),
            projects=projects,
            language=language,
            private_label=settings.PRIVATE_LABEL,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
