"""
Activities API endpoints - board cards with alarm state
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from datetime import date, datetime
from pydantic import BaseModel, Field

from canvasflow.database import get_db
from canvasflow.models.user import User
from canvasflow.models.activity import Activity, ActivityStatus
from canvasflow.api.deps import get_current_user, board_http_error
from canvasflow.services import board_service
from canvasflow.services.board_service import BoardError
from canvasflow.services.alarm_engine import AlarmInfo, AlarmState, compute_alarm

router = APIRouter()


# --- Pydantic Schemas ---

class ActivityResponse(BaseModel):
    id: int
    project_id: Optional[int]
    title: str
    status: ActivityStatus
    start_date: datetime
    duration_days: Optional[int]
    progress: int
    notes: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    alarm: AlarmInfo


class ActivityCreate(BaseModel):
    title: str = Field(min_length=1)
    project_id: Optional[int] = None
    start_date: Optional[date] = None
    duration_days: Optional[int] = Field(default=None, ge=1)
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    notes: Optional[str] = None


class ActivityUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    project_id: Optional[int] = None
    status: Optional[ActivityStatus] = None
    start_date: Optional[date] = None
    duration_days: Optional[int] = Field(default=None, ge=1)
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    notes: Optional[str] = None


class ActivityMove(BaseModel):
    status: ActivityStatus


class MoveResponse(BaseModel):
    removed: bool
    activity: Optional[ActivityResponse] = None


class BoardResponse(BaseModel):
    today: date
    todo: List[ActivityResponse]
    doing: List[ActivityResponse]
    critical_count: int
    ghost_count: int


# --- Helper ---

def _build_activity_response(a: Activity, today: date) -> ActivityResponse:
    return ActivityResponse(
        id=a.id,
        project_id=a.project_id,
        title=a.title,
        status=a.status,
        start_date=a.start_date,
        duration_days=a.duration_days,
        progress=a.progress if a.progress is not None else 0,
        notes=a.notes,
        created_at=a.created_at,
        updated_at=a.updated_at,
        alarm=compute_alarm(a, today),
    )


# --- Endpoints ---

@router.get("/", response_model=List[ActivityResponse])
async def list_activities(
    project_id: Optional[int] = None,
    status: Optional[ActivityStatus] = None,
    today: Optional[date] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List activities in board order, optionally for one project or column"""
    today = today or date.today()
    activities = await board_service.list_activities(db, current_user, project_id, status)
    return [_build_activity_response(a, today) for a in activities]


@router.get("/board", response_model=BoardResponse)
async def get_board(
    project_id: Optional[int] = None,
    today: Optional[date] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Todo and doing columns with alarm state per card"""
    today = today or date.today()
    activities = await board_service.list_activities(db, current_user, project_id)
    cards = [_build_activity_response(a, today) for a in activities]

    return BoardResponse(
        today=today,
        todo=[c for c in cards if c.status == ActivityStatus.TODO],
        doing=[c for c in cards if c.status == ActivityStatus.DOING],
        critical_count=sum(1 for c in cards if c.alarm.state == AlarmState.CRITICAL),
        ghost_count=sum(1 for c in cards if c.alarm.state == AlarmState.GHOST),
    )


@router.get("/{activity_id}", response_model=ActivityResponse)
async def get_activity(
    activity_id: int,
    today: Optional[date] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        activity = await board_service.get_activity(db, current_user, activity_id)
    except BoardError as e:
        raise board_http_error(e)
    return _build_activity_response(activity, today or date.today())


@router.post("/", response_model=ActivityResponse)
async def create_activity(
    data: ActivityCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create an activity in the todo column"""
    try:
        activity = await board_service.create_activity(db, current_user, **data.model_dump())
    except BoardError as e:
        raise board_http_error(e)
    return _build_activity_response(activity, date.today())


@router.put("/{activity_id}", response_model=Optional[ActivityResponse])
async def update_activity(
    activity_id: int,
    data: ActivityUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update an activity; setting status to finished removes it and returns null"""
    try:
        activity = await board_service.update_activity(
            db, current_user, activity_id, data.model_dump(exclude_unset=True)
        )
    except BoardError as e:
        raise board_http_error(e)
    if activity is None:
        return None
    return _build_activity_response(activity, date.today())


@router.post("/{activity_id}/move", response_model=MoveResponse)
async def move_activity(
    activity_id: int,
    data: ActivityMove,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Move an activity between columns"""
    try:
        activity = await board_service.move_activity(db, current_user, activity_id, data.status)
    except BoardError as e:
        raise board_http_error(e)
    if activity is None:
        return MoveResponse(removed=True)
    return MoveResponse(removed=False, activity=_build_activity_response(activity, date.today()))


@router.delete("/{activity_id}")
async def delete_activity(
    activity_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        await board_service.delete_activity(db, current_user, activity_id)
    except BoardError as e:
        raise board_http_error(e)
    return {"message": "Activity deleted"}
