"""
Projects API endpoints - colored project tags for the board
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from canvasflow.database import get_db
from canvasflow.models.user import User
from canvasflow.api.deps import get_current_user, board_http_error
from canvasflow.services import board_service
from canvasflow.services.board_service import BoardError
from canvasflow.utils.colors import PROJECT_COLORS

router = APIRouter()


# --- Pydantic Schemas ---

class ProjectResponse(BaseModel):
    id: int
    name: str
    color: str
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class ProjectCreate(BaseModel):
    name: str = Field(min_length=1)
    color: Optional[str] = None


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    color: Optional[str] = None


class ColorOption(BaseModel):
    name: str
    value: str
    available: bool


# --- Endpoints ---

@router.get("/", response_model=List[ProjectResponse])
async def list_projects(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List projects A-Z"""
    return await board_service.list_projects(db, current_user)


@router.get("/colors", response_model=List[ColorOption])
async def list_colors(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Palette colors with whether each is still free"""
    used = set(await board_service.get_used_colors(db, current_user))
    return [
        ColorOption(name=c["name"], value=c["value"], available=c["value"] not in used)
        for c in PROJECT_COLORS
    ]


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        return await board_service.get_project(db, current_user, project_id)
    except BoardError as e:
        raise board_http_error(e)


@router.post("/", response_model=ProjectResponse)
async def create_project(
    data: ProjectCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create a project; omit color to get a random unused one"""
    try:
        return await board_service.create_project(db, current_user, data.name, data.color)
    except BoardError as e:
        raise board_http_error(e)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    data: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        return await board_service.update_project(
            db, current_user, project_id, name=data.name, color=data.color
        )
    except BoardError as e:
        raise board_http_error(e)


@router.delete("/{project_id}")
async def delete_project(
    project_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete a project and all of its activities"""
    try:
        await board_service.delete_project(db, current_user, project_id)
    except BoardError as e:
        raise board_http_error(e)
    return {"message": "Project deleted"}
