"""
User settings API - branding and UI language
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from datetime import datetime
from pydantic import BaseModel

from canvasflow.database import get_db
from canvasflow.models.user import User
from canvasflow.api.deps import get_current_user, board_http_error
from canvasflow.services import board_service
from canvasflow.services.board_service import BoardError

router = APIRouter()


class SettingsResponse(BaseModel):
    company_name: Optional[str]
    brand_color: Optional[str]
    language: str
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class SettingsUpdate(BaseModel):
    company_name: Optional[str] = None
    brand_color: Optional[str] = None
    language: Optional[str] = None


@router.get("/", response_model=SettingsResponse)
async def get_settings(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await board_service.get_user_settings(db, current_user)


@router.put("/", response_model=SettingsResponse)
async def update_settings(
    data: SettingsUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update settings; only fields present in the body change"""
    try:
        return await board_service.update_user_settings(
            db, current_user, data.model_dump(exclude_unset=True)
        )
    except BoardError as e:
        raise board_http_error(e)
