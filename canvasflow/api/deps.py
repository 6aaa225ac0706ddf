"""
Shared router dependencies
"""
from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from canvasflow.database import get_db
from canvasflow.models.user import User
from canvasflow.services.board_service import (
    BoardError,
    ConflictError,
    NotFoundError,
    get_or_create_default_user,
)


async def get_current_user(db: AsyncSession = Depends(get_db)) -> User:
    """Every request acts as the configured board owner"""
    return await get_or_create_default_user(db)


def board_http_error(error: BoardError) -> HTTPException:
    """Translate a board rule violation into an HTTP error"""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, ConflictError):
        return HTTPException(status_code=409, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))
