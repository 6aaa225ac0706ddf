"""
Chat interface API - natural language board editing through the AI assistant
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel, Field
from typing import List, Literal
from anthropic import APIError

from canvasflow.database import get_db
from canvasflow.models.user import User
from canvasflow.api.deps import get_current_user
from canvasflow.agents.board_assistant.agent import BoardAssistantAgent
from canvasflow.agents.board_assistant.commands import ActionResult
from canvasflow.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)

assistant = BoardAssistantAgent()


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(min_length=1)


class ChatRequest(BaseModel):
    messages: List[ChatMessage] = Field(min_length=1)


class ChatResponse(BaseModel):
    response: str
    actions: List[ActionResult] = []
    language: str


@router.post("/", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Send the conversation to the AI assistant and apply its tool calls"""
    if not assistant.claude.is_available:
        raise HTTPException(status_code=503, detail="AI service not configured")

    try:
        result = await assistant.chat(
            db,
            current_user,
            [m.model_dump() for m in request.messages],
        )
    except APIError as e:
        logger.error(f"Claude API error: {e}")
        raise HTTPException(status_code=502, detail=f"AI service error: {str(e)}")

    return ChatResponse(**result)
