"""
Claude API service wrapper
"""
from anthropic import AsyncAnthropic
from canvasflow.config import get_settings
from typing import Optional, Dict, Any, List
from pydantic import BaseModel

settings = get_settings()


class ToolCall(BaseModel):
    id: str
    name: str
    input: Dict[str, Any] = {}


class ToolResponse(BaseModel):
    text: str = ""
    tool_calls: List[ToolCall] = []
    stop_reason: Optional[str] = None


class ClaudeService:
    def __init__(self):
        api_key = settings.ANTHROPIC_API_KEY or None
        self.model = settings.CLAUDE_MODEL
        self.max_tokens = settings.CLAUDE_MAX_TOKENS
        self._available = bool(api_key)
        if self._available:
            self.client = AsyncAnthropic(api_key=api_key)
        else:
            self.client = None

    @property
    def is_available(self) -> bool:
        return self._available

    async def generate_with_tools(
        self,
        messages: List[Dict[str, Any]],
        tools: List[Dict[str, Any]],
        system_prompt: Optional[str] = None,
        max_tokens: Optional[int] = None
    ) -> ToolResponse:
        """
        Run one conversation turn with tool use enabled.

        Text blocks are joined into ``text``; tool_use blocks become
        ``tool_calls`` in the order Claude emitted them.
        """
        if not self._available or self.client is None:
            raise RuntimeError("AI service not configured: ANTHROPIC_API_KEY is not set")

        response = await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens or self.max_tokens,
            system=system_prompt if system_prompt else "",
            messages=messages,
            tools=tools,
            tool_choice={"type": "auto"},
        )

        text_parts = []
        tool_calls = []
        for block in response.content:
            if block.type == "text":
                text_parts.append(block.text)
            elif block.type == "tool_use":
                tool_calls.append(ToolCall(id=block.id, name=block.name, input=dict(block.input or {})))

        return ToolResponse(
            text="\n".join(text_parts).strip(),
            tool_calls=tool_calls,
            stop_reason=response.stop_reason,
        )


# Singleton instance
claude_service = ClaudeService()
