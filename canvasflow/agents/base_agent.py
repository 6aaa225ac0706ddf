"""
Base class for all AI agents
"""
from abc import ABC, abstractmethod
from canvasflow.services.claude_service import claude_service, ToolResponse
from typing import Dict, Any, List, Optional


class BaseAgent(ABC):
    """
    Base class for AI agents working on the board
    """

    def __init__(self, name: str):
        self.name = name
        self.claude = claude_service

    @abstractmethod
    async def process(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """
        Process the given context and return results
        """
        pass

    async def generate_with_tools(
        self,
        messages: List[Dict[str, Any]],
        tools: List[Dict[str, Any]],
        system_prompt: Optional[str] = None
    ) -> ToolResponse:
        """Wrapper for Claude tool-use turns"""
        return await self.claude.generate_with_tools(messages, tools, system_prompt)
