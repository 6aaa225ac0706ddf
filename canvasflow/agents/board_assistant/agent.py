"""
Board Assistant Agent - chat that reads and edits the board through tool calls
"""
from canvasflow.agents.base_agent import BaseAgent
from canvasflow.agents.board_assistant.prompts import SYSTEM_PROMPT, TOOLS
from canvasflow.agents.board_assistant.commands import CommandInterpreter
from canvasflow.models.user import User
from canvasflow.services import board_service
from canvasflow.services.alarm_engine import compute_alarm
from canvasflow.utils.i18n import LANGUAGE_NAMES
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any, List
from datetime import date
import json


class BoardAssistantAgent(BaseAgent):
    """
    Turns chat messages into board changes
    """

    def __init__(self):
        super().__init__(name="BoardAssistantAgent")

    async def build_system_prompt(
        self,
        db: AsyncSession,
        user: User,
        language: str,
        today: date
    ) -> str:
        """Describe the user's current board to Claude"""
        projects = await board_service.list_projects(db, user)
        activities = await board_service.list_activities(db, user)

        project_rows = [{"id": p.id, "name": p.name, "color": p.color} for p in projects]
        activity_rows = [
            {
                "id": a.id,
                "title": a.title,
                "status": a.status.value,
                "project_id": a.project_id,
                "start_date": a.start_date.date().isoformat(),
                "duration_days": a.duration_days,
                "progress": a.progress,
                "notes": a.notes,
                "alarm": compute_alarm(a, today).state.value,
            }
            for a in activities
        ]

        return SYSTEM_PROMPT.format(
            language=language,
            language_name=LANGUAGE_NAMES.get(language, "English"),
            today=today.isoformat(),
            projects=json.dumps(project_rows, ensure_ascii=False),
            activities=json.dumps(activity_rows, ensure_ascii=False),
        )

    async def chat(
        self,
        db: AsyncSession,
        user: User,
        messages: List[Dict[str, Any]],
        today: date = None
    ) -> Dict[str, Any]:
        """
        Run one assistant turn and apply any tool calls it makes
        """
        today = today or date.today()
        user_settings = await board_service.get_user_settings(db, user)
        language = user_settings.language

        system_prompt = await self.build_system_prompt(db, user, language, today)
        response = await self.generate_with_tools(messages, TOOLS, system_prompt)

        interpreter = CommandInterpreter(db, user)
        actions = await interpreter.run_tool_calls(response.tool_calls)

        for action in actions:
            if action.ok and action.language:
                language = action.language

        reply = response.text
        if not reply and actions:
            reply = "\n".join(action.detail for action in actions)

        return {"response": reply, "actions": actions, "language": language}

    async def process(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """Implementation of BaseAgent.process"""
        return await self.chat(
            context["db"],
            context["user"],
            context["messages"],
            context.get("today"),
        )
