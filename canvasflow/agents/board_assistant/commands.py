"""
Board Assistant commands - tagged command set and its interpreter.

Every tool call Claude emits is parsed into exactly one command model,
discriminated on ``command`` (the tool name), and executed by
``CommandInterpreter`` against the board service. Unknown tools and bad
arguments fail validation instead of being matched by hand.
"""
import math
from datetime import date
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from canvasflow.models.activity import ActivityStatus
from canvasflow.models.user import User
from canvasflow.services import board_service
from canvasflow.services.board_service import BoardError
from canvasflow.services.claude_service import ToolCall
from canvasflow.utils.logger import get_logger
from canvasflow.utils.validators import validate_language

logger = get_logger(__name__)


def _whole_days(value: Any) -> Any:
    """Natural-language durations like "2 hours" arrive as fractions; round up to a day"""
    if isinstance(value, float):
        return max(1, math.ceil(value))
    return value


class ActivityDraft(BaseModel):
    title: str = Field(min_length=1)
    project_id: Optional[int] = None
    start_date: Optional[date] = None
    duration_days: Optional[int] = Field(default=None, ge=1)
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    notes: Optional[str] = None

    @field_validator("duration_days", mode="before")
    @classmethod
    def round_duration(cls, value):
        return _whole_days(value)


class CreateProjectCommand(BaseModel):
    command: Literal["create_project"] = "create_project"
    name: str = Field(min_length=1)


class MoveActivityCommand(BaseModel):
    command: Literal["move_activity"] = "move_activity"
    activity_id: int
    new_status: ActivityStatus


class SwitchLanguageCommand(BaseModel):
    command: Literal["switch_language"] = "switch_language"
    language: str

    @field_validator("language")
    @classmethod
    def check_language(cls, value):
        return validate_language(value)


class CreateActivityCommand(ActivityDraft):
    command: Literal["create_activity"] = "create_activity"


class DeleteActivityCommand(BaseModel):
    command: Literal["delete_activity"] = "delete_activity"
    activity_id: int


class UpdateActivityCommand(BaseModel):
    command: Literal["update_activity"] = "update_activity"
    activity_id: int
    title: Optional[str] = Field(default=None, min_length=1)
    project_id: Optional[int] = None
    start_date: Optional[date] = None
    duration_days: Optional[int] = Field(default=None, ge=1)
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    notes: Optional[str] = None

    @field_validator("duration_days", mode="before")
    @classmethod
    def round_duration(cls, value):
        return _whole_days(value)

    def changes(self) -> Dict[str, Any]:
        """Only the fields Claude actually sent"""
        fields = self.model_fields_set - {"command", "activity_id"}
        return self.model_dump(include=fields)


class BatchCreateActivitiesCommand(BaseModel):
    command: Literal["batch_create_activities"] = "batch_create_activities"
    activities: List[ActivityDraft] = Field(min_length=1)


AssistantCommand = Annotated[
    Union[
        CreateProjectCommand,
        MoveActivityCommand,
        SwitchLanguageCommand,
        CreateActivityCommand,
        DeleteActivityCommand,
        UpdateActivityCommand,
        BatchCreateActivitiesCommand,
    ],
    Field(discriminator="command"),
]

_command_adapter = TypeAdapter(AssistantCommand)


def parse_tool_call(name: str, arguments: Dict[str, Any]) -> AssistantCommand:
    """
    Build the command for a tool call.

    Raises:
        pydantic.ValidationError: unknown tool name or invalid arguments
    """
    return _command_adapter.validate_python({**arguments, "command": name})


class ActionResult(BaseModel):
    command: str
    ok: bool
    detail: str
    project_id: Optional[int] = None
    activity_ids: List[int] = []
    language: Optional[str] = None


class CommandInterpreter:
    """
    Executes assistant commands for one user within one session
    """

    def __init__(self, db: AsyncSession, user: User):
        self.db = db
        self.user = user
        self._handlers = {
            CreateProjectCommand: self._create_project,
            MoveActivityCommand: self._move_activity,
            SwitchLanguageCommand: self._switch_language,
            CreateActivityCommand: self._create_activity,
            DeleteActivityCommand: self._delete_activity,
            UpdateActivityCommand: self._update_activity,
            BatchCreateActivitiesCommand: self._batch_create_activities,
        }

    async def execute(self, command: AssistantCommand) -> ActionResult:
        handler = self._handlers[type(command)]
        return await handler(command)

    async def run_tool_calls(self, tool_calls: List[ToolCall]) -> List[ActionResult]:
        """
        Execute tool calls in order. A call that fails validation or breaks a
        board rule is reported as a failed action and the rest still run.
        """
        results = []
        for call in tool_calls:
            try:
                command = parse_tool_call(call.name, call.input)
                result = await self.execute(command)
            except (BoardError, ValueError) as e:
                logger.warning(f"Assistant command {call.name} failed: {e}")
                result = ActionResult(command=call.name, ok=False, detail=str(e))
            results.append(result)
        return results

    # --- Handlers ---

    async def _create_project(self, command: CreateProjectCommand) -> ActionResult:
        project = await board_service.create_project(self.db, self.user, command.name)
        return ActionResult(
            command=command.command,
            ok=True,
            detail=f"Created project '{project.name}'",
            project_id=project.id,
        )

    async def _move_activity(self, command: MoveActivityCommand) -> ActionResult:
        activity = await board_service.get_activity(self.db, self.user, command.activity_id)
        title = activity.title
        await board_service.move_activity(self.db, self.user, command.activity_id, command.new_status)
        if command.new_status == ActivityStatus.FINISHED:
            detail = f"Finished '{title}' and removed it from the board"
        else:
            detail = f"Moved '{title}' to {command.new_status.value}"
        return ActionResult(
            command=command.command,
            ok=True,
            detail=detail,
            activity_ids=[command.activity_id],
        )

    async def _switch_language(self, command: SwitchLanguageCommand) -> ActionResult:
        await board_service.update_user_settings(self.db, self.user, {"language": command.language})
        return ActionResult(
            command=command.command,
            ok=True,
            detail=f"Switched language to {command.language}",
            language=command.language,
        )

    async def _create_activity(self, command: CreateActivityCommand) -> ActionResult:
        activity = await board_service.create_activity(
            self.db, self.user, **command.model_dump(exclude={"command"})
        )
        return ActionResult(
            command=command.command,
            ok=True,
            detail=f"Created activity '{activity.title}'",
            activity_ids=[activity.id],
        )

    async def _delete_activity(self, command: DeleteActivityCommand) -> ActionResult:
        activity = await board_service.get_activity(self.db, self.user, command.activity_id)
        title = activity.title
        await board_service.delete_activity(self.db, self.user, command.activity_id)
        return ActionResult(
            command=command.command,
            ok=True,
            detail=f"Deleted activity '{title}'",
            activity_ids=[command.activity_id],
        )

    async def _update_activity(self, command: UpdateActivityCommand) -> ActionResult:
        activity = await board_service.update_activity(
            self.db, self.user, command.activity_id, command.changes()
        )
        return ActionResult(
            command=command.command,
            ok=True,
            detail=f"Updated activity '{activity.title}'",
            activity_ids=[activity.id],
        )

    async def _batch_create_activities(self, command: BatchCreateActivitiesCommand) -> ActionResult:
        # Check every project first so a bad reference creates nothing
        for project_id in {d.project_id for d in command.activities if d.project_id is not None}:
            await board_service.get_project(self.db, self.user, project_id)

        created = []
        for draft in command.activities:
            try:
                activity = await board_service.create_activity(self.db, self.user, **draft.model_dump())
            except BoardError as e:
                if not created:
                    raise
                logger.warning(f"Batch create stopped after {len(created)} activities: {e}")
                return ActionResult(
                    command=command.command,
                    ok=False,
                    detail=f"Created {len(created)} of {len(command.activities)} activities, "
                           f"then stopped at '{draft.title}': {e}",
                    activity_ids=created,
                )
            created.append(activity.id)
        return ActionResult(
            command=command.command,
            ok=True,
            detail=f"Created {len(created)} activities",
            activity_ids=created,
        )
