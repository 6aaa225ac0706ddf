"""
Board assistant tests - command parsing, interpreter, and agent turns
with mocked Claude responses.
"""
import pytest
from datetime import date
from unittest.mock import AsyncMock, patch
from pydantic import ValidationError

from canvasflow.agents.board_assistant.agent import BoardAssistantAgent
from canvasflow.agents.board_assistant.commands import (
    BatchCreateActivitiesCommand,
    CommandInterpreter,
    CreateActivityCommand,
    MoveActivityCommand,
    UpdateActivityCommand,
    parse_tool_call,
)
from canvasflow.agents.board_assistant.prompts import TOOLS
from canvasflow.api import chat as chat_api
from canvasflow.models.activity import ActivityStatus
from canvasflow.services import board_service
from canvasflow.services.claude_service import ToolCall, ToolResponse


def tool_call(tool_name, **arguments):
    return ToolCall(id=f"toolu_{tool_name}", name=tool_name, input=arguments)


# ===================== PARSING =====================


class TestParsing:

    def test_every_tool_has_a_command(self):
        samples = {
            "create_project": {"name": "X"},
            "move_activity": {"activity_id": 1, "new_status": "doing"},
            "switch_language": {"language": "es"},
            "create_activity": {"title": "X"},
            "delete_activity": {"activity_id": 1},
            "update_activity": {"activity_id": 1},
            "batch_create_activities": {"activities": [{"title": "X"}]},
        }
        assert {t["name"] for t in TOOLS} == set(samples)
        for name, arguments in samples.items():
            assert parse_tool_call(name, arguments).command == name

    def test_move_parses_status(self):
        command = parse_tool_call("move_activity", {"activity_id": "7", "new_status": "finished"})
        assert isinstance(command, MoveActivityCommand)
        assert command.activity_id == 7
        assert command.new_status == ActivityStatus.FINISHED

    def test_unknown_tool_is_rejected(self):
        with pytest.raises(ValidationError):
            parse_tool_call("drop_database", {})

    def test_bad_status_is_rejected(self):
        with pytest.raises(ValidationError):
            parse_tool_call("move_activity", {"activity_id": 1, "new_status": "archived"})

    def test_fractional_duration_rounds_up(self):
        command = parse_tool_call("create_activity", {"title": "Quick call", "duration_days": 0.08})
        assert isinstance(command, CreateActivityCommand)
        assert command.duration_days == 1

        command = parse_tool_call("create_activity", {"title": "Sprint", "duration_days": 2.5})
        assert command.duration_days == 3

    def test_update_keeps_only_sent_fields(self):
        command = parse_tool_call("update_activity", {"activity_id": 3, "progress": 80, "project_id": None})
        assert isinstance(command, UpdateActivityCommand)
        assert command.changes() == {"progress": 80, "project_id": None}

    def test_batch_parses_dates(self):
        command = parse_tool_call("batch_create_activities", {"activities": [
            {"title": "One", "start_date": "2024-02-01"},
            {"title": "Two", "progress": 10},
        ]})
        assert isinstance(command, BatchCreateActivitiesCommand)
        assert command.activities[0].start_date == date(2024, 2, 1)

    def test_unsupported_language_is_rejected(self):
        with pytest.raises(ValidationError):
            parse_tool_call("switch_language", {"language": "pt"})


# ===================== INTERPRETER =====================


class TestInterpreter:

    @pytest.mark.asyncio
    async def test_create_and_move(self, db_session, seed_data):
        user = seed_data["user"]
        interpreter = CommandInterpreter(db_session, user)

        results = await interpreter.run_tool_calls([
            tool_call("create_project", name="Garden"),
            tool_call("create_activity", title="Plant trees", start_date="2024-03-01", duration_days=2),
        ])
        assert all(r.ok for r in results)

        activity_id = results[1].activity_ids[0]
        activity = await board_service.get_activity(db_session, user, activity_id)
        assert activity.status == ActivityStatus.TODO
        assert activity.start_date.date() == date(2024, 3, 1)

        results = await interpreter.run_tool_calls([
            tool_call("move_activity", activity_id=activity_id, new_status="doing"),
        ])
        assert results[0].ok
        assert "doing" in results[0].detail

    @pytest.mark.asyncio
    async def test_finish_removes_activity(self, db_session, seed_data):
        user = seed_data["user"]
        activity = await board_service.create_activity(db_session, user, "Close books")
        interpreter = CommandInterpreter(db_session, user)

        results = await interpreter.run_tool_calls([
            tool_call("move_activity", activity_id=activity.id, new_status="finished"),
        ])
        assert results[0].ok
        assert await board_service.list_activities(db_session, user) == []

    @pytest.mark.asyncio
    async def test_failures_do_not_stop_later_calls(self, db_session, seed_data):
        user = seed_data["user"]
        interpreter = CommandInterpreter(db_session, user)

        results = await interpreter.run_tool_calls([
            tool_call("delete_activity", activity_id=999),
            tool_call("move_activity", activity_id=1, new_status="archived"),
            tool_call("batch_create_activities", activities=[{"title": "A"}, {"title": "B"}]),
        ])
        assert [r.ok for r in results] == [False, False, True]
        assert "not found" in results[0].detail
        assert len(results[2].activity_ids) == 2

        titles = [a.title for a in await board_service.list_activities(db_session, user)]
        assert titles == ["A", "B"]

    @pytest.mark.asyncio
    async def test_batch_with_unknown_project_creates_nothing(self, db_session, seed_data):
        user = seed_data["user"]
        interpreter = CommandInterpreter(db_session, user)

        results = await interpreter.run_tool_calls([
            tool_call("batch_create_activities", activities=[
                {"title": "first"},
                {"title": "second", "project_id": 999},
                {"title": "third"},
            ]),
        ])
        assert results[0].ok is False
        assert results[0].activity_ids == []
        assert "not found" in results[0].detail
        assert await board_service.list_activities(db_session, user) == []

    @pytest.mark.asyncio
    async def test_batch_reports_partial_creation(self, db_session, seed_data):
        user = seed_data["user"]
        interpreter = CommandInterpreter(db_session, user)

        results = await interpreter.run_tool_calls([
            tool_call("batch_create_activities", activities=[
                {"title": "first"},
                {"title": "   "},
                {"title": "third"},
            ]),
        ])
        rows = await board_service.list_activities(db_session, user)
        assert [a.title for a in rows] == ["first"]
        assert results[0].ok is False
        assert results[0].activity_ids == [rows[0].id]
        assert "Created 1 of 3" in results[0].detail

    @pytest.mark.asyncio
    async def test_update_and_switch_language(self, db_session, seed_data):
        user = seed_data["user"]
        activity = await board_service.create_activity(db_session, user, "Old title", duration_days=4)
        interpreter = CommandInterpreter(db_session, user)

        results = await interpreter.run_tool_calls([
            tool_call("update_activity", activity_id=activity.id, title="New title", progress=60),
            tool_call("switch_language", language="it"),
        ])
        assert all(r.ok for r in results)
        assert results[1].language == "it"

        updated = await board_service.get_activity(db_session, user, activity.id)
        assert updated.title == "New title"
        assert updated.progress == 60
        assert updated.duration_days == 4

        user_settings = await board_service.get_user_settings(db_session, user)
        assert user_settings.language == "it"


# ===================== AGENT =====================


class TestAgent:

    @pytest.mark.asyncio
    async def test_system_prompt_lists_board(self, db_session, seed_data):
        user = seed_data["user"]
        project = await board_service.create_project(db_session, user, "Website", "#17A2B8")
        await board_service.create_activity(
            db_session, user, "Fix footer", project_id=project.id, start_date=date(2024, 1, 1)
        )

        agent = BoardAssistantAgent()
        prompt = await agent.build_system_prompt(db_session, user, "es", date(2024, 1, 5))

        assert "Spanish" in prompt
        assert "2024-01-05" in prompt
        assert "Fix footer" in prompt
        assert '"alarm": "ghost"' in prompt
        assert "#17A2B8" in prompt

    @pytest.mark.asyncio
    async def test_chat_applies_tool_calls(self, db_session, seed_data):
        user = seed_data["user"]
        agent = BoardAssistantAgent()

        mock_response = ToolResponse(
            text="",
            tool_calls=[
                tool_call("create_activity", title="Order supplies"),
                tool_call("switch_language", language="fr"),
            ],
            stop_reason="tool_use",
        )

        with patch.object(agent, "generate_with_tools", new_callable=AsyncMock) as mock:
            mock.return_value = mock_response
            result = await agent.chat(db_session, user, [{"role": "user", "content": "add it"}])

        assert mock.call_count == 1
        assert result["language"] == "fr"
        assert "Created activity 'Order supplies'" in result["response"]
        assert [a.command for a in result["actions"]] == ["create_activity", "switch_language"]


# ===================== CHAT ENDPOINT =====================


async def test_chat_without_api_key(client, monkeypatch):
    monkeypatch.setattr(chat_api.assistant.claude, "_available", False)

    r = await client.post("/api/chat/", json={"messages": [{"role": "user", "content": "hi"}]})
    assert r.status_code == 503


async def test_chat_endpoint(client, monkeypatch):
    monkeypatch.setattr(chat_api.assistant.claude, "_available", True)
    mock = AsyncMock(return_value=ToolResponse(
        text="Created your project.",
        tool_calls=[tool_call("create_project", name="Holiday")],
    ))
    monkeypatch.setattr(chat_api.assistant, "generate_with_tools", mock)

    r = await client.post("/api/chat/", json={"messages": [{"role": "user", "content": "new project Holiday"}]})
    assert r.status_code == 200
    data = r.json()
    assert data["response"] == "Created your project."
    assert data["actions"][0]["ok"] is True
    assert data["language"] == "en"

    r = await client.get("/api/projects/")
    assert [p["name"] for p in r.json()] == ["Holiday"]
