"""
Prompts and tool definitions for the Board Assistant
"""

SYSTEM_PROMPT = """You are the AI assistant for CanvasFlow Pro, a project and activity board.
You have full read/write access to the user's projects and activities.

Current context:
- Language: {language} (respond in {language_name})
- Today's date: {today}
- Projects: {projects}
- Activities: {activities}

The board has three columns: todo, doing and finished. Moving an activity to
finished removes it from the board. Only doing activities appear on the timeline.
An activity's "alarm" is "critical" when it is in doing past its planned end,
and "ghost" when it is still in todo after its start date.

When the user mentions a project or activity by name, match it to an id from the
context above. Dates are YYYY-MM-DD relative to today. Durations are whole days.
When the user pastes several tasks at once, use batch_create_activities.
If a request is ambiguous, ask before changing anything.

Always respond in {language_name}. Be helpful and concise."""


ACTIVITY_PROPERTIES = {
    "title": {"type": "string", "description": "Activity title"},
    "project_id": {"type": "integer", "description": "Project ID to assign to (optional)"},
    "start_date": {"type": "string", "description": "Start date in YYYY-MM-DD format (optional, defaults to today)"},
    "duration_days": {"type": "number", "description": "Duration in days (optional)"},
    "progress": {"type": "integer", "description": "Execution percentage 0-100 (optional)"},
    "notes": {"type": "string", "description": "Notes content in HTML (optional)"},
}


TOOLS = [
    {
        "name": "create_project",
        "description": "Create a new project with an auto-assigned color",
        "input_schema": {
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "The name of the project"},
            },
            "required": ["name"],
        },
    },
    {
        "name": "move_activity",
        "description": "Move an activity to a different status (todo, doing, or finished)",
        "input_schema": {
            "type": "object",
            "properties": {
                "activity_id": {"type": "integer", "description": "The ID of the activity"},
                "new_status": {"type": "string", "enum": ["todo", "doing", "finished"]},
            },
            "required": ["activity_id", "new_status"],
        },
    },
    {
        "name": "switch_language",
        "description": "Switch the UI language",
        "input_schema": {
            "type": "object",
            "properties": {
                "language": {"type": "string", "enum": ["en", "es", "de", "fr", "it"]},
            },
            "required": ["language"],
        },
    },
    {
        "name": "create_activity",
        "description": "Create a single activity. Use batch_create_activities for multiple tasks.",
        "input_schema": {
            "type": "object",
            "properties": ACTIVITY_PROPERTIES,
            "required": ["title"],
        },
    },
    {
        "name": "delete_activity",
        "description": "Delete an activity by ID",
        "input_schema": {
            "type": "object",
            "properties": {
                "activity_id": {"type": "integer", "description": "The ID of the activity to delete"},
            },
            "required": ["activity_id"],
        },
    },
    {
        "name": "update_activity",
        "description": (
            "Update fields of an existing activity: title, project_id, start_date, "
            "duration_days, progress, notes. Only include fields you want to change; "
            "pass project_id null to make the activity private."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "activity_id": {"type": "integer", "description": "The ID of the activity to update"},
                **ACTIVITY_PROPERTIES,
                "project_id": {"type": ["integer", "null"], "description": "New project ID, or null to unassign"},
            },
            "required": ["activity_id"],
        },
    },
    {
        "name": "batch_create_activities",
        "description": "Create multiple activities at once from a block of text",
        "input_schema": {
            "type": "object",
            "properties": {
                "activities": {
                    "type": "array",
                    "description": "Activities to create",
                    "items": {
                        "type": "object",
                        "properties": ACTIVITY_PROPERTIES,
                        "required": ["title"],
                    },
                },
            },
            "required": ["activities"],
        },
    },
]
