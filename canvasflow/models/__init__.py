from canvasflow.models.user import User
from canvasflow.models.project import Project
from canvasflow.models.activity import Activity, ActivityStatus
from canvasflow.models.user_settings import UserSettings

__all__ = [
    "User",
    "Project",
    "Activity",
    "ActivityStatus",
    "UserSettings",
]
