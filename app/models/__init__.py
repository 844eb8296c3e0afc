from .work_entry import WorkEntry
from .user_settings import UserSettings

__all__ = [
    "WorkEntry",
    "UserSettings",
]
