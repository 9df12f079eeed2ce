"""SQLAlchemy ORM models.

All models are imported here so that Alembic can discover them
via ``Base.metadata`` when generating migrations.
"""

from screentime.models.child import Child  # noqa: F401
from screentime.models.screen_time import ScreenTimeSettingsRecord  # noqa: F401
from screentime.models.usage import DailyUsage  # noqa: F401

__all__ = [
    "Child",
    "DailyUsage",
    "ScreenTimeSettingsRecord",
]
