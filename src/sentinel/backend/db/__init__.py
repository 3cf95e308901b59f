"""SQLAlchemy persistence for runs, recent projects and user preferences."""
from .models import RecentProjectRow, SimulationRunRow, UserPreferencesRow
from .repositories import (
    SqlRecentProjectRepository,
    SqlRunRepository,
    SqlUserPreferencesRepository,
)

__all__ = [
    "SimulationRunRow",
    "RecentProjectRow",
    "UserPreferencesRow",
    "SqlRunRepository",
    "SqlRecentProjectRepository",
    "SqlUserPreferencesRepository",
]
