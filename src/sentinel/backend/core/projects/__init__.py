from sentinel.backend.core.projects.filters import RecentProjectFilter, project_sort_key
from sentinel.backend.core.projects.recent_project import RecentProject
from sentinel.backend.core.projects.service import RecentProjectService
from sentinel.backend.core.projects.store import InMemoryRecentProjectRepository

__all__ = [
    "RecentProject",
    "RecentProjectFilter",
    "project_sort_key",
    "InMemoryRecentProjectRepository",
    "RecentProjectService",
]
