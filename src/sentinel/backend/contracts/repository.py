# sentinel/backend/contracts/repository.py
"""Storage ports consumed by the core.

Any persistence adapter (in-memory, relational, document store) must satisfy
these. Adapters report their own failures as ``StorageError``.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from sentinel.backend.core.preferences.user_preferences import UserPreferences
    from sentinel.backend.core.projects.filters import RecentProjectFilter
    from sentinel.backend.core.projects.recent_project import RecentProject
    from sentinel.backend.core.simulation.filters import RunFilter
    from sentinel.backend.core.simulation.run import SimulationRun


@runtime_checkable
class RunRepository(Protocol):
    async def insert(self, run: SimulationRun) -> None:
        """Store a new run. Raises ``ConflictError`` if the id is taken."""
        ...

    async def update(self, run: SimulationRun) -> None:
        """Replace the stored run. Raises ``NotFoundError`` if absent."""
        ...

    async def find_by_id(self, run_id: str) -> SimulationRun | None: ...

    async def exists(self, run_id: str) -> bool: ...

    async def delete(self, run_id: str) -> None:
        """Remove the run. Raises ``NotFoundError`` if absent."""
        ...

    async def all_for_search(self, run_filter: RunFilter) -> Sequence[SimulationRun]:
        """
        Candidate set for the search engine.

        Adapters may narrow the set with their own query capability as long
        as the result equals applying ``run_filter`` to the full collection.
        """
        ...


@runtime_checkable
class RecentProjectRepository(Protocol):
    async def insert(self, project: RecentProject) -> None: ...

    async def update(self, project: RecentProject) -> None: ...

    async def upsert(self, project: RecentProject) -> None: ...

    async def find_by_path(self, path: str) -> RecentProject | None: ...

    async def find_by_id(self, project_id: str) -> RecentProject | None: ...

    async def exists_by_path(self, path: str) -> bool: ...

    async def count(self, project_filter: RecentProjectFilter | None = None) -> int: ...

    async def delete(self, path: str) -> None: ...

    async def all_for_search(
        self, project_filter: RecentProjectFilter
    ) -> Sequence[RecentProject]: ...


@runtime_checkable
class UserPreferencesRepository(Protocol):
    """One preferences record per user id."""

    async def find_by_user_id(self, user_id: str) -> UserPreferences | None: ...

    async def save(self, preferences: UserPreferences) -> None:
        """Create or replace the record for ``preferences.user_id``."""
        ...

    async def delete(self, user_id: str) -> None:
        """Remove the record. Raises ``NotFoundError`` if absent."""
        ...

    async def exists(self, user_id: str) -> bool: ...
