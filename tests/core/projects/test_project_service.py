"""Tests for RecentProjectService and its in-memory repository."""
from __future__ import annotations

import dataclasses
from datetime import timedelta

import pytest

from sentinel.backend.contracts.repository import RecentProjectRepository
from sentinel.backend.core.errors import ConflictError, NotFoundError, ValidationError
from sentinel.backend.core.projects.filters import RecentProjectFilter
from sentinel.backend.core.projects.service import RecentProjectService
from sentinel.backend.core.projects.store import InMemoryRecentProjectRepository


@pytest.fixture
def repo() -> InMemoryRecentProjectRepository:
    return InMemoryRecentProjectRepository()


@pytest.fixture
def service(repo) -> RecentProjectService:
    return RecentProjectService(repo)


def _aged(project, hours: int):
    return dataclasses.replace(
        project, last_opened_at=project.last_opened_at - timedelta(hours=hours)
    )


class TestRepository:
    def test_satisfies_protocol(self, repo):
        assert isinstance(repo, RecentProjectRepository)

    @pytest.mark.asyncio
    async def test_insert_conflict_on_same_path(self, repo, make_project):
        await repo.insert(make_project())
        with pytest.raises(ConflictError):
            await repo.insert(make_project())

    @pytest.mark.asyncio
    async def test_update_missing(self, repo, make_project):
        with pytest.raises(NotFoundError):
            await repo.update(make_project())

    @pytest.mark.asyncio
    async def test_lookup_by_id_and_path(self, repo, make_project):
        project = make_project()
        await repo.insert(project)

        assert await repo.find_by_path(project.path) == project
        assert await repo.find_by_id(project.id) == project
        assert await repo.find_by_id("other") is None

    @pytest.mark.asyncio
    async def test_count_with_filter(self, repo, make_project):
        repo.seed(
            [
                make_project(path="/a", name="Desert Storm", game_version="1.0"),
                make_project(path="/b", name="Arctic", game_version="1.0"),
                make_project(path="/c", name="Storm Front", game_version="2.0"),
            ]
        )

        assert await repo.count() == 3
        assert await repo.count(RecentProjectFilter(name="storm")) == 2
        assert await repo.count(RecentProjectFilter(game_version="1.0")) == 2


class TestOpenProject:
    @pytest.mark.asyncio
    async def test_new_path_creates_entry(self, service, repo):
        project = await service.open_project(path="/p/one", name="One", unit_count=5)

        assert await repo.exists_by_path("/p/one")
        assert project.unit_count == 5

    @pytest.mark.asyncio
    async def test_known_path_is_reopened(self, service, repo):
        first = await service.open_project(path="/p/one", name="One", game_version="1.0")

        second = await service.open_project(path="/p/one", name="One renamed")

        assert second.id == first.id
        assert second.name == "One renamed"
        assert second.game_version == "1.0"
        assert second.last_opened_at >= first.last_opened_at
        assert await repo.count() == 1

    @pytest.mark.asyncio
    async def test_invalid_input(self, service, repo):
        with pytest.raises(ValidationError):
            await service.open_project(path="", name="x")
        assert await repo.count() == 0


class TestListProjects:
    @pytest.mark.asyncio
    async def test_most_recent_first(self, service, repo, make_project):
        repo.seed(
            [
                _aged(make_project(path="/old", name="Old"), 48),
                make_project(path="/new", name="New"),
                _aged(make_project(path="/mid", name="Mid"), 5),
            ]
        )

        page = await service.list_projects()

        assert [p.name for p in page.items] == ["New", "Mid", "Old"]
        assert page.per_page == 10

    @pytest.mark.asyncio
    async def test_filters(self, service, repo, make_project):
        repo.seed(
            [
                make_project(path="/a", name="Desert Storm", game_version="1.0"),
                make_project(path="/b", name="storm front", game_version="2.0"),
                make_project(path="/c", name="Arctic", game_version="2.0"),
            ]
        )

        page = await service.list_projects(name_filter="STORM", game_version="2.0")

        assert [p.path for p in page.items] == ["/b"]
        assert page.total == 1

    @pytest.mark.asyncio
    async def test_paging(self, service, repo, make_project):
        repo.seed([_aged(make_project(path=f"/p{i}", name=f"P{i}"), i) for i in range(12)])

        page = await service.list_projects(page=2, per_page=5)

        assert [p.path for p in page.items] == ["/p5", "/p6", "/p7", "/p8", "/p9"]
        assert page.last_page == 3

    @pytest.mark.asyncio
    async def test_invalid_page(self, service):
        with pytest.raises(ValidationError):
            await service.list_projects(page=0)


class TestRemoveProject:
    @pytest.mark.asyncio
    async def test_remove(self, service, repo):
        await service.open_project(path="/p/one", name="One")
        await service.remove_project("/p/one")
        assert not await repo.exists_by_path("/p/one")

    @pytest.mark.asyncio
    async def test_remove_missing(self, service):
        with pytest.raises(NotFoundError, match="RecentProject with id /nowhere not found"):
            await service.remove_project("/nowhere")
