from __future__ import annotations

import pytest

from sentinel.backend.contracts.repository import RunRepository
from sentinel.backend.core.errors import ConflictError, NotFoundError
from sentinel.backend.core.simulation.filters import RunFilter
from sentinel.backend.core.simulation.store import InMemoryRunRepository


@pytest.fixture
def repo() -> InMemoryRunRepository:
    return InMemoryRunRepository()


def test_satisfies_protocol(repo):
    assert isinstance(repo, RunRepository)


@pytest.mark.asyncio
async def test_insert_and_find(repo, make_run):
    run = make_run()
    await repo.insert(run)

    loaded = await repo.find_by_id(run.id)

    assert loaded is not None
    assert loaded.to_dict() == run.to_dict()
    assert await repo.exists(run.id)


@pytest.mark.asyncio
async def test_find_missing_returns_none(repo):
    assert await repo.find_by_id("missing") is None
    assert not await repo.exists("missing")


@pytest.mark.asyncio
async def test_duplicate_insert_conflicts(repo, make_run):
    run = make_run()
    await repo.insert(run)

    with pytest.raises(ConflictError):
        await repo.insert(run)
    assert len(repo) == 1


@pytest.mark.asyncio
async def test_update_missing_raises(repo, make_run):
    with pytest.raises(NotFoundError):
        await repo.update(make_run())


@pytest.mark.asyncio
async def test_delete(repo, make_run):
    run = make_run()
    await repo.insert(run)

    await repo.delete(run.id)

    assert not await repo.exists(run.id)
    with pytest.raises(NotFoundError):
        await repo.delete(run.id)


@pytest.mark.asyncio
async def test_changes_are_invisible_until_update(repo, make_run):
    run = make_run()
    await repo.insert(run)

    run.mark_running()
    stored = await repo.find_by_id(run.id)
    assert stored.is_pending()

    await repo.update(run)
    stored = await repo.find_by_id(run.id)
    assert stored.is_running()


@pytest.mark.asyncio
async def test_loaded_copies_are_independent(repo, make_run):
    run = make_run()
    await repo.insert(run)

    first = await repo.find_by_id(run.id)
    first.attach_report("/reports/x.pdf")

    second = await repo.find_by_id(run.id)
    assert second.has_attached_report is False


@pytest.mark.asyncio
async def test_all_for_search_keeps_insertion_order(repo, make_runs):
    runs = make_runs(4)
    for run in runs:
        await repo.insert(run)

    snapshot = await repo.all_for_search(RunFilter())

    assert [r.id for r in snapshot] == [r.id for r in runs]


def test_seed_and_clear(repo, make_runs):
    repo.seed(make_runs(3))
    assert len(repo) == 3
    repo.clear()
    assert len(repo) == 0
