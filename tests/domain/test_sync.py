from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from borshook.domain.model import PrState
from borshook.domain.sync import ProjectSynchronizer, sync_patch, sync_user
from tests.helpers.domain import pr_snapshot, remote_user, seed_patch, seed_project

if TYPE_CHECKING:
    from collections.abc import Callable

    from tests.helpers.fakes import FakeProvider, FakeStore, FakeUnitOfWork


def test_sync_user_inserts_then_refreshes(
    store: FakeStore, uow_factory: Callable[[], FakeUnitOfWork]
) -> None:
    with uow_factory() as uow:
        first = sync_user(uow, remote_user(7, "octocat"))
        second = sync_user(uow, remote_user(7, "octocat-renamed"))

    assert first is second
    assert [u.login for u in store.users] == ["octocat-renamed"]


def test_sync_patch_keeps_fields_unless_refreshing(
    store: FakeStore, uow_factory: Callable[[], FakeUnitOfWork]
) -> None:
    project = seed_project(store)
    patch = seed_patch(store, project, pr_snapshot(1, title="Original"))

    with uow_factory() as uow:
        same = sync_patch(uow, project, pr_snapshot(1, title="Changed"))
        assert same is patch
        assert patch.title == "Original"

        closed = pr_snapshot(1, title="Changed", state=PrState.CLOSED)
        sync_patch(uow, project, closed, refresh=True)

    assert patch.title == "Changed"
    assert patch.open is False
    assert len(store.patches) == 1


def test_sync_patch_upserts_author(
    store: FakeStore, uow_factory: Callable[[], FakeUnitOfWork]
) -> None:
    project = seed_project(store)

    with uow_factory() as uow:
        patch = sync_patch(uow, project, pr_snapshot(2, user=remote_user(55, "new-author")))

    assert patch.author is not None
    assert patch.author.login == "new-author"
    assert [u.user_xref for u in store.users] == [55]


def test_project_synchronizer_reconciles_open_pulls(
    store: FakeStore,
    uow_factory: Callable[[], FakeUnitOfWork],
    provider: FakeProvider,
) -> None:
    project = seed_project(store)
    stale = seed_patch(store, project, pr_snapshot(1))
    provider.pulls = [pr_snapshot(2, title="Second"), pr_snapshot(3, title="Third")]

    result = ProjectSynchronizer(unit_of_work_factory=uow_factory, provider=provider)(project.id)

    assert result is not None
    assert (result.synced, result.closed) == (2, 1)
    assert stale.open is False
    assert sorted(p.pr_xref for p in store.patches if p.open) == [2, 3]
    assert provider.pull_calls == [project.installation_connection()]


def test_project_synchronizer_is_idempotent(
    store: FakeStore,
    uow_factory: Callable[[], FakeUnitOfWork],
    provider: FakeProvider,
) -> None:
    project = seed_project(store)
    provider.pulls = [pr_snapshot(2), pr_snapshot(3)]
    synchronizer = ProjectSynchronizer(unit_of_work_factory=uow_factory, provider=provider)

    synchronizer(project.id)
    snapshot = [(p.pr_xref, p.title, p.commit, p.open) for p in store.patches]
    second = synchronizer(project.id)

    assert [(p.pr_xref, p.title, p.commit, p.open) for p in store.patches] == snapshot
    assert second is not None
    assert second.closed == 0
    assert len(store.patches) == 2


def test_project_synchronizer_skips_deleted_project(
    store: FakeStore,
    uow_factory: Callable[[], FakeUnitOfWork],
    provider: FakeProvider,
) -> None:
    project = seed_project(store)
    store.projects.clear()

    synchronizer = ProjectSynchronizer(unit_of_work_factory=uow_factory, provider=provider)

    assert synchronizer(project.id) is None
    assert provider.pull_calls == []


def test_project_synchronizer_propagates_provider_failure(
    store: FakeStore, uow_factory: Callable[[], FakeUnitOfWork]
) -> None:
    project = seed_project(store)

    class BrokenProvider:
        def get_open_pulls(self, connection: object) -> list[object]:
            raise ConnectionError(str(connection))

    synchronizer = ProjectSynchronizer(
        unit_of_work_factory=uow_factory,
        provider=BrokenProvider(),  # type: ignore[arg-type]
    )

    with pytest.raises(ConnectionError):
        synchronizer(project.id)
    assert store.rollbacks == 1
