from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from borshook.domain.model import LinkUserProject
from borshook.domain.webhooks import Reconciler
from tests.helpers.domain import remote_repo, remote_user, seed_project

if TYPE_CHECKING:
    from collections.abc import Callable

    from tests.helpers.fakes import FakeProvider, FakeStore, FakeUnitOfWork, RecordingScheduler


def _reconciler(
    uow_factory: Callable[[], FakeUnitOfWork],
    provider: FakeProvider,
    scheduler: RecordingScheduler,
    *,
    allow_private_repos: bool = False,
) -> Reconciler:
    return Reconciler(
        unit_of_work_factory=uow_factory,
        provider=provider,
        scheduler=scheduler,
        allow_private_repos=allow_private_repos,
    )


def test_reconcile_installation_creates_installation_project_and_link(
    store: FakeStore,
    uow_factory: Callable[[], FakeUnitOfWork],
    provider: FakeProvider,
    scheduler: RecordingScheduler,
) -> None:
    provider.repos = [remote_repo(14, "org/repo")]
    reconciler = _reconciler(uow_factory, provider, scheduler)

    result = reconciler.reconcile_installation(91, remote_user())

    assert [i.installation_xref for i in store.installations] == [91]
    assert [(p.repo_xref, p.name) for p in store.projects] == [(14, "org/repo")]
    assert store.projects[0].installation is store.installations[0]
    assert [u.login for u in store.users] == ["octocat"]
    assert len(store.links) == 1
    assert result.created_project_ids == [store.projects[0].id]
    assert scheduler.requested == [store.projects[0].id]
    assert store.commits == 1


def test_reconcile_installation_twice_is_idempotent(
    store: FakeStore,
    uow_factory: Callable[[], FakeUnitOfWork],
    provider: FakeProvider,
    scheduler: RecordingScheduler,
) -> None:
    provider.repos = [remote_repo(14, "org/repo"), remote_repo(15, "org/other")]
    reconciler = _reconciler(uow_factory, provider, scheduler)

    reconciler.reconcile_installation(91, remote_user())
    second = reconciler.reconcile_installation(91, remote_user())

    assert len(store.installations) == 1
    assert sorted(p.repo_xref for p in store.projects) == [14, 15]
    assert len(store.links) == 2
    assert len(store.users) == 1
    assert not second.changed
    assert len(scheduler.requested) == 2


def test_private_repositories_are_skipped_unless_allowed(
    store: FakeStore,
    uow_factory: Callable[[], FakeUnitOfWork],
    provider: FakeProvider,
    scheduler: RecordingScheduler,
) -> None:
    provider.repos = [remote_repo(20, "org/secret", private=True)]

    result = _reconciler(uow_factory, provider, scheduler).reconcile_installation(
        91, remote_user()
    )

    assert store.projects == []
    assert result.skipped_private == 1
    assert scheduler.requested == []

    _reconciler(uow_factory, provider, scheduler, allow_private_repos=True).reconcile_installation(
        91, remote_user()
    )

    assert [p.repo_xref for p in store.projects] == [20]
    assert len(scheduler.requested) == 1


def test_existing_link_is_not_duplicated_for_new_project(
    store: FakeStore,
    uow_factory: Callable[[], FakeUnitOfWork],
    provider: FakeProvider,
    scheduler: RecordingScheduler,
) -> None:
    provider.repos = [remote_repo(14)]
    reconciler = _reconciler(uow_factory, provider, scheduler)
    reconciler.reconcile_installation(91, remote_user())

    # a different sender only gets linked to projects they onboard
    reconciler.reconcile_installation(91, remote_user(99, "someone-else"))

    assert len(store.links) == 1
    assert all(isinstance(link, LinkUserProject) for link in store.links)
    assert {u.login for u in store.users} == {"octocat", "someone-else"}


def test_reconcile_repositories_creates_installation_lazily(
    store: FakeStore,
    uow_factory: Callable[[], FakeUnitOfWork],
    provider: FakeProvider,
    scheduler: RecordingScheduler,
) -> None:
    provider.repos = [remote_repo(14)]

    _reconciler(uow_factory, provider, scheduler).reconcile_repositories(
        91, remote_user(), added=[remote_repo(14)]
    )

    assert [i.installation_xref for i in store.installations] == [91]
    assert [p.repo_xref for p in store.projects] == [14]
    assert provider.repo_calls == [91]


def test_reconcile_repositories_removes_projects(
    store: FakeStore,
    uow_factory: Callable[[], FakeUnitOfWork],
    provider: FakeProvider,
    scheduler: RecordingScheduler,
) -> None:
    seed_project(store, repo_xref=14)
    seed_project(store, installation_xref=92, repo_xref=15, name="org/other")
    provider.repos = []

    result = _reconciler(uow_factory, provider, scheduler).reconcile_repositories(
        91, remote_user(), removed=[remote_repo(14), remote_repo(404, "org/gone")]
    )

    assert [p.repo_xref for p in store.projects] == [15]
    assert [(u.user_xref, u.login) for u in store.users] == [(55, "admin")]
    assert result.removed_repo_xrefs == [14]
    assert scheduler.requested == []


def test_provider_listing_is_authoritative_over_added_list(
    store: FakeStore,
    uow_factory: Callable[[], FakeUnitOfWork],
    provider: FakeProvider,
    scheduler: RecordingScheduler,
) -> None:
    provider.repos = [remote_repo(14), remote_repo(16, "org/third")]

    _reconciler(uow_factory, provider, scheduler).reconcile_repositories(
        91, remote_user(), added=[remote_repo(16, "org/third")]
    )

    assert sorted(p.repo_xref for p in store.projects) == [14, 16]


def test_delete_installation_removes_projects(
    store: FakeStore,
    uow_factory: Callable[[], FakeUnitOfWork],
    provider: FakeProvider,
    scheduler: RecordingScheduler,
) -> None:
    seed_project(store, installation_xref=91, repo_xref=14)
    seed_project(store, installation_xref=92, repo_xref=15)

    deleted = _reconciler(uow_factory, provider, scheduler).delete_installation(
        91, remote_user(55, "admin")
    )

    assert deleted == 1
    assert [i.installation_xref for i in store.installations] == [92]
    assert [p.repo_xref for p in store.projects] == [15]


def test_delete_unknown_installation_is_a_no_op(
    store: FakeStore,
    uow_factory: Callable[[], FakeUnitOfWork],
    provider: FakeProvider,
    scheduler: RecordingScheduler,
) -> None:
    reconciler = _reconciler(uow_factory, provider, scheduler)

    assert reconciler.delete_installation(1234, remote_user()) == 0
    assert store.installations == []


def test_failed_provider_call_rolls_back_and_schedules_nothing(
    store: FakeStore,
    uow_factory: Callable[[], FakeUnitOfWork],
    scheduler: RecordingScheduler,
) -> None:
    class BrokenProvider:
        def get_installation_repos(self, installation_xref: int) -> list[object]:
            raise RuntimeError(f"boom {installation_xref}")

    reconciler = Reconciler(
        unit_of_work_factory=uow_factory,
        provider=BrokenProvider(),  # type: ignore[arg-type]
        scheduler=scheduler,
    )

    with pytest.raises(RuntimeError, match="boom 91"):
        reconciler.reconcile_installation(91, remote_user())

    assert store.rollbacks == 1
    assert store.commits == 0
    assert scheduler.requested == []
