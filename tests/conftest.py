from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.pool import StaticPool

from borshook.adapters.sqlalchemy import create_all_tables, start_mappers
from borshook.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyWebhookUnitOfWork,
    shutdown,
    startup,
)
from tests.helpers.fakes import FakeProvider, FakeStore, FakeUnitOfWork, RecordingScheduler

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    # one shared connection so every session and thread sees the same in-memory database
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    start_mappers()
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyWebhookUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyWebhookUnitOfWork:
        return SqlAlchemyWebhookUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def uow_factory(store: FakeStore) -> Callable[[], FakeUnitOfWork]:
    return store.unit_of_work


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def scheduler() -> RecordingScheduler:
    return RecordingScheduler()
