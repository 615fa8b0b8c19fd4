"""Tests for the SQLAlchemy table-backed providers."""

from __future__ import annotations

import uuid

import pytest
import pytest_asyncio
from sqlalchemy import MetaData, create_engine
from sqlalchemy.ext.asyncio import create_async_engine

from chain_authz import TriState, check, check_offline, get_offline_option, get_option
from chain_authz.chain._registry import ProviderRegistry
from chain_authz.exceptions import UnsupportedSubjectError
from chain_authz.integrations.sqlalchemy import (
    AsyncSqlOptionProvider,
    AsyncSqlPermissionProvider,
    SqlOptionProvider,
    SqlPermissionProvider,
    option_values_table,
    permission_grants_table,
)
from tests.conftest import Player

ALICE = Player(name="alice", id=uuid.UUID("00000000-0000-0000-0000-0000000000a1"))

metadata = MetaData()
grants = permission_grants_table(metadata)
options = option_values_table(metadata)

ROWS_GRANTS = [
    {"subject_id": str(ALICE.id), "key": "fly", "value": False},
    {"subject_id": str(ALICE.id), "key": "build", "value": True},
]
ROWS_OPTIONS = [
    {"subject_id": str(ALICE.id), "key": "group-weight", "value": "5"},
]


@pytest.fixture()
def engine():
    eng = create_engine("sqlite:///:memory:")
    metadata.create_all(eng)
    with eng.begin() as conn:
        conn.execute(grants.insert(), ROWS_GRANTS)
        conn.execute(options.insert(), ROWS_OPTIONS)
    yield eng
    eng.dispose()


@pytest_asyncio.fixture()
async def async_engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with eng.begin() as conn:
        await conn.run_sync(metadata.create_all)
        await conn.execute(grants.insert(), ROWS_GRANTS)
        await conn.execute(options.insert(), ROWS_OPTIONS)
    yield eng
    await eng.dispose()


class TestTables:
    def test_grant_table_columns(self):
        assert [c.name for c in grants.columns] == ["subject_id", "key", "value"]
        assert {c.name for c in grants.primary_key} == {"subject_id", "key"}

    def test_custom_table_name(self):
        assert permission_grants_table(MetaData(), name="perms").name == "perms"


class TestSqlPermissionProvider:
    def test_grant_deny_and_missing(self, engine, registry: ProviderRegistry):
        provider = SqlPermissionProvider(engine, grants)
        assert provider(ALICE, "build") is TriState.TRUE
        assert provider(ALICE, "fly") is TriState.FALSE
        assert provider(ALICE, "teleport") is TriState.UNDEFINED

    def test_in_registry(self, engine, registry: ProviderRegistry):
        registry.add_provider("permission", SqlPermissionProvider(engine, grants))
        (registration,) = registry.providers("permission")
        assert registration.name == "SqlPermissionProvider[permission_grants]"
        assert check(ALICE, "fly", True, registry=registry) is False
        assert check(ALICE, "teleport", True, registry=registry) is True

    def test_custom_subject_id(self, engine):
        provider = SqlPermissionProvider(engine, grants, subject_id=lambda s: str(s.id))
        assert provider(ALICE, "build") is TriState.TRUE

    def test_subject_without_id(self, engine):
        provider = SqlPermissionProvider(engine, grants)
        with pytest.raises(UnsupportedSubjectError):
            provider(object(), "build")


class TestSqlOptionProvider:
    def test_value_and_missing(self, engine, registry: ProviderRegistry):
        registry.add_provider("option", SqlOptionProvider(engine, options))
        assert get_option(ALICE, "group-weight", 0, transform=int, registry=registry) == 5
        assert get_option(ALICE, "prefix", "", registry=registry) == ""


class TestAsyncProviders:
    @pytest.mark.asyncio
    async def test_offline_permission(self, async_engine, registry: ProviderRegistry):
        registry.add_provider("offline_permission", AsyncSqlPermissionProvider(async_engine, grants))
        assert await check_offline(ALICE.id, "build", registry=registry) is True
        assert await check_offline(ALICE.id, "fly", True, registry=registry) is False
        assert await check_offline(uuid.uuid4(), "build", registry=registry) is False

    @pytest.mark.asyncio
    async def test_offline_option(self, async_engine, registry: ProviderRegistry):
        registry.add_provider("offline_option", AsyncSqlOptionProvider(async_engine, options))
        assert await get_offline_option(
            ALICE.id, "group-weight", 0, transform=int, registry=registry
        ) == 5
        assert await get_offline_option(ALICE.id, "prefix", registry=registry) is None
