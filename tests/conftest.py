"""Shared test fixtures for chain-authz tests."""

from __future__ import annotations

import uuid
from collections.abc import Generator
from dataclasses import dataclass, field

import pytest

from chain_authz.chain._registry import ProviderRegistry
from chain_authz.config._config import _reset_global_config
from chain_authz.testing._fixtures import (  # noqa: F401
    authz_config,
    authz_registry,
    isolated_authz_state,
)

# ---------------------------------------------------------------------------
# Test subjects
# ---------------------------------------------------------------------------


@dataclass
class Player:
    """Online subject: satisfies OnlineSubject via has_permission_level."""

    name: str
    level: int = 0
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def has_permission_level(self, level: int) -> bool:
        return self.level >= level


@dataclass
class Entity:
    """Non-online subject that must be reduced to a Player."""

    name: str
    player: Player | None = None


@dataclass
class Profile:
    """Offline identity: satisfies IdentityLike."""

    id: uuid.UUID
    name: str = "offline"


def entity_to_player(entity: object) -> Player:
    """Subject reducer used by tests: only entities carrying a player reduce."""
    from chain_authz.exceptions import UnsupportedSubjectError

    if isinstance(entity, Entity) and entity.player is not None:
        return entity.player
    raise UnsupportedSubjectError(subject=entity)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_config() -> Generator[None, None, None]:
    """Every test starts and ends with the default global config."""
    _reset_global_config()
    yield
    _reset_global_config()


@pytest.fixture()
def registry() -> ProviderRegistry:
    """Fresh registry per test to avoid cross-test pollution."""
    return ProviderRegistry()


@pytest.fixture()
def player() -> Player:
    return Player(name="alice", level=1)


@pytest.fixture()
def identity() -> uuid.UUID:
    return uuid.UUID("12345678-1234-5678-1234-567812345678")
