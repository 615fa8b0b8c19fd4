"""Tests for _options.py — option lookups, coercion and typed defaults."""

from __future__ import annotations

import uuid

import pytest

from chain_authz._options import get_offline_option, get_option
from chain_authz.chain._registry import ProviderRegistry
from chain_authz.config._config import configure
from chain_authz.exceptions import InvalidQueryError, UnsupportedSubjectError
from chain_authz.testing._providers import AsyncRecordingProvider, RecordingProvider
from tests.conftest import Entity, Player, Profile, entity_to_player


class TestGetOption:
    def test_no_providers(self, registry: ProviderRegistry, player: Player):
        assert get_option(player, "prefix", registry=registry) is None
        assert get_option(player, "prefix", "[none]", registry=registry) == "[none]"

    def test_raw_value(self, registry: ProviderRegistry, player: Player):
        registry.add_provider("option", RecordingProvider({"prefix": "[VIP]"}))
        assert get_option(player, "prefix", "[none]", registry=registry) == "[VIP]"

    def test_transform_success(self, registry: ProviderRegistry, player: Player):
        registry.add_provider("option", RecordingProvider("42"))
        assert get_option(player, "k", transform=int, registry=registry) == 42

    def test_transform_value_error_is_no_value(self, registry: ProviderRegistry, player: Player):
        registry.add_provider("option", RecordingProvider("abc"))
        assert get_option(player, "k", transform=int, registry=registry) is None
        assert get_option(player, "k", 7, transform=int, registry=registry) == 7

    def test_transform_receives_value_not_key(self, registry: ProviderRegistry, player: Player):
        registry.add_provider("option", RecordingProvider("5"))
        seen: list[str] = []

        def transform(value: str) -> int:
            seen.append(value)
            return int(value)

        assert get_option(player, "group-weight", 0, transform=transform, registry=registry) == 5
        assert seen == ["5"]

    def test_transform_not_called_without_value(self, registry: ProviderRegistry, player: Player):
        def transform(value: str) -> int:
            raise AssertionError("must not be called")

        assert get_option(player, "k", 3, transform=transform, registry=registry) == 3

    def test_transform_other_errors_propagate(self, registry: ProviderRegistry, player: Player):
        registry.add_provider("option", RecordingProvider("x"))

        def transform(value: str) -> int:
            raise TypeError("bad transform")

        with pytest.raises(TypeError):
            get_option(player, "k", transform=transform, registry=registry)

    def test_entity_reduction(self, registry: ProviderRegistry, player: Player):
        provider = RecordingProvider("gold")
        registry.add_provider("option", provider)
        configure(subject_reducer=entity_to_player)
        assert get_option(Entity(name="e", player=player), "rank", registry=registry) == "gold"
        assert provider.received == [(player, "rank")]

    def test_unsupported_subject(self, registry: ProviderRegistry):
        with pytest.raises(UnsupportedSubjectError):
            get_option(Entity(name="zombie"), "rank", registry=registry)

    @pytest.mark.parametrize("key", [None, ""])
    def test_invalid_key(self, registry: ProviderRegistry, player: Player, key):
        with pytest.raises(InvalidQueryError):
            get_option(player, key, registry=registry)


class TestGetOfflineOption:
    @pytest.mark.asyncio
    async def test_default_and_transform(self, registry: ProviderRegistry, identity):
        assert await get_offline_option(identity, "homes", 1, registry=registry) == 1
        registry.add_provider("offline_option", AsyncRecordingProvider({"homes": "3"}))
        assert await get_offline_option(identity, "homes", 1, transform=int, registry=registry) == 3

    @pytest.mark.asyncio
    async def test_unparseable_gives_default(self, registry: ProviderRegistry, identity):
        registry.add_provider("offline_option", AsyncRecordingProvider("many"))
        assert await get_offline_option(identity, "homes", 1, transform=int, registry=registry) == 1

    @pytest.mark.asyncio
    async def test_profile_identity(self, registry: ProviderRegistry):
        provider = AsyncRecordingProvider("nether")
        registry.add_provider("offline_option", provider)
        profile = Profile(id=uuid.uuid4())
        assert await get_offline_option(profile, "home", registry=registry) == "nether"
        assert provider.received == [(profile.id, "home")]

    def test_validation_before_await(self, registry: ProviderRegistry):
        with pytest.raises(InvalidQueryError):
            get_offline_option(uuid.uuid4(), "", registry=registry)
