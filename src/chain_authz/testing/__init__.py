"""chain-authz testing utilities — mock subjects, recording providers, fixtures.

Provides test helpers for verifying providers and fallbacks:

- **Mock subjects**: ``MockSubject``, ``MockProfile``, ``StaticLevels``.
- **Recording providers**: count and order provider invocations.
- **Assertion helpers**: ``assert_granted``, ``assert_denied``,
  ``assert_undefined``.
- **Fixtures**: ``authz_registry``, ``authz_config``, ``isolated_authz_state``.

Example::

    from chain_authz.testing import MockSubject, RecordingProvider, assert_granted

    def test_operators(authz_registry):
        authz_registry.add_provider("permission", RecordingProvider(TriState.TRUE))
        assert_granted(MockSubject(), "world.fly", registry=authz_registry)
"""

from chain_authz.testing._actors import (
    MockProfile,
    MockSubject,
    StaticLevels,
    make_console,
    make_player,
)
from chain_authz.testing._assertions import assert_denied, assert_granted, assert_undefined
from chain_authz.testing._fixtures import authz_config, authz_registry, isolated_authz_state
from chain_authz.testing._isolation import isolated_authz
from chain_authz.testing._providers import AsyncRecordingProvider, RecordingProvider

__all__ = [
    "AsyncRecordingProvider",
    "MockProfile",
    "MockSubject",
    "RecordingProvider",
    "StaticLevels",
    "assert_denied",
    "assert_granted",
    "assert_undefined",
    "authz_config",
    "authz_registry",
    "isolated_authz",
    "isolated_authz_state",
    "make_console",
    "make_player",
]
