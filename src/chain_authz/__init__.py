"""chain-authz — pluggable, provider-chain authorization decisions.

Asks independently registered providers, in registration order, whether
a subject holds a permission (or what an option is set to), stops at the
first definite answer, and applies the caller's fallback otherwise.

Example::

    from chain_authz import TriState, check, provider

    @provider("permission")
    def operators(subject: Player, key: str) -> TriState:
        return TriState.TRUE if subject.is_op else TriState.UNDEFINED

    if check(player, "world.fly", False):
        enable_flight(player)
"""

from importlib.metadata import PackageNotFoundError, version

from chain_authz._coercion import coerce_value
from chain_authz._options import get_offline_option, get_option
from chain_authz._permissions import (
    authorize,
    check,
    check_level,
    check_offline,
    check_offline_level,
    check_or_else,
    get_offline_permission_value,
    get_permission_value,
    require,
)
from chain_authz._types import IdentityLike, LevelSource, OnlineSubject, TriState
from chain_authz.chain._decorator import provider
from chain_authz.chain._registry import ProviderRegistry, get_default_registry
from chain_authz.config._config import AuthzConfig, configure
from chain_authz.exceptions import (
    AuthorizationDenied,
    AuthzError,
    InvalidQueryError,
    UnsupportedSubjectError,
)

try:
    __version__ = version("chain-authz")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "__version__",
    "AuthorizationDenied",
    "AuthzConfig",
    "AuthzError",
    "IdentityLike",
    "InvalidQueryError",
    "LevelSource",
    "OnlineSubject",
    "ProviderRegistry",
    "TriState",
    "UnsupportedSubjectError",
    "authorize",
    "check",
    "check_level",
    "check_offline",
    "check_offline_level",
    "check_or_else",
    "coerce_value",
    "configure",
    "get_default_registry",
    "get_offline_option",
    "get_offline_permission_value",
    "get_option",
    "get_permission_value",
    "provider",
    "require",
]
