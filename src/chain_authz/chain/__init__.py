"""Provider chains — registration and ordered resolution of providers."""

from chain_authz.chain._async import AsyncOptionChain, AsyncPermissionChain
from chain_authz.chain._base import ProviderList, ProviderRegistration
from chain_authz.chain._decorator import provider
from chain_authz.chain._registry import ProviderRegistry, get_default_registry
from chain_authz.chain._sync import OptionChain, PermissionChain

__all__ = [
    "AsyncOptionChain",
    "AsyncPermissionChain",
    "OptionChain",
    "PermissionChain",
    "ProviderList",
    "ProviderRegistration",
    "ProviderRegistry",
    "get_default_registry",
    "provider",
]
