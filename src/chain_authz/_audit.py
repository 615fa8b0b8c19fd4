"""Audit logging for provider-chain resolutions and fallbacks."""

from __future__ import annotations

import logging

from chain_authz.chain._base import ProviderRegistration

__all__ = ["log_fallback", "log_resolution"]

logger = logging.getLogger("chain_authz")


def log_resolution(
    *,
    kind: str,
    subject: object,
    key: str,
    result: object,
    answered_by: ProviderRegistration | None,
    consulted: int,
) -> None:
    """Log the outcome of one chain resolution.

    Logging levels:
    - INFO: a provider answered (kind, key, subject, result, provider)
    - DEBUG: no provider answered; the caller's fallback will apply

    Example::

        log_resolution(
            kind="permission",
            subject=player,
            key="world.fly",
            result=TriState.TRUE,
            answered_by=registration,
            consulted=2,
        )
    """
    if answered_by is None:
        logger.debug(
            "%s resolution: %r for %r: no answer from %d provider(s)",
            kind,
            key,
            subject,
            consulted,
        )
        return

    logger.info(
        "%s resolution: %r for %r -> %s (answered by %s after %d provider(s))",
        kind,
        key,
        subject,
        result,
        answered_by.name,
        consulted,
    )


def log_fallback(*, shape: str, subject: object, key: str, result: object) -> None:
    """Log that a fallback policy supplied the final value.

    Each fallback goes to the ``chain_authz.fallback`` sub-logger so it
    can be enabled independently of resolution logging.
    """
    fallback_logger = logging.getLogger("chain_authz.fallback")
    fallback_logger.debug(
        "FALLBACK:%s %r for %r -> %r",
        shape,
        key,
        subject,
        result,
    )
