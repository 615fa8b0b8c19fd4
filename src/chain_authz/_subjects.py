"""Subject reduction, identity extraction and query validation."""

from __future__ import annotations

import uuid

from chain_authz._types import IdentityLike, OnlineSubject
from chain_authz.config._config import AuthzConfig, get_global_config
from chain_authz.exceptions import InvalidQueryError, UnsupportedSubjectError

__all__ = [
    "as_identity",
    "clamp_level",
    "reduce_subject",
    "validate_key",
    "validate_subject",
]


def validate_key(key: str, *, field: str = "key") -> str:
    """Fail fast on a missing or empty key."""
    if not isinstance(key, str) or not key:
        raise InvalidQueryError(field=field)
    return key


def validate_subject(subject: object) -> object:
    if subject is None:
        raise InvalidQueryError(field="subject")
    return subject


def as_identity(identity: uuid.UUID | IdentityLike) -> uuid.UUID:
    """Reduce a UUID or a profile-style object to its UUID.

    Raises:
        InvalidQueryError: If *identity* is ``None`` or carries no UUID.

    Example::

        as_identity(profile)        # profile.id
        as_identity(uuid.uuid4())   # returned unchanged
    """
    if identity is None:
        raise InvalidQueryError(field="identity")
    if isinstance(identity, uuid.UUID):
        return identity
    value = getattr(identity, "id", None)
    if not isinstance(value, uuid.UUID):
        raise InvalidQueryError(
            field="identity",
            message=f"identity {identity!r} has no UUID 'id' attribute",
        )
    return value


def reduce_subject(subject: object, *, config: AuthzConfig | None = None) -> OnlineSubject:
    """Reduce *subject* to an online subject.

    Online subjects pass through unchanged. Anything else (an entity,
    a game object, an ORM row) is handed to the configured
    ``subject_reducer``; errors raised by the reducer are not wrapped.

    Raises:
        InvalidQueryError: If *subject* is ``None``.
        UnsupportedSubjectError: If no reducer is configured, or the
            reducer returned something that is not an online subject.
    """
    validate_subject(subject)
    if isinstance(subject, OnlineSubject):
        return subject

    cfg = config if config is not None else get_global_config()
    if cfg.subject_reducer is None:
        raise UnsupportedSubjectError(subject=subject)

    reduced = cfg.subject_reducer(subject)
    if not isinstance(reduced, OnlineSubject):
        raise UnsupportedSubjectError(
            subject=subject,
            message=f"subject_reducer returned {reduced!r} for {subject!r}, not an online subject",
        )
    return reduced


def clamp_level(level: int, *, config: AuthzConfig | None = None) -> int:
    """Clamp a requested permission level into ``[0, max_permission_level]``."""
    cfg = config if config is not None else get_global_config()
    return max(0, min(level, cfg.max_permission_level))
