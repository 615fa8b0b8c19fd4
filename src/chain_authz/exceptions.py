"""Exception hierarchy for chain-authz."""

from __future__ import annotations

__all__ = [
    "AuthorizationDenied",
    "AuthzError",
    "InvalidQueryError",
    "UnsupportedSubjectError",
]


class AuthzError(Exception):
    """Base exception for all chain-authz errors."""


class InvalidQueryError(AuthzError, ValueError):
    """A query was made with a missing or empty subject, identity or key.

    Raised synchronously before any provider is consulted. Subclasses
    ``ValueError`` so callers validating input generically still catch it.

    Attributes:
        field: The name of the offending argument.

    Example::

        try:
            check(subject, "")
        except InvalidQueryError as exc:
            print(exc.field)  # "key"
    """

    def __init__(self, *, field: str, message: str | None = None) -> None:
        self.field = field
        if message is None:
            message = f"{field} must not be None or empty"
        super().__init__(message)


class UnsupportedSubjectError(AuthzError):
    """A subject could not be reduced to an online subject.

    Raised when no subject reducer is configured for a non-online subject,
    or by a reducer itself when the subject has no server-side context.

    Attributes:
        subject: The subject that could not be reduced.
    """

    def __init__(self, *, subject: object, message: str | None = None) -> None:
        self.subject = subject
        if message is None:
            message = (
                f"Subject {subject!r} is not an online subject. "
                f"Pass an online subject directly or configure a subject_reducer."
            )
        super().__init__(message)


class AuthorizationDenied(AuthzError):  # noqa: N818
    """Subject does not hold the requested permission.

    Attributes:
        subject: The subject that was denied.
        key: The permission key that was checked.

    Example::

        try:
            authorize(player, "world.fly")
        except AuthorizationDenied as exc:
            print(f"{exc.subject} lacks {exc.key}")
    """

    def __init__(
        self,
        *,
        subject: object,
        key: str,
        message: str | None = None,
    ) -> None:
        self.subject = subject
        self.key = key
        if message is None:
            message = f"Subject {subject!r} does not have permission {key!r}"
        super().__init__(message)
