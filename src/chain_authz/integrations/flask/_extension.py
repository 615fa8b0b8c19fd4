"""Flask extension for chain-authz permission checks."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Flask, current_app, jsonify

from chain_authz._options import get_option
from chain_authz._permissions import authorize
from chain_authz._permissions import check as _check
from chain_authz.chain._registry import ProviderRegistry, get_default_registry
from chain_authz.exceptions import AuthorizationDenied, UnsupportedSubjectError

__all__ = ["AuthzExtension"]

F = TypeVar("F", bound=Callable[..., Any])


class AuthzExtension:
    """Flask extension that guards views with permission checks.

    Supports the Flask app-factory pattern via ``init_app()``.

    Args:
        app: Optional Flask application. If provided, calls ``init_app()``
            immediately.
        subject_provider: A callable ``() -> subject`` returning the
            current subject. Called within request context.
        registry: Optional provider registry. Defaults to the global registry.

    Example::

        app = Flask(__name__)
        authz = AuthzExtension(app, subject_provider=lambda: g.player)

        @app.post("/server/stop")
        @authz.require("server.stop", level=4)
        def stop():
            ...
    """

    def __init__(
        self,
        app: Flask | None = None,
        *,
        subject_provider: Callable[[], Any],
        registry: ProviderRegistry | None = None,
    ) -> None:
        self._subject_provider = subject_provider
        self._registry = registry

        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Initialize the extension with a Flask application.

        Stores configuration on ``app.extensions["chain_authz"]`` and
        registers error handlers for authorization exceptions.
        """
        app.extensions["chain_authz"] = {
            "subject_provider": self._subject_provider,
            "registry": self._registry,
        }

        @app.errorhandler(AuthorizationDenied)
        def handle_authz_denied(exc: AuthorizationDenied):  # pyright: ignore[reportUnusedFunction]
            return jsonify({"detail": str(exc)}), 403

        @app.errorhandler(UnsupportedSubjectError)
        def handle_unsupported_subject(exc: UnsupportedSubjectError):  # pyright: ignore[reportUnusedFunction]
            return jsonify({"detail": str(exc)}), 500

    def _state(self) -> tuple[Any, ProviderRegistry]:
        ext_state: dict[str, Any] = current_app.extensions["chain_authz"]
        subject = ext_state["subject_provider"]()
        registry: ProviderRegistry | None = ext_state["registry"]
        if registry is None:
            registry = get_default_registry()
        return subject, registry

    def require(
        self,
        key: str,
        default: bool | None = None,
        *,
        level: int | None = None,
    ) -> Callable[[F], F]:
        """View decorator that requires the current subject to hold *key*.

        Denials raise ``AuthorizationDenied``, rendered as a 403 response
        by the handler installed in ``init_app()``.
        """

        def decorator(view: F) -> F:
            @functools.wraps(view)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                subject, registry = self._state()
                authorize(subject, key, default, level=level, registry=registry)
                return view(*args, **kwargs)

            return wrapper  # type: ignore[return-value]

        return decorator

    def check(self, key: str, default: bool | None = None) -> bool:
        """Check *key* for the current subject. Must run in request context."""
        subject, registry = self._state()
        return _check(subject, key, default, registry=registry)

    def option(
        self,
        key: str,
        default: Any = None,
        *,
        transform: Callable[[str], Any] | None = None,
    ) -> Any:
        """Resolve option *key* for the current subject."""
        subject, registry = self._state()
        return get_option(subject, key, default, transform=transform, registry=registry)
