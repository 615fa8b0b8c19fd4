"""Exception handlers for FastAPI integration."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from chain_authz.exceptions import AuthorizationDenied, UnsupportedSubjectError

__all__ = ["install_error_handlers"]


def install_error_handlers(app: FastAPI) -> None:
    """Install exception handlers for chain-authz errors on a FastAPI app.

    - ``AuthorizationDenied`` -> 403 Forbidden
    - ``UnsupportedSubjectError`` -> 500 Internal Server Error

    Example::

        app = FastAPI()
        install_error_handlers(app)
    """

    @app.exception_handler(AuthorizationDenied)
    async def authz_denied_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: AuthorizationDenied
    ) -> JSONResponse:
        return JSONResponse(
            status_code=403,
            content={"detail": str(exc)},
        )

    @app.exception_handler(UnsupportedSubjectError)
    async def unsupported_subject_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: UnsupportedSubjectError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content={"detail": str(exc)},
        )
