"""Translate registry errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from projreg.core.errors import (
    InvalidArgument,
    InvalidState,
    NotFound,
    OperationDisabled,
    PermissionDenied,
    RegistryError,
)

LOGGER = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[RegistryError], int] = {
    PermissionDenied: status.HTTP_403_FORBIDDEN,
    NotFound: status.HTTP_404_NOT_FOUND,
    InvalidState: status.HTTP_409_CONFLICT,
    InvalidArgument: status.HTTP_422_UNPROCESSABLE_ENTITY,
    OperationDisabled: status.HTTP_405_METHOD_NOT_ALLOWED,
}


def http_status_for(exc: RegistryError) -> int:
    for error_type, code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
    code = http_status_for(exc)
    LOGGER.info("request rejected path=%s kind=%s status=%s", request.url.path, exc.kind, code)
    return JSONResponse(status_code=code, content={"kind": exc.kind, "detail": exc.reason})


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RegistryError, registry_error_handler)  # type: ignore[arg-type]
