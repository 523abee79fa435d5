"""Translation of engine errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from ..errors import InvalidTransition, InvariantViolation, NotFound, SessionNotFound


def to_http_exception(exc: Exception) -> HTTPException:
    if isinstance(exc, (NotFound, SessionNotFound)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, InvalidTransition):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, ValueError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, InvariantViolation):
        logging.error(f"Route invariant violated: {exc}")
    else:
        logging.exception(f"Unexpected error handling session request: {exc}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to process request: {str(exc)}",
    )
