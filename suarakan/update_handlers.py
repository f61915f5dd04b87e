"""Request handlers for the processing status of reports."""

from __future__ import annotations

import functools
from datetime import datetime
from http import HTTPStatus
from typing import Any, Callable, Optional, TypeVar

from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from suarakan.jwt import JwtClaims
from suarakan.models import ApiResponse, Update
from suarakan.services import NotFoundError, UpdateService
from suarakan.validation import (
    UpdateRequest,
    ValidationError,
    sanitize_optional,
    validate_update_request,
)

ADMIN_ROLE = "ADMIN"

_T = TypeVar("_T")


class _Abort(Exception):
    """Stops a handler early with an error response."""

    def __init__(self, status: HTTPStatus, message: str) -> None:
        super().__init__(message)
        self.response = ApiResponse(status, {"error": message})


def _handler(func: Callable[..., ApiResponse]) -> Callable[..., ApiResponse]:
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> ApiResponse:
        try:
            return func(*args, **kwargs)
        except _Abort as abort:
            return abort.response

    return wrapper


def _find(service: UpdateService, update_id: int) -> Update:
    try:
        return service.get_update_by_id(update_id)
    except NotFoundError as exc:
        raise _Abort(HTTPStatus.NOT_FOUND, "Update not found") from exc
    except SQLAlchemyError as exc:
        raise _Abort(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc)) from exc


def _or(value: Optional[_T], fallback: Optional[_T]) -> Optional[_T]:
    return value if value is not None else fallback


@_handler
def get_update(conn: Connection, update_id: int) -> ApiResponse:
    """Return one status update; the caller has already authenticated the user."""
    return ApiResponse(HTTPStatus.OK, _find(UpdateService(conn), update_id).to_dict())


@_handler
def update_update(
    conn: Connection, claims: Optional[JwtClaims], update_id: int, payload: Any
) -> ApiResponse:
    """Change the remarks, proof or status of a report on behalf of an administrator."""
    if isinstance(payload, UpdateRequest):
        request = payload
    else:
        try:
            request = UpdateRequest.from_dict(payload)
        except ValueError as exc:
            raise _Abort(HTTPStatus.UNPROCESSABLE_ENTITY, str(exc)) from exc

    if claims is None:
        raise _Abort(HTTPStatus.UNAUTHORIZED, "Authentication failed")
    if claims.user_type != ADMIN_ROLE:
        raise _Abort(HTTPStatus.FORBIDDEN, "Admin access required")

    service = UpdateService(conn)
    existing = _find(service, update_id)
    try:
        validate_update_request(request)
    except ValidationError as exc:
        raise _Abort(exc.status, exc.message) from exc

    changed = Update(
        updateid=existing.updateid,
        createdat=existing.createdat,
        reportid=existing.reportid,
        updatedat=datetime.now(),
        remarks=_or(sanitize_optional(request.remarks), existing.remarks),
        proof=_or(sanitize_optional(request.proof), existing.proof),
        status=_or(sanitize_optional(request.status), existing.status),
    )
    try:
        stored = service.update_update(update_id, changed)
    except (NotFoundError, SQLAlchemyError) as exc:
        raise _Abort(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc)) from exc
    return ApiResponse(HTTPStatus.OK, stored.to_dict())