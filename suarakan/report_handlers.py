"""Request handlers for incident reports and their processing status."""

from __future__ import annotations

import contextlib
import functools
from dataclasses import replace
from datetime import datetime
from http import HTTPStatus
from typing import Any, Callable, Optional, TypeVar

from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from suarakan.jwt import JwtClaims
from suarakan.models import ApiResponse, NewReport, NewUpdate, Report, Update
from suarakan.services import NotFoundError, ReportService, UpdateService
from suarakan.validation import ValidationError, sanitize_report, validate_report

REPORTER_ROLE = "PELAPOR"
ADMIN_ROLE = "ADMIN"
STATUS_RECEIVED = "Received"
STATUS_REJECTED = "Rejected"

_ModelT = TypeVar("_ModelT", NewReport, Report)


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


def _parse(kind: type[_ModelT], payload: Any) -> _ModelT:
    if isinstance(payload, kind):
        return payload
    try:
        return kind.from_dict(payload)
    except ValueError as exc:
        raise _Abort(HTTPStatus.UNPROCESSABLE_ENTITY, str(exc)) from exc


def _authenticated(claims: Optional[JwtClaims]) -> JwtClaims:
    if claims is None:
        raise _Abort(HTTPStatus.UNAUTHORIZED, "Authentication failed")
    return claims


def _require_reporter(claims: JwtClaims, action: str) -> None:
    if claims.user_type != REPORTER_ROLE:
        raise _Abort(HTTPStatus.FORBIDDEN, f"Only PELAPOR can {action} reports")


def _validated(report: NewReport | Report) -> None:
    try:
        validate_report(report)
    except ValidationError as exc:
        raise _Abort(exc.status, exc.message) from exc


def _find_report(service: ReportService, report_id: int) -> Report:
    try:
        return service.get_report_by_id(report_id)
    except NotFoundError as exc:
        raise _Abort(HTTPStatus.NOT_FOUND, "Report not found") from exc
    except SQLAlchemyError as exc:
        raise _Abort(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc)) from exc


def _update_of(service: UpdateService, report_id: int) -> Update:
    try:
        return service.get_update_by_report_id(report_id)
    except (NotFoundError, SQLAlchemyError) as exc:
        raise _Abort(
            HTTPStatus.INTERNAL_SERVER_ERROR, f"Failed to get update: {exc}"
        ) from exc


def _require_owner(report: Report, claims: JwtClaims, action: str) -> None:
    if report.reporterid != claims.user_id:
        raise _Abort(
            HTTPStatus.FORBIDDEN, f"You are not authorized to {action} this report"
        )


@_handler
def create_report(
    conn: Connection, claims: Optional[JwtClaims], payload: Any
) -> ApiResponse:
    """Store a new report from a reporter, together with its initial status."""
    submitted = _parse(NewReport, payload)
    user = _authenticated(claims)
    _require_reporter(user, "create")
    _validated(submitted)

    new_report = replace(
        sanitize_report(submitted), createdat=datetime.now(), reporterid=user.user_id
    )
    reports = ReportService(conn)
    try:
        report = reports.create_report(new_report)
    except SQLAlchemyError as exc:
        raise _Abort(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc)) from exc

    initial = NewUpdate(
        createdat=datetime.now(),
        reportid=report.reportid,
        remarks="",
        proof="",
        status=STATUS_RECEIVED,
    )
    try:
        UpdateService(conn).create_update(initial)
    except SQLAlchemyError as exc:
        with contextlib.suppress(SQLAlchemyError):
            reports.delete_report(report.reportid)
        raise _Abort(
            HTTPStatus.INTERNAL_SERVER_ERROR, f"Failed to create update: {exc}"
        ) from exc
    return ApiResponse(HTTPStatus.CREATED, report.to_dict())


@_handler
def get_reports(conn: Connection, claims: Optional[JwtClaims]) -> ApiResponse:
    """List reports with their status: all for admins, own ones for reporters."""
    user = _authenticated(claims)
    reports = ReportService(conn)
    try:
        if user.user_type == ADMIN_ROLE:
            found = reports.get_all_reports()
        elif user.user_type == REPORTER_ROLE:
            found = reports.get_reports_by_reporter(user.user_id)
        else:
            raise _Abort(HTTPStatus.FORBIDDEN, "Unauthorized access")
    except SQLAlchemyError as exc:
        raise _Abort(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc)) from exc

    updates = UpdateService(conn)
    body = [
        {"report": report.to_dict(), "update": _update_of(updates, report.reportid).to_dict()}
        for report in found
    ]
    return ApiResponse(HTTPStatus.OK, body)


@_handler
def get_report(
    conn: Connection, claims: Optional[JwtClaims], report_id: int
) -> ApiResponse:
    """Return one report with its status; reporters only see their own."""
    user = _authenticated(claims)
    report = _find_report(ReportService(conn), report_id)
    if user.user_type == REPORTER_ROLE:
        _require_owner(report, user, "view")
    update = _update_of(UpdateService(conn), report_id)
    return ApiResponse(
        HTTPStatus.OK, {"report": report.to_dict(), "update": update.to_dict()}
    )


@_handler
def update_report(
    conn: Connection, claims: Optional[JwtClaims], report_id: int, payload: Any
) -> ApiResponse:
    """Replace a reporter's own report while it is still in the received state."""
    submitted = _parse(Report, payload)
    user = _authenticated(claims)
    _require_reporter(user, "update")

    reports = ReportService(conn)
    existing = _find_report(reports, report_id)
    _require_owner(existing, user, "update")

    if _update_of(UpdateService(conn), report_id).status != STATUS_RECEIVED:
        raise _Abort(
            HTTPStatus.FORBIDDEN,
            "Report can only be updated when status is 'Received'",
        )

    _validated(submitted)
    changed = replace(
        submitted,
        reportid=existing.reportid,
        createdat=existing.createdat,
        updatedat=datetime.now(),
        reporterid=user.user_id,
    )
    try:
        report = reports.update_report(report_id, sanitize_report(changed))
    except (NotFoundError, SQLAlchemyError) as exc:
        raise _Abort(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc)) from exc
    return ApiResponse(HTTPStatus.OK, report.to_dict())


@_handler
def delete_report(
    conn: Connection, claims: Optional[JwtClaims], report_id: int
) -> ApiResponse:
    """Delete a reporter's own report once it is received or rejected."""
    user = _authenticated(claims)
    _require_reporter(user, "delete")

    reports = ReportService(conn)
    existing = _find_report(reports, report_id)
    _require_owner(existing, user, "delete")

    updates = UpdateService(conn)
    if _update_of(updates, report_id).status not in (STATUS_RECEIVED, STATUS_REJECTED):
        raise _Abort(
            HTTPStatus.FORBIDDEN,
            "Report can only be deleted when status is 'Received' or 'Rejected'",
        )

    try:
        updates.delete_update_by_report_id(report_id)
    except SQLAlchemyError as exc:
        raise _Abort(
            HTTPStatus.INTERNAL_SERVER_ERROR, f"Failed to delete update: {exc}"
        ) from exc
    try:
        reports.delete_report(report_id)
    except SQLAlchemyError as exc:
        raise _Abort(
            HTTPStatus.INTERNAL_SERVER_ERROR, f"Failed to delete report: {exc}"
        ) from exc
    return ApiResponse(
        HTTPStatus.OK,
        {"message": "Report and associated update deleted successfully"},
    )