"""Request handlers for publications."""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from datetime import datetime
from http import HTTPStatus
from typing import Any, Callable, Mapping, Optional, TypeVar, Union

from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from suarakan.jwt import JwtClaims
from suarakan.models import ApiResponse, NewPublication, Publication
from suarakan.services import NotFoundError, PublicationService

ADMIN_ROLE = "ADMIN"

_UNSAFE_RE = re.compile(r"[<>'%;()&]")
_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*")
_HOST_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})
_EDGE_CHARS = "".join(chr(code) for code in range(0x21))
_FORBIDDEN_HOST_RE = re.compile(r"[\s<>^|]")


class _Abort(Exception):
    """Stops a handler early with an error response."""

    def __init__(self, status: HTTPStatus, body: Any) -> None:
        super().__init__(status)
        self.response = ApiResponse(status, body)


def _fail(status: HTTPStatus, message: str) -> _Abort:
    return _Abort(status, {"error": message})


def _handler(func: Callable[..., ApiResponse]) -> Callable[..., ApiResponse]:
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> ApiResponse:
        try:
            return func(*args, **kwargs)
        except _Abort as abort:
            return abort.response

    return wrapper


def _optional_text(data: Mapping[str, Any], name: str) -> Optional[str]:
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"invalid value for field {name!r}: {value!r}")
    return value


def _mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError("expected a JSON object")
    return data


@dataclass(frozen=True)
class CreatePublicationRequest:
    """The fields an administrator submits to publish something."""

    title: str
    description: Optional[str] = None
    filelink: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "CreatePublicationRequest":
        """Build a request from decoded JSON; unknown keys are ignored."""
        fields = _mapping(data)
        title = fields.get("title")
        if not isinstance(title, str):
            raise ValueError("missing or invalid field 'title'")
        return cls(
            title=title,
            description=_optional_text(fields, "description"),
            filelink=_optional_text(fields, "filelink"),
        )


@dataclass(frozen=True)
class UpdatePublicationRequest:
    """The fields an administrator may change on a publication."""

    title: Optional[str] = None
    description: Optional[str] = None
    filelink: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "UpdatePublicationRequest":
        """Build a request from decoded JSON; unknown keys are ignored."""
        fields = _mapping(data)
        return cls(
            title=_optional_text(fields, "title"),
            description=_optional_text(fields, "description"),
            filelink=_optional_text(fields, "filelink"),
        )


_RequestT = TypeVar("_RequestT", CreatePublicationRequest, UpdatePublicationRequest)


def sanitize_input(text: str) -> str:
    """Remove the characters < > ' % ; ( ) & from the text."""
    return _UNSAFE_RE.sub("", text)


def _sanitize_optional(value: Optional[str]) -> Optional[str]:
    return None if value is None else sanitize_input(value)


def is_valid_filelink(link: str) -> bool:
    """Tell whether the link is an absolute URL with a scheme."""
    cleaned = re.sub(r"[\t\n\r]", "", link.strip(_EDGE_CHARS))
    scheme, separator, rest = cleaned.partition(":")
    if not separator or _SCHEME_RE.fullmatch(scheme) is None:
        return False
    if scheme.lower() not in _HOST_SCHEMES:
        return True
    authority = re.split(r"[/\\?#]", rest.lstrip("/\\"), maxsplit=1)[0]
    host_port = authority.rpartition("@")[2]
    if host_port.startswith("["):
        host, closing, port_part = host_port[1:].partition("]")
        if not closing or not host:
            return False
        port = port_part[1:] if port_part.startswith(":") else port_part
    else:
        host, _, port = host_port.partition(":")
    if not host or _FORBIDDEN_HOST_RE.search(host):
        return False
    return port == "" or (port.isdigit() and int(port) <= 65535)


def _check_filelink(filelink: Optional[str]) -> None:
    if filelink is not None and not is_valid_filelink(filelink):
        details = {
            "filelink": [{"code": "url", "message": None, "params": {"value": filelink}}]
        }
        raise _Abort(
            HTTPStatus.BAD_REQUEST, {"error": "Validation failed", "details": details}
        )


def _parse(kind: type[_RequestT], payload: Any) -> _RequestT:
    if isinstance(payload, kind):
        return payload
    try:
        return kind.from_dict(payload)
    except ValueError as exc:
        raise _fail(HTTPStatus.UNPROCESSABLE_ENTITY, str(exc)) from exc


def _require_admin(claims: Optional[JwtClaims]) -> JwtClaims:
    if claims is None:
        raise _fail(HTTPStatus.UNAUTHORIZED, "Authentication failed")
    if claims.user_type != ADMIN_ROLE:
        raise _fail(HTTPStatus.FORBIDDEN, "Admin access required")
    return claims


def _find(service: PublicationService, publication_id: int) -> Publication:
    try:
        return service.get_publication_by_id(publication_id)
    except NotFoundError as exc:
        raise _fail(HTTPStatus.NOT_FOUND, "Publication not found") from exc
    except SQLAlchemyError as exc:
        raise _fail(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc)) from exc


@_handler
def create_publication(
    conn: Connection,
    claims: Optional[JwtClaims],
    payload: Union[CreatePublicationRequest, Any],
) -> ApiResponse:
    """Store a new publication on behalf of an administrator."""
    request = _parse(CreatePublicationRequest, payload)
    _check_filelink(request.filelink)
    user = _require_admin(claims)

    new_publication = NewPublication(
        title=sanitize_input(request.title),
        createdat=datetime.now(),
        description=_sanitize_optional(request.description),
        filelink=_sanitize_optional(request.filelink),
        adminid=user.user_id,
    )
    try:
        publication = PublicationService(conn).create_publication(new_publication)
    except SQLAlchemyError as exc:
        raise _fail(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc)) from exc
    return ApiResponse(HTTPStatus.CREATED, publication.to_dict())


@_handler
def get_publications(conn: Connection) -> ApiResponse:
    """List every publication."""
    try:
        found = PublicationService(conn).get_publications()
    except SQLAlchemyError as exc:
        raise _fail(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc)) from exc
    return ApiResponse(HTTPStatus.OK, [publication.to_dict() for publication in found])


@_handler
def get_publication(conn: Connection, publication_id: int) -> ApiResponse:
    """Return one publication."""
    publication = _find(PublicationService(conn), publication_id)
    return ApiResponse(HTTPStatus.OK, publication.to_dict())


@_handler
def update_publication(
    conn: Connection,
    claims: Optional[JwtClaims],
    publication_id: int,
    payload: Union[UpdatePublicationRequest, Any],
) -> ApiResponse:
    """Change a publication owned by the requesting administrator."""
    request = _parse(UpdatePublicationRequest, payload)
    _check_filelink(request.filelink)
    title = _sanitize_optional(request.title)
    description = _sanitize_optional(request.description)
    filelink = _sanitize_optional(request.filelink)
    user = _require_admin(claims)

    service = PublicationService(conn)
    existing = _find(service, publication_id)
    if existing.adminid != user.user_id:
        raise _fail(
            HTTPStatus.FORBIDDEN, "You are not authorized to update this publication"
        )

    changed = Publication(
        publicationid=existing.publicationid,
        title=title if title is not None else existing.title,
        createdat=existing.createdat,
        updatedat=datetime.now(),
        description=description if description is not None else existing.description,
        filelink=filelink if filelink is not None else existing.filelink,
        adminid=user.user_id,
    )
    try:
        publication = service.update_publication(publication_id, changed)
    except (NotFoundError, SQLAlchemyError) as exc:
        raise _fail(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc)) from exc
    return ApiResponse(HTTPStatus.OK, publication.to_dict())


@_handler
def delete_publication(
    conn: Connection, claims: Optional[JwtClaims], publication_id: int
) -> ApiResponse:
    """Delete a publication on behalf of an administrator."""
    _require_admin(claims)
    service = PublicationService(conn)
    try:
        service.get_publication_by_id(publication_id)
    except (NotFoundError, SQLAlchemyError) as exc:
        raise _fail(HTTPStatus.NOT_FOUND, "Publication not found") from exc
    try:
        service.delete_publication(publication_id)
    except SQLAlchemyError as exc:
        raise _fail(HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to delete publication") from exc
    return ApiResponse(HTTPStatus.OK, {"message": "Publication deleted successfully"})