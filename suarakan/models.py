"""Records stored by the service and their JSON representations."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from http import HTTPStatus
from typing import Any, Mapping, Optional

_DATETIME_RE = re.compile(r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d{1,9}))?")
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


@dataclass(frozen=True)
class ApiResponse:
    """An HTTP status paired with a JSON-ready body."""

    status: HTTPStatus
    body: Any


def _to_json(value: Any) -> Any:
    if isinstance(value, datetime):
        if value.microsecond == 0:
            return value.isoformat()
        if value.microsecond % 1000 == 0:
            return value.isoformat(timespec="milliseconds")
        return value.isoformat(timespec="microseconds")
    if isinstance(value, date):
        return value.isoformat()
    return value


def _parse_datetime(name: str, value: str) -> datetime:
    match = _DATETIME_RE.fullmatch(value)
    if match is None:
        raise ValueError(f"invalid datetime for field {name!r}: {value!r}")
    try:
        parsed = datetime.strptime(match[1], "%Y-%m-%dT%H:%M:%S")
    except ValueError as exc:
        raise ValueError(f"invalid datetime for field {name!r}: {value!r}") from exc
    fraction = match[2]
    if fraction:
        parsed = parsed.replace(microsecond=int(fraction[:6].ljust(6, "0")))
    return parsed


def _parse_date(name: str, value: str) -> date:
    if _DATE_RE.fullmatch(value) is None:
        raise ValueError(f"invalid date for field {name!r}: {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"invalid date for field {name!r}: {value!r}") from exc


def _convert(name: str, kind: type, value: Any) -> Any:
    if kind is str and isinstance(value, str):
        return value
    if kind is int and isinstance(value, int) and not isinstance(value, bool):
        return value
    if kind is datetime:
        if isinstance(value, datetime) and value.tzinfo is None:
            return value
        if isinstance(value, str):
            return _parse_datetime(name, value)
    if kind is date:
        if isinstance(value, date) and not isinstance(value, datetime):
            return value
        if isinstance(value, str):
            return _parse_date(name, value)
    raise ValueError(f"invalid value for field {name!r}: {value!r}")


def _parse_fields(data: Any, spec: tuple[tuple[str, type, bool], ...]) -> dict[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError("expected a JSON object")
    values: dict[str, Any] = {}
    for name, kind, required in spec:
        raw = data.get(name)
        if raw is None:
            if required:
                raise ValueError(f"missing field {name!r}")
            values[name] = None
        else:
            values[name] = _convert(name, kind, raw)
    return values


_REPORT_FIELDS: tuple[tuple[str, type, bool], ...] = (
    ("createdat", datetime, False),
    ("updatedat", datetime, False),
    ("reporterfullname", str, False),
    ("reporterphonenum", str, False),
    ("reporteraddress", str, False),
    ("reporterrelationship", str, False),
    ("incidentlocation", str, True),
    ("incidenttime", datetime, True),
    ("incidentdescription", str, False),
    ("incidentvictimneeds", str, False),
    ("incidentproof", str, False),
    ("victimfullname", str, True),
    ("victimnik", str, False),
    ("victimemail", str, False),
    ("victimaddress", str, False),
    ("victimphonenum", str, False),
    ("victimoccupation", str, False),
    ("victimsex", str, False),
    ("victimdateofbirth", date, False),
    ("victimplaceofbirth", str, False),
    ("victimeducationlevel", str, False),
    ("victimmarriagestatus", str, False),
    ("accusedfullname", str, True),
    ("accusedaddress", str, False),
    ("accusedphonenum", str, False),
    ("accusedoccupation", str, False),
    ("accusedsex", str, False),
    ("accusedrelationship", str, False),
    ("authority", str, True),
    ("reporterid", int, False),
)


@dataclass
class Admin:
    """An administrator, keyed by the user it belongs to."""

    adminid: int


@dataclass
class User:
    """An account of the authentication service."""

    id: int
    password: str
    last_login: Optional[datetime]
    is_superuser: bool
    first_name: str
    last_name: str
    is_staff: bool
    is_active: bool
    date_joined: datetime
    email: str
    user_type: str
    is_email_verified: bool
    full_name: str
    phone_number: str


@dataclass
class Publication:
    """A stored publication."""

    publicationid: int
    title: str
    createdat: datetime
    updatedat: Optional[datetime] = None
    description: Optional[str] = None
    filelink: Optional[str] = None
    adminid: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation of the publication."""
        return {
            "publicationid": self.publicationid,
            "title": self.title,
            "createdat": _to_json(self.createdat),
            "updatedat": _to_json(self.updatedat),
            "description": self.description,
            "filelink": self.filelink,
            "adminid": self.adminid,
        }


@dataclass
class NewPublication:
    """A publication that has not been stored yet."""

    title: str
    createdat: datetime
    updatedat: Optional[datetime] = None
    description: Optional[str] = None
    filelink: Optional[str] = None
    adminid: Optional[int] = None


@dataclass(kw_only=True)
class _ReportDetails:
    incidentlocation: str
    incidenttime: datetime
    victimfullname: str
    accusedfullname: str
    authority: str
    createdat: Optional[datetime] = None
    updatedat: Optional[datetime] = None
    reporterfullname: Optional[str] = None
    reporterphonenum: Optional[str] = None
    reporteraddress: Optional[str] = None
    reporterrelationship: Optional[str] = None
    incidentdescription: Optional[str] = None
    incidentvictimneeds: Optional[str] = None
    incidentproof: Optional[str] = None
    victimnik: Optional[str] = None
    victimemail: Optional[str] = None
    victimaddress: Optional[str] = None
    victimphonenum: Optional[str] = None
    victimoccupation: Optional[str] = None
    victimsex: Optional[str] = None
    victimdateofbirth: Optional[date] = None
    victimplaceofbirth: Optional[str] = None
    victimeducationlevel: Optional[str] = None
    victimmarriagestatus: Optional[str] = None
    accusedaddress: Optional[str] = None
    accusedphonenum: Optional[str] = None
    accusedoccupation: Optional[str] = None
    accusedsex: Optional[str] = None
    accusedrelationship: Optional[str] = None
    reporterid: Optional[int] = None

    def _details_json(self) -> dict[str, Any]:
        return {name: _to_json(getattr(self, name)) for name, _, _ in _REPORT_FIELDS}


@dataclass(kw_only=True)
class NewReport(_ReportDetails):
    """A report as submitted, before it is stored."""

    @classmethod
    def from_dict(cls, data: Any) -> "NewReport":
        """Build a report from decoded JSON; unknown keys are ignored."""
        return cls(**_parse_fields(data, _REPORT_FIELDS))


@dataclass(kw_only=True)
class Report(_ReportDetails):
    """A stored report of an incident."""

    reportid: int

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation of the report."""
        return {"reportid": self.reportid, **self._details_json()}

    @classmethod
    def from_dict(cls, data: Any) -> "Report":
        """Build a stored report from decoded JSON; unknown keys are ignored."""
        spec = (("reportid", int, True),) + _REPORT_FIELDS
        return cls(**_parse_fields(data, spec))


@dataclass
class Update:
    """The processing status of a report."""

    updateid: int
    createdat: datetime
    reportid: int
    updatedat: Optional[datetime] = None
    remarks: Optional[str] = None
    proof: Optional[str] = None
    status: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation of the update."""
        return {
            "updateid": self.updateid,
            "createdat": _to_json(self.createdat),
            "updatedat": _to_json(self.updatedat),
            "remarks": self.remarks,
            "proof": self.proof,
            "status": self.status,
            "reportid": self.reportid,
        }


@dataclass
class NewUpdate:
    """A status update that has not been stored yet."""

    createdat: datetime
    reportid: int
    updatedat: Optional[datetime] = None
    remarks: Optional[str] = None
    proof: Optional[str] = None
    status: Optional[str] = None