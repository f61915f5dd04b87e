"""Checks and HTML escaping for submitted reports and status updates."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from http import HTTPStatus
from typing import Any, Mapping, Optional, TypeVar

from suarakan.models import NewReport, Report

_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_PHONE_RE = re.compile(r"\d{8,13}")
_NIK_RE = re.compile(r"\d{16}")
_URL_RE = re.compile(
    r"(https?://)?([a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}(/[^\s]*)?"
)

SEXES = frozenset({"Laki-laki", "Perempuan", "Lainnya"})

RELATIONSHIPS = frozenset(
    {
        "Pasangan",
        "Mantan Pasangan",
        "Kekasih",
        "Ayah Kandung",
        "Ibu Kandung",
        "Ayah Tiri",
        "Ibu Tiri",
        "Saudara Kandung",
        "Saudara Tiri",
        "Keluarga",
        "Keluarga Tiri",
        "Keluarga Ipar",
        "Tetangga",
        "Teman",
        "Rekan Kerja",
        "Orang Tak Dikenal",
    }
)

MARRIAGE_STATUSES = frozenset(
    {
        "Belum Kawin",
        "Kawin Belum Tercatat",
        "Kawin Tercatat",
        "Cerai Hidup",
        "Cerai Mati",
    }
)

AUTHORITIES = frozenset({"Universitas Indonesia", "Komnas HAM", "Komnas Perempuan"})

EDUCATION_LEVELS = frozenset(
    {
        "Tidak Sekolah",
        "SD / MI Sederajat",
        "SMP / MTs Sederajat",
        "SMA / MA / SMK Sederajat",
        "Diploma (D1/D2/D3)",
        "Sarjana (S1/D4)",
        "Magister (S2)",
        "Doktor (S3)",
    }
)

UPDATE_STATUSES = frozenset({"Received", "Processing", "Completed", "Rejected"})

_PHONE_MESSAGE = "Nomor telepon harus 8 - 13 digit"
_SEX_MESSAGE = "Jenis kelamin harus 'Laki-laki', 'Perempuan', atau 'Lainnya'"
_RELATIONSHIP_MESSAGE = "Hubungan tidak valid"
_PROOF_MISSING_MESSAGE = "Bukti insiden harus diisi!"

_SANITIZED_REPORT_FIELDS = (
    "reporterfullname",
    "reporterphonenum",
    "reporteraddress",
    "reporterrelationship",
    "incidentlocation",
    "incidentdescription",
    "incidentvictimneeds",
    "incidentproof",
    "victimfullname",
    "victimnik",
    "victimemail",
    "victimaddress",
    "victimphonenum",
    "victimoccupation",
    "victimsex",
    "victimplaceofbirth",
    "victimeducationlevel",
    "victimmarriagestatus",
    "accusedfullname",
    "accusedaddress",
    "accusedphonenum",
    "accusedoccupation",
    "accusedsex",
    "accusedrelationship",
    "authority",
)

ReportT = TypeVar("ReportT", NewReport, Report)


class ValidationError(ValueError):
    """Raised when submitted data breaks a rule; carries the HTTP status to answer with."""

    def __init__(self, message: str, status: HTTPStatus = HTTPStatus.BAD_REQUEST) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


@dataclass(frozen=True)
class UpdateRequest:
    """The fields an administrator may change on a status update."""

    remarks: Optional[str] = None
    proof: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "UpdateRequest":
        """Build a request from decoded JSON; unknown keys are ignored."""
        if not isinstance(data, Mapping):
            raise ValueError("expected a JSON object")
        values: dict[str, Optional[str]] = {}
        for name in ("remarks", "proof", "status"):
            value = data.get(name)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"invalid value for field {name!r}: {value!r}")
            values[name] = value
        return cls(**values)


def escape_text(text: str) -> str:
    """Escape the characters that are special in HTML text: &, < and >."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def sanitize_optional(value: Optional[str]) -> Optional[str]:
    """Escape a value if there is one."""
    return None if value is None else escape_text(value)


def is_valid_email(email: str) -> bool:
    return _EMAIL_RE.fullmatch(email) is not None


def is_valid_phone(phone: str) -> bool:
    return _PHONE_RE.fullmatch(phone) is not None


def is_valid_nik(nik: str) -> bool:
    return _NIK_RE.fullmatch(nik) is not None


def is_valid_sex(sex: str) -> bool:
    return sex in SEXES


def is_valid_relationship(relationship: str) -> bool:
    return relationship in RELATIONSHIPS


def is_valid_url(url: str) -> bool:
    return _URL_RE.fullmatch(url) is not None


def is_valid_marriage_status(status: str) -> bool:
    return status in MARRIAGE_STATUSES


def is_valid_authority(authority: str) -> bool:
    return authority in AUTHORITIES


def is_valid_education_level(level: str) -> bool:
    return level in EDUCATION_LEVELS


def is_valid_status(status: str) -> bool:
    return status in UPDATE_STATUSES


def _check_optional(value: Optional[str], is_valid: Any, message: str) -> None:
    if value and not is_valid(value):
        raise ValidationError(message)


def validate_report(report: NewReport | Report) -> None:
    """Check a report, raising ValidationError for the first rule it breaks."""
    required = (
        (report.incidentlocation, "Lokasi insiden harus diisi!"),
        (report.victimfullname, "Nama korban harus diisi!"),
        (report.accusedfullname, "Nama pelaku harus diisi!"),
        (report.authority, "Tujuan pengaduan harus diisi!"),
    )
    for value, message in required:
        if not value.strip():
            raise ValidationError(message)

    _check_optional(report.victimemail, is_valid_email, "Format email tidak valid")
    for phone in (report.reporterphonenum, report.victimphonenum, report.accusedphonenum):
        _check_optional(phone, is_valid_phone, _PHONE_MESSAGE)
    _check_optional(report.victimnik, is_valid_nik, "NIK harus 16 digit")
    for sex in (report.victimsex, report.accusedsex):
        _check_optional(sex, is_valid_sex, _SEX_MESSAGE)
    for relationship in (report.reporterrelationship, report.accusedrelationship):
        _check_optional(relationship, is_valid_relationship, _RELATIONSHIP_MESSAGE)

    if not report.incidentproof:
        raise ValidationError(_PROOF_MISSING_MESSAGE)
    if not is_valid_url(report.incidentproof):
        raise ValidationError("Bukti insiden harus berupa format link yang valid!")

    _check_optional(
        report.victimmarriagestatus, is_valid_marriage_status, "Status pernikahan tidak valid"
    )
    if not is_valid_authority(report.authority):
        raise ValidationError("Tujuan pengaduan tidak valid")
    _check_optional(report.victimeducationlevel, is_valid_education_level, "Edukasi tidak valid")


def sanitize_report(report: ReportT) -> ReportT:
    """Return a copy of the report with every text field HTML-escaped."""
    changes = {
        name: sanitize_optional(getattr(report, name)) for name in _SANITIZED_REPORT_FIELDS
    }
    return replace(report, **changes)


def validate_update_request(request: UpdateRequest) -> None:
    """Check an update request, raising ValidationError if it is not acceptable."""
    if request.proof and not is_valid_url(request.proof):
        raise ValidationError("Haru berupa link URL yang valid!")
    if request.status is not None and not is_valid_status(request.status):
        raise ValidationError(
            "Status harus berupa salah satu dari 'Received', 'Processing', "
            "'Completed', dan 'Rejected'"
        )