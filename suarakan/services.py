"""Database access for publications, reports and status updates."""

from __future__ import annotations

from dataclasses import fields
from typing import Any

from sqlalchemy import Column, Table, delete, insert, select, update
from sqlalchemy.engine import Connection

from suarakan.models import (
    NewPublication,
    NewReport,
    NewUpdate,
    Publication,
    Report,
    Update,
)
from suarakan.schema import publications, reports, updates


class NotFoundError(LookupError):
    """Raised when a requested row does not exist."""


def _columns_of(record: Any) -> dict[str, Any]:
    return {f.name: getattr(record, f.name) for f in fields(record)}


class _TableAccess:
    _table: Table
    _model: type

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    @property
    def _key(self) -> Column:
        return next(iter(self._table.primary_key.columns))

    def _to_model(self, row: Any) -> Any:
        return self._model(**row._mapping)

    def _insert(self, record: Any) -> Any:
        result = self._conn.execute(insert(self._table).values(**_columns_of(record)))
        return self._get(result.inserted_primary_key[0])

    def _get(self, key: Any) -> Any:
        row = self._conn.execute(select(self._table).where(self._key == key)).first()
        if row is None:
            raise NotFoundError(f"{self._table.name}: record {key} not found")
        return self._to_model(row)

    def _first(self, *criteria: Any) -> Any:
        stmt = select(self._table).where(*criteria).order_by(self._key).limit(1)
        row = self._conn.execute(stmt).first()
        if row is None:
            raise NotFoundError(f"{self._table.name}: record not found")
        return self._to_model(row)

    def _all(self, *criteria: Any) -> list[Any]:
        stmt = select(self._table)
        if criteria:
            stmt = stmt.where(*criteria)
        return [self._to_model(row) for row in self._conn.execute(stmt.order_by(self._key))]

    def _update(self, key: Any, record: Any) -> Any:
        # Unset optional fields leave the stored value untouched.
        changes = {
            name: value
            for name, value in _columns_of(record).items()
            if name != self._key.name and value is not None
        }
        result = self._conn.execute(
            update(self._table).where(self._key == key).values(**changes)
        )
        if result.rowcount == 0:
            raise NotFoundError(f"{self._table.name}: record {key} not found")
        return self._get(key)

    def _delete(self, *criteria: Any) -> int:
        return self._conn.execute(delete(self._table).where(*criteria)).rowcount


class PublicationService(_TableAccess):
    """Stores and retrieves publications."""

    _table = publications
    _model = Publication

    def create_publication(self, new_publication: NewPublication) -> Publication:
        return self._insert(new_publication)

    def get_publications(self) -> list[Publication]:
        return self._all()

    def get_publication_by_id(self, publication_id: int) -> Publication:
        return self._get(publication_id)

    def update_publication(self, publication_id: int, publication: Publication) -> Publication:
        return self._update(publication_id, publication)

    def delete_publication(self, publication_id: int) -> int:
        return self._delete(publications.c.publicationid == publication_id)


class ReportService(_TableAccess):
    """Stores and retrieves reports."""

    _table = reports
    _model = Report

    def create_report(self, new_report: NewReport) -> Report:
        return self._insert(new_report)

    def get_all_reports(self) -> list[Report]:
        return self._all()

    def get_reports_by_reporter(self, reporter_id: int) -> list[Report]:
        return self._all(reports.c.reporterid == reporter_id)

    def get_report_by_id(self, report_id: int) -> Report:
        return self._get(report_id)

    def update_report(self, report_id: int, report: Report) -> Report:
        return self._update(report_id, report)

    def delete_report(self, report_id: int) -> int:
        return self._delete(reports.c.reportid == report_id)


class UpdateService(_TableAccess):
    """Stores and retrieves status updates of reports."""

    _table = updates
    _model = Update

    def create_update(self, new_update: NewUpdate) -> Update:
        return self._insert(new_update)

    def get_update_by_id(self, update_id: int) -> Update:
        return self._get(update_id)

    def get_update_by_report_id(self, report_id: int) -> Update:
        return self._first(updates.c.reportid == report_id)

    def update_update(self, update_id: int, update: Update) -> Update:
        return self._update(update_id, update)

    def delete_update_by_id(self, update_id: int) -> int:
        return self._delete(updates.c.updateid == update_id)

    def delete_update_by_report_id(self, report_id: int) -> int:
        return self._delete(updates.c.reportid == report_id)