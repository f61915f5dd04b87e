import dataclasses
from datetime import date, datetime

import pytest
from sqlalchemy import create_engine

from suarakan.models import NewPublication, NewReport, NewUpdate, Publication, Report, Update
from suarakan.schema import create_tables
from suarakan.services import (
    NotFoundError,
    PublicationService,
    ReportService,
    UpdateService,
)

CREATED = datetime(2024, 1, 2, 3, 4, 5)
LATER = datetime(2024, 2, 3, 4, 5, 6)


@pytest.fixture
def conn():
    engine = create_engine("sqlite://")
    create_tables(engine)
    with engine.connect() as connection:
        yield connection
    engine.dispose()


def _new_report(**overrides):
    values = dict(
        incidentlocation="Test Location",
        incidenttime=datetime(2023, 5, 1, 12, 0, 0),
        victimfullname="Test Victim",
        accusedfullname="Test Accused",
        authority="Universitas Indonesia",
        incidentproof="https://example.com",
        reporterid=42,
    )
    values.update(overrides)
    return NewReport(**values)


def _new_publication(title="Title", **overrides):
    return NewPublication(title=title, createdat=CREATED, adminid=1, **overrides)


# Publications


def test_create_and_get_publication(conn):
    service = PublicationService(conn)
    new = _new_publication(description="Desc", filelink="https://example.com/file.pdf")
    created = service.create_publication(new)
    assert created.publicationid >= 1
    assert created.title == new.title
    assert created.description == new.description
    assert created.createdat == CREATED
    assert service.get_publication_by_id(created.publicationid) == created


def test_get_publications_lists_all(conn):
    service = PublicationService(conn)
    service.create_publication(_new_publication("First"))
    service.create_publication(_new_publication("Second"))
    assert [p.title for p in service.get_publications()] == ["First", "Second"]


def test_missing_publication_raises(conn):
    service = PublicationService(conn)
    with pytest.raises(NotFoundError):
        service.get_publication_by_id(99)


def test_update_publication_keeps_unset_fields(conn):
    service = PublicationService(conn)
    created = service.create_publication(_new_publication(description="Keep me"))
    changed = dataclasses.replace(created, title="New", description=None, updatedat=LATER)
    updated = service.update_publication(created.publicationid, changed)
    assert updated.title == "New"
    assert updated.description == "Keep me"
    assert updated.updatedat == LATER


def test_update_missing_publication_raises(conn):
    service = PublicationService(conn)
    ghost = Publication(publicationid=5, title="x", createdat=CREATED)
    with pytest.raises(NotFoundError):
        service.update_publication(5, ghost)


def test_delete_publication_counts_rows(conn):
    service = PublicationService(conn)
    created = service.create_publication(_new_publication())
    assert service.delete_publication(created.publicationid) == 1
    assert service.delete_publication(created.publicationid) == 0
    with pytest.raises(NotFoundError):
        service.get_publication_by_id(created.publicationid)


# Reports


def test_create_report_stores_all_fields(conn):
    service = ReportService(conn)
    new = _new_report(victimdateofbirth=date(1990, 1, 2), victimemail="victim@example.com")
    created = service.create_report(new)
    stored = {k: v for k, v in dataclasses.asdict(created).items() if k != "reportid"}
    assert stored == dataclasses.asdict(new)
    assert service.get_report_by_id(created.reportid) == created


def test_reports_by_reporter_are_filtered(conn):
    service = ReportService(conn)
    mine = service.create_report(_new_report(reporterid=1))
    service.create_report(_new_report(reporterid=2))
    assert service.get_reports_by_reporter(1) == [mine]
    assert len(service.get_all_reports()) == 2
    assert service.get_reports_by_reporter(3) == []


def test_update_report(conn):
    service = ReportService(conn)
    created = service.create_report(_new_report(incidentdescription="Old"))
    changed = dataclasses.replace(
        created, incidentlocation="Elsewhere", incidentdescription=None, updatedat=LATER
    )
    updated = service.update_report(created.reportid, changed)
    assert updated.incidentlocation == "Elsewhere"
    assert updated.incidentdescription == "Old"
    assert updated.updatedat == LATER
    assert updated.reportid == created.reportid


def test_missing_report_raises(conn):
    service = ReportService(conn)
    with pytest.raises(NotFoundError):
        service.get_report_by_id(1)
    ghost = Report(reportid=1, **dataclasses.asdict(_new_report()))
    with pytest.raises(NotFoundError):
        service.update_report(1, ghost)


def test_delete_report(conn):
    service = ReportService(conn)
    created = service.create_report(_new_report())
    assert service.delete_report(created.reportid) == 1
    assert service.get_all_reports() == []


# Updates


def _report_with_update(conn, status="Received"):
    report = ReportService(conn).create_report(_new_report())
    service = UpdateService(conn)
    created = service.create_update(
        NewUpdate(createdat=CREATED, reportid=report.reportid, remarks="", proof="", status=status)
    )
    return report, service, created


def test_create_and_fetch_update(conn):
    report, service, created = _report_with_update(conn)
    assert created.status == "Received"
    assert created.reportid == report.reportid
    assert service.get_update_by_id(created.updateid) == created
    assert service.get_update_by_report_id(report.reportid) == created


def test_update_by_missing_report_raises(conn):
    service = UpdateService(conn)
    with pytest.raises(NotFoundError):
        service.get_update_by_report_id(123)
    with pytest.raises(NotFoundError):
        service.get_update_by_id(123)


def test_update_update_keeps_unset_fields(conn):
    _, service, created = _report_with_update(conn)
    changed = Update(
        updateid=created.updateid,
        createdat=created.createdat,
        reportid=created.reportid,
        updatedat=LATER,
        status="Processing",
    )
    updated = service.update_update(created.updateid, changed)
    assert updated.status == "Processing"
    assert updated.remarks == created.remarks
    assert updated.proof == created.proof
    assert updated.updatedat == LATER


def test_delete_update_by_report_id(conn):
    report, service, _ = _report_with_update(conn)
    assert service.delete_update_by_report_id(report.reportid) == 1
    with pytest.raises(NotFoundError):
        service.get_update_by_report_id(report.reportid)


def test_delete_update_by_id(conn):
    _, service, created = _report_with_update(conn)
    assert service.delete_update_by_id(created.updateid) == 1
    assert service.delete_update_by_id(created.updateid) == 0