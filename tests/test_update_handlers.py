from datetime import datetime
from http import HTTPStatus

import pytest
from sqlalchemy import create_engine

from suarakan.jwt import JwtClaims
from suarakan.models import NewUpdate
from suarakan.schema import create_tables
from suarakan.services import UpdateService
from suarakan.update_handlers import get_update, update_update
from suarakan.validation import escape_text


def make_claims(user_type: str, user_id: int = 1) -> JwtClaims:
    return JwtClaims(
        token_type="access",
        exp=4102444800,
        iat=1700000000,
        jti="jti-1",
        user_id=user_id,
        email="someone@example.com",
        full_name="Test User",
        user_type=user_type,
        is_email_verified=True,
    )


ADMIN = make_claims("ADMIN", 1)
REPORTER = make_claims("PELAPOR", 2)


@pytest.fixture
def conn():
    engine = create_engine("sqlite://")
    create_tables(engine)
    with engine.connect() as connection:
        yield connection
    engine.dispose()


@pytest.fixture
def stored(conn):
    return UpdateService(conn).create_update(
        NewUpdate(
            createdat=datetime(2023, 5, 1, 12, 0, 0),
            reportid=1,
            remarks="",
            proof="",
            status="Received",
        )
    )


def test_get_update(conn, stored):
    response = get_update(conn, stored.updateid)
    assert response.status == HTTPStatus.OK
    assert response.body == stored.to_dict()


def test_get_missing_update(conn):
    response = get_update(conn, 5)
    assert response.status == HTTPStatus.NOT_FOUND
    assert response.body == {"error": "Update not found"}


def test_update_status_by_admin(conn, stored):
    response = update_update(conn, ADMIN, stored.updateid, {"status": "Processing"})
    assert response.status == HTTPStatus.OK
    assert response.body["status"] == "Processing"
    assert response.body["remarks"] == ""
    assert response.body["reportid"] == stored.reportid
    assert response.body["createdat"] == stored.to_dict()["createdat"]
    assert response.body["updatedat"] is not None


def test_update_status_validation(conn, stored):
    response = update_update(conn, ADMIN, stored.updateid, {"status": "InvalidStatus"})
    assert response.status == HTTPStatus.BAD_REQUEST
    assert "Status harus berupa salah satu dari" in response.body["error"]


def test_update_invalid_proof(conn, stored):
    response = update_update(conn, ADMIN, stored.updateid, {"proof": "not a url"})
    assert response.status == HTTPStatus.BAD_REQUEST
    assert response.body == {"error": "Haru berupa link URL yang valid!"}


def test_update_valid_proof(conn, stored):
    proof = "https://example.com/update.pdf"
    response = update_update(conn, ADMIN, stored.updateid, {"proof": proof})
    assert response.status == HTTPStatus.OK
    assert response.body["proof"] == proof
    assert response.body["status"] == "Received"


def test_update_remarks_are_escaped(conn, stored):
    remarks = "<b>checked</b> & noted"
    response = update_update(conn, ADMIN, stored.updateid, {"remarks": remarks})
    assert response.status == HTTPStatus.OK
    assert response.body["remarks"] == escape_text(remarks)
    assert "<" not in response.body["remarks"]


def test_update_as_reporter_forbidden(conn, stored):
    response = update_update(conn, REPORTER, stored.updateid, {"status": "Completed"})
    assert response.status == HTTPStatus.FORBIDDEN
    assert response.body == {"error": "Admin access required"}
    assert get_update(conn, stored.updateid).body["status"] == "Received"


def test_update_without_token(conn, stored):
    response = update_update(conn, None, stored.updateid, {"status": "Completed"})
    assert response.status == HTTPStatus.UNAUTHORIZED
    assert response.body == {"error": "Authentication failed"}


def test_update_missing(conn):
    response = update_update(conn, ADMIN, 9, {"status": "Completed"})
    assert response.status == HTTPStatus.NOT_FOUND


def test_update_bad_payload(conn, stored):
    response = update_update(conn, ADMIN, stored.updateid, {"status": 3})
    assert response.status == HTTPStatus.UNPROCESSABLE_ENTITY