# suarakan

The core of a service where people file incident reports to an authority,
administrators track each report's progress, and administrators publish
documents. The package has the data model, database access, token checks,
input validation and request handlers. It has no web framework of its own;
the handlers are plain functions that you call from whatever HTTP layer you
choose.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Overview

- `suarakan.schema.create_tables(engine)` creates every table that does not
  exist yet on an SQLAlchemy engine. The tables are defined in
  `suarakan.schema` (`reports`, `updates`, `publications`,
  `authentication_user` and others).
- `suarakan.models` holds the records: `Report`, `NewReport`, `Update`,
  `NewUpdate`, `Publication`, `NewPublication`, `User` and `Admin`.
  `Report.to_dict()`, `Update.to_dict()` and `Publication.to_dict()` give the
  JSON form; `Report.from_dict()` and `NewReport.from_dict()` build a report
  from decoded JSON and raise `ValueError` on missing or malformed fields.
  `ApiResponse` is the `HTTPStatus` and JSON-ready body that every handler
  returns.
- `suarakan.jwt.verify_token(token, secret=None)` checks an HS256 token and
  returns its `JwtClaims`. Without a secret it reads the `PODS_JWT_SECRET`
  environment variable and raises `RuntimeError` if that is not set. An
  invalid token, or one whose claims are missing or of the wrong type, raises
  `TokenError`.
- `suarakan.services` has `ReportService`, `UpdateService` and
  `PublicationService`. Each wraps an SQLAlchemy connection. A lookup for a row
  that does not exist raises `NotFoundError`.
- `suarakan.validation` checks and cleans report data and status-update
  requests. `validate_report` and `validate_update_request` raise
  `ValidationError` (with a `message` and a `status`) for the first rule
  broken; `sanitize_report` returns a copy with every text field HTML-escaped.
- Request handlers, each returning an `ApiResponse`:
  - `suarakan.report_handlers`: `create_report`, `get_reports`, `get_report`,
    `update_report`, `delete_report`
  - `suarakan.update_handlers`: `get_update`, `update_update`
  - `suarakan.publication_handlers`: `create_publication`,
    `get_publications`, `get_publication`, `update_publication`,
    `delete_publication`
  - `suarakan.greetings`: `public_message`, `protected_message`,
    `admin_message`

Handlers that need a user take the verified `JwtClaims`, or `None` when the
request was not authenticated, which gives a `401` response. Handlers that take
a payload accept either decoded JSON or the matching model or request object;
a payload that cannot be read gives a `422` response.

## Roles

A token's `user_type` decides what its holder may do:

- `PELAPOR` (reporter) creates reports. A reporter sees only their own
  reports. A reporter can edit their own report only while its status is
  `Received`, and can delete it only while its status is `Received` or
  `Rejected`.
- `ADMIN` sees every report, changes the remarks, proof and status of an
  update, and creates and deletes publications. An administrator can change
  only the publications they created.

When a report is created, an update with status `Received` is stored with it.
An update's status must be one of `Received`, `Processing`, `Completed` or
`Rejected`. Publication titles, descriptions and links have the characters
`< > ' % ; ( ) &` removed before they are stored.

## Example

```python
from sqlalchemy import create_engine

from suarakan.schema import create_tables
from suarakan.jwt import verify_token
from suarakan import report_handlers

engine = create_engine("sqlite://")
create_tables(engine)

claims = verify_token(bearer_token, "secret")
with engine.begin() as conn:
    response = report_handlers.get_reports(conn, claims)
    print(response.status, response.body)
```

Here `bearer_token` is the token taken from the request's `Authorization`
header.

## What the package does not do

- It runs no HTTP server and has no command to start one; routing requests to
  the handlers, reading the `Authorization` header and sending responses is
  left to the caller.
- It does not issue tokens or manage user accounts; it only verifies tokens.
- It has no database migrations: `create_tables` only creates tables that are
  missing.