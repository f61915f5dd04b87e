"""Database tables used by the service."""

from __future__ import annotations

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    Uuid,
)
from sqlalchemy.engine import Engine

metadata = MetaData()

# SQLite only auto-increments INTEGER primary keys.
_BIG_ID = BigInteger().with_variant(Integer(), "sqlite")
_TIMESTAMPTZ = DateTime(timezone=True)

users = Table(
    "users",
    metadata,
    Column("userid", Integer, primary_key=True),
    Column("fullname", String(50), nullable=False),
    Column("email", String(50), nullable=False),
    Column("password", String(255), nullable=False),
    Column("role", String(10), nullable=False),
)

admins = Table(
    "admins",
    metadata,
    Column("adminid", Integer, ForeignKey("users.userid"), primary_key=True),
)

auth_group = Table(
    "auth_group",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(150), nullable=False),
)

django_content_type = Table(
    "django_content_type",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("app_label", String(100), nullable=False),
    Column("model", String(100), nullable=False),
)

auth_permission = Table(
    "auth_permission",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("content_type_id", Integer, ForeignKey("django_content_type.id"), nullable=False),
    Column("codename", String(100), nullable=False),
)

auth_group_permissions = Table(
    "auth_group_permissions",
    metadata,
    Column("id", _BIG_ID, primary_key=True),
    Column("group_id", Integer, ForeignKey("auth_group.id"), nullable=False),
    Column("permission_id", Integer, ForeignKey("auth_permission.id"), nullable=False),
)

authentication_user = Table(
    "authentication_user",
    metadata,
    Column("id", _BIG_ID, primary_key=True),
    Column("password", String(128), nullable=False),
    Column("last_login", _TIMESTAMPTZ, nullable=True),
    Column("is_superuser", Boolean, nullable=False),
    Column("first_name", String(150), nullable=False),
    Column("last_name", String(150), nullable=False),
    Column("is_staff", Boolean, nullable=False),
    Column("is_active", Boolean, nullable=False),
    Column("date_joined", _TIMESTAMPTZ, nullable=False),
    Column("email", String(254), nullable=False),
    Column("user_type", String(10), nullable=False),
    Column("is_email_verified", Boolean, nullable=False),
    Column("full_name", String(255), nullable=False),
    Column("phone_number", String(15), nullable=False),
)

authentication_user_groups = Table(
    "authentication_user_groups",
    metadata,
    Column("id", _BIG_ID, primary_key=True),
    Column("user_id", BigInteger, ForeignKey("authentication_user.id"), nullable=False),
    Column("group_id", Integer, ForeignKey("auth_group.id"), nullable=False),
)

authentication_user_user_permissions = Table(
    "authentication_user_user_permissions",
    metadata,
    Column("id", _BIG_ID, primary_key=True),
    Column("user_id", BigInteger, ForeignKey("authentication_user.id"), nullable=False),
    Column("permission_id", Integer, ForeignKey("auth_permission.id"), nullable=False),
)

authentication_userprofile = Table(
    "authentication_userprofile",
    metadata,
    Column("id", _BIG_ID, primary_key=True),
    Column("reporter_id", Uuid, nullable=False),
    Column("occupation", String(255), nullable=False),
    Column("date_of_birth", Date, nullable=True),
    Column("official_address", Text, nullable=False),
    Column("fax_number", String(20), nullable=False),
    Column("created_at", _TIMESTAMPTZ, nullable=False),
    Column("updated_at", _TIMESTAMPTZ, nullable=False),
    Column("user_id", BigInteger, ForeignKey("authentication_user.id"), nullable=False),
)

django_admin_log = Table(
    "django_admin_log",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("action_time", _TIMESTAMPTZ, nullable=False),
    Column("object_id", Text, nullable=True),
    Column("object_repr", String(200), nullable=False),
    Column("action_flag", SmallInteger, nullable=False),
    Column("change_message", Text, nullable=False),
    Column("content_type_id", Integer, ForeignKey("django_content_type.id"), nullable=True),
    Column("user_id", BigInteger, ForeignKey("authentication_user.id"), nullable=False),
)

django_migrations = Table(
    "django_migrations",
    metadata,
    Column("id", _BIG_ID, primary_key=True),
    Column("app", String(255), nullable=False),
    Column("name", String(255), nullable=False),
    Column("applied", _TIMESTAMPTZ, nullable=False),
)

django_session = Table(
    "django_session",
    metadata,
    Column("session_key", String(40), primary_key=True),
    Column("session_data", Text, nullable=False),
    Column("expire_date", _TIMESTAMPTZ, nullable=False),
)

publications = Table(
    "publications",
    metadata,
    Column("publicationid", Integer, primary_key=True),
    Column("title", String(255), nullable=False),
    Column("createdat", DateTime, nullable=False),
    Column("updatedat", DateTime, nullable=True),
    Column("description", Text, nullable=True),
    Column("filelink", String(255), nullable=True),
    Column("adminid", BigInteger, ForeignKey("authentication_user.id"), nullable=True),
)

reporters = Table(
    "reporters",
    metadata,
    Column("reporterid", Integer, ForeignKey("users.userid"), primary_key=True),
    Column("phonenum", String(20), nullable=True),
    Column("occupation", String(25), nullable=True),
    Column("dateofbirth", Date, nullable=True),
    Column("officialaddress", Text, nullable=True),
    Column("faxnum", String(20), nullable=True),
    Column("relationship", String(50), nullable=True),
)

reports = Table(
    "reports",
    metadata,
    Column("reportid", Integer, primary_key=True),
    Column("createdat", DateTime, nullable=True),
    Column("updatedat", DateTime, nullable=True),
    Column("reporterfullname", Text, nullable=True),
    Column("reporterphonenum", Text, nullable=True),
    Column("reporteraddress", Text, nullable=True),
    Column("reporterrelationship", Text, nullable=True),
    Column("incidentlocation", Text, nullable=False),
    Column("incidenttime", DateTime, nullable=False),
    Column("incidentdescription", Text, nullable=True),
    Column("incidentvictimneeds", Text, nullable=True),
    Column("incidentproof", Text, nullable=True),
    Column("victimfullname", Text, nullable=False),
    Column("victimnik", Text, nullable=True),
    Column("victimemail", Text, nullable=True),
    Column("victimaddress", Text, nullable=True),
    Column("victimphonenum", Text, nullable=True),
    Column("victimoccupation", Text, nullable=True),
    Column("victimsex", Text, nullable=True),
    Column("victimdateofbirth", Date, nullable=True),
    Column("victimplaceofbirth", Text, nullable=True),
    Column("victimeducationlevel", Text, nullable=True),
    Column("victimmarriagestatus", Text, nullable=True),
    Column("accusedfullname", Text, nullable=False),
    Column("accusedaddress", Text, nullable=True),
    Column("accusedphonenum", Text, nullable=True),
    Column("accusedoccupation", Text, nullable=True),
    Column("accusedsex", Text, nullable=True),
    Column("accusedrelationship", Text, nullable=True),
    Column("authority", Text, nullable=False),
    Column("reporterid", BigInteger, ForeignKey("authentication_user.id"), nullable=True),
)

updates = Table(
    "updates",
    metadata,
    Column("updateid", Integer, primary_key=True),
    Column("createdat", DateTime, nullable=False),
    Column("updatedat", DateTime, nullable=True),
    Column("remarks", Text, nullable=True),
    Column("proof", String(50), nullable=True),
    Column("status", String(50), nullable=True),
    Column("reportid", Integer, ForeignKey("reports.reportid"), nullable=False),
)


def _authority_reports(name: str) -> Table:
    return Table(
        name,
        metadata,
        Column("reportid", Integer, primary_key=True),
        Column("updateid", Integer, ForeignKey("updates.updateid"), nullable=True),
    )


ham_reports = _authority_reports("ham_reports")
perempuan_reports = _authority_reports("perempuan_reports")
ui_reports = _authority_reports("ui_reports")


def create_tables(engine: Engine) -> None:
    """Create every table that does not exist yet."""
    metadata.create_all(engine)