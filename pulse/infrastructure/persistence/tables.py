"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.types import JSON

from pulse.domain.record.model.value import MAX_DIMENSION_KEY_LENGTH

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# PROJECTS TABLE
# ============================================================================
projects_table = Table(
    "projects",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("uuid", String(36), nullable=False, unique=True),
    Column("name", String(255), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)


# ============================================================================
# DATA SOURCES TABLE
# ============================================================================
data_sources_table = Table(
    "data_sources",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "project_id",
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("key", String(64), nullable=False),
    Column("name", String(255), nullable=False),
    Column("config", JSON, nullable=False),  # {"dimensions": [{"key", "name"}, ...]}
    Column("created_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("project_id", "key", name="uq_data_source_project_key"),
)


# ============================================================================
# RECORDS TABLE (fixed fields only)
# ============================================================================
records_table = Table(
    "records",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "data_source_id",
        Integer,
        ForeignKey("data_sources.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("value", Float, nullable=False),
    Column("year", Integer, nullable=False),
    Column("month", Integer, nullable=False),
    Column("day", Integer, nullable=False),
)

Index(
    "idx_records_data_source_date",
    records_table.c.data_source_id,
    records_table.c.year,
    records_table.c.month,
    records_table.c.day,
)


# ============================================================================
# RECORD DIMENSIONS TABLE (one row per dimension value of a record)
# ============================================================================
record_dimensions_table = Table(
    "record_dimensions",
    metadata,
    Column(
        "record_id",
        Integer,
        ForeignKey("records.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("key", String(MAX_DIMENSION_KEY_LENGTH), primary_key=True),
    Column("value", Text, nullable=False),  # JSON-encoded scalar
)

Index("idx_record_dimensions_key_value", record_dimensions_table.c.key, record_dimensions_table.c.value)


# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(320), nullable=False, unique=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
)


# ============================================================================
# ROLES TABLE
# ============================================================================
roles_table = Table(
    "roles",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(64), nullable=False, unique=True),
    Column("scope", Integer, nullable=False),  # AccessScope value
)


# ============================================================================
# USER ROLES TABLE (role bindings; project_id 0 means every project)
# ============================================================================
user_roles_table = Table(
    "user_roles",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "user_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "role_id",
        Integer,
        ForeignKey("roles.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("project_id", Integer, nullable=False),
    Column("assigned_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("user_id", "role_id", "project_id", name="uq_user_role_project"),
)

Index("idx_user_roles_user_id", user_roles_table.c.user_id)
