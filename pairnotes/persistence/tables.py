"""SQLAlchemy table definitions for pairnotes.

One table per document collection. Subcollections of a pair (notes and
reports) use a composite ``(pair_id, id)`` primary key. They match the schema
defined in Alembic migrations.
"""

from sqlalchemy import (
    Column,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# PROFILES TABLE (profiles/{principalId})
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", String(128), primary_key=True),  # Identity provider UID
    Column("email", String(320), nullable=True),
    Column("name", String(255), nullable=True),
    Column("pair_id", String(257), nullable=True),
    Column("partner_id", String(128), nullable=True),
    Column("partner_email", String(320), nullable=True),
    Column("created_at", TIMESTAMP(timezone=True), nullable=False),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=False),
)

# ============================================================================
# PUBLIC DIRECTORY TABLE (publicDirectory/{principalId})
# ============================================================================
public_directory_table = Table(
    "public_directory",
    metadata,
    Column("id", String(128), primary_key=True),
    Column("email", String(320), nullable=False),  # Normalised (trim + lowercase)
    Column("name", String(255), nullable=True),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=False),
)

Index("idx_public_directory_email", public_directory_table.c.email)

# ============================================================================
# PAIRS TABLE (pairs/{pairId})
# ============================================================================
pairs_table = Table(
    "pairs",
    metadata,
    Column("id", String(257), primary_key=True),  # Canonical "{a}_{b}"
    Column("members", postgresql.ARRAY(String(128)), nullable=False),  # Sorted
    Column("status", String(20), nullable=False),  # 'active', 'ended'
    Column("created_at", TIMESTAMP(timezone=True), nullable=False),
    Column("reactivated_at", TIMESTAMP(timezone=True), nullable=True),
    Column("ended_at", TIMESTAMP(timezone=True), nullable=True),
    Column("ended_by", String(128), nullable=True),
)

Index("idx_pairs_members", pairs_table.c.members, postgresql_using="gin")
Index("idx_pairs_status", pairs_table.c.status)

# ============================================================================
# PAIR INVITES TABLE (pairInvites/{inviteId})
# ============================================================================
pair_invites_table = Table(
    "pair_invites",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("pair_id", String(257), nullable=False),
    Column("from_uid", String(128), nullable=False),
    Column("to_uid", String(128), nullable=False),
    Column("from_email", String(320), nullable=False),
    Column("to_email", String(320), nullable=False),
    Column("status", String(20), nullable=False),  # 'pending', 'accepted', 'declined'
    Column("created_at", TIMESTAMP(timezone=True), nullable=False),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
)

Index(
    "idx_pair_invites_sender",
    pair_invites_table.c.from_uid,
    pair_invites_table.c.status,
)
Index(
    "idx_pair_invites_recipient",
    pair_invites_table.c.to_uid,
    pair_invites_table.c.status,
)

# ============================================================================
# NOTES TABLE (pairs/{pairId}/notes/{noteId})
# ============================================================================
notes_table = Table(
    "notes",
    metadata,
    Column("pair_id", String(257), nullable=False),
    Column("id", String(64), nullable=False),
    Column("text", Text, nullable=False),
    Column("owner_uid", String(128), nullable=False),
    Column("owner_name", String(255), nullable=True),
    Column("created_at", TIMESTAMP(timezone=True), nullable=False),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=False),
    PrimaryKeyConstraint("pair_id", "id", name="pk_notes"),
)

Index("idx_notes_pair_created", notes_table.c.pair_id, notes_table.c.created_at)

# ============================================================================
# REPORTS TABLE (pairs/{pairId}/reports/{reportId})
# ============================================================================
reports_table = Table(
    "reports",
    metadata,
    Column("pair_id", String(257), nullable=False),
    Column("id", String(64), nullable=False),  # report_{start}__{end}
    Column("status", String(20), nullable=False),  # 'generating', 'ready', 'error'
    Column("created_at", TIMESTAMP(timezone=True), nullable=False),
    Column("created_by", String(128), nullable=False),
    Column("period_start", TIMESTAMP(timezone=True), nullable=False),
    Column("period_end", TIMESTAMP(timezone=True), nullable=False),
    Column("notes_count", Integer, nullable=True),
    Column("summary", Text, nullable=True),
    Column("error", String(500), nullable=True),
    Column(
        "source_notes",
        postgresql.JSONB,
        nullable=False,
        server_default="[]",
    ),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=False),
    PrimaryKeyConstraint("pair_id", "id", name="pk_reports"),
)
