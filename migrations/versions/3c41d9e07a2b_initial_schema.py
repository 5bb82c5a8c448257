"""initial_schema

Create the schema for pairnotes:
- Profiles (per-user pairing state)
- Public directory (email lookup for invites)
- Pairs (canonical two-member records)
- Pair invites (pending / accepted / declined)
- Notes and reports (owned by a pair)

Revision ID: 3c41d9e07a2b
Revises:
Create Date: 2026-02-16 10:12:44.318205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c41d9e07a2b"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(128), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("pair_id", sa.String(257), nullable=True),
        sa.Column("partner_id", sa.String(128), nullable=True),
        sa.Column("partner_email", sa.String(320), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "public_directory",
        sa.Column("id", sa.String(128), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_public_directory_email", "public_directory", ["email"], unique=False
    )

    op.create_table(
        "pairs",
        sa.Column("id", sa.String(257), nullable=False),
        sa.Column("members", postgresql.ARRAY(sa.String(128)), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("reactivated_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("ended_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("ended_by", sa.String(128), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("status IN ('active', 'ended')", name="ck_pairs_status"),
        sa.CheckConstraint("cardinality(members) = 2", name="ck_pairs_two_members"),
    )
    op.create_index(
        "idx_pairs_members", "pairs", ["members"], postgresql_using="gin"
    )
    op.create_index("idx_pairs_status", "pairs", ["status"])

    op.create_table(
        "pair_invites",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("pair_id", sa.String(257), nullable=False),
        sa.Column("from_uid", sa.String(128), nullable=False),
        sa.Column("to_uid", sa.String(128), nullable=False),
        sa.Column("from_email", sa.String(320), nullable=False),
        sa.Column("to_email", sa.String(320), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("accepted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'declined')",
            name="ck_pair_invites_status",
        ),
    )
    op.create_index(
        "idx_pair_invites_sender", "pair_invites", ["from_uid", "status"]
    )
    op.create_index(
        "idx_pair_invites_recipient", "pair_invites", ["to_uid", "status"]
    )

    op.create_table(
        "notes",
        sa.Column("pair_id", sa.String(257), nullable=False),
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("owner_uid", sa.String(128), nullable=False),
        sa.Column("owner_name", sa.String(255), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("pair_id", "id", name="pk_notes"),
    )
    op.create_index("idx_notes_pair_created", "notes", ["pair_id", "created_at"])

    op.create_table(
        "reports",
        sa.Column("pair_id", sa.String(257), nullable=False),
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("created_by", sa.String(128), nullable=False),
        sa.Column("period_start", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("period_end", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("notes_count", sa.Integer(), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("error", sa.String(500), nullable=True),
        sa.Column(
            "source_notes",
            postgresql.JSONB(),
            nullable=False,
            server_default="[]",
        ),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("pair_id", "id", name="pk_reports"),
        sa.CheckConstraint(
            "status IN ('generating', 'ready', 'error')", name="ck_reports_status"
        ),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("reports")
    op.drop_index("idx_notes_pair_created", table_name="notes")
    op.drop_table("notes")
    op.drop_index("idx_pair_invites_recipient", table_name="pair_invites")
    op.drop_index("idx_pair_invites_sender", table_name="pair_invites")
    op.drop_table("pair_invites")
    op.drop_index("idx_pairs_status", table_name="pairs")
    op.drop_index("idx_pairs_members", table_name="pairs")
    op.drop_table("pairs")
    op.drop_index("idx_public_directory_email", table_name="public_directory")
    op.drop_table("public_directory")
    op.drop_table("profiles")
