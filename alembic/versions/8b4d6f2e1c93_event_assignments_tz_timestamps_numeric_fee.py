"""Add event assignments, timezone-aware timestamps and fractional fees

Revision ID: 8b4d6f2e1c93
Revises: 3f1c2a9d7b10
Create Date: 2026-02-02 16:05:41.208317

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8b4d6f2e1c93"
down_revision: Union[str, Sequence[str], None] = "3f1c2a9d7b10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TIMESTAMP_COLUMNS = (
    ("events", "created_at"),
    ("profiles", "created_at"),
    ("registrations", "registered_at"),
)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "event_assignments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("event_id", sa.Uuid(), nullable=False),
        sa.Column("coordinator_id", sa.Uuid(), nullable=False),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"]),
        sa.ForeignKeyConstraint(["coordinator_id"], ["profiles.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_event_assignments_event_id", "event_assignments", ["event_id"])

    for table, column in TIMESTAMP_COLUMNS:
        op.alter_column(
            table,
            column,
            existing_type=sa.DateTime(),
            type_=sa.DateTime(timezone=True),
            existing_nullable=True,
        )

    # Fees entered through the admin form are not always whole rupees
    op.alter_column(
        "events",
        "fee",
        existing_type=sa.INTEGER(),
        type_=sa.Float(),
        existing_nullable=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.alter_column(
        "events",
        "fee",
        existing_type=sa.Float(),
        type_=sa.INTEGER(),
        existing_nullable=False,
    )
    for table, column in TIMESTAMP_COLUMNS:
        op.alter_column(
            table,
            column,
            existing_type=sa.DateTime(timezone=True),
            type_=sa.DateTime(),
            existing_nullable=True,
        )
    op.drop_index("ix_event_assignments_event_id", table_name="event_assignments")
    op.drop_table("event_assignments")
