"""Init fest tables

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-01-12 10:42:07.518233

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# SQLModel persists enum member names, not values
event_category = sa.Enum("CULTURAL", "SPORTS", "TECHNICAL", name="eventcategory")
event_subcategory = sa.Enum("INDIVIDUAL", "GROUP", name="eventsubcategory")
registration_status = sa.Enum(
    "PENDING", "CONFIRMED", "REJECTED", name="registrationstatus"
)
payment_mode = sa.Enum("CASH", "HYBRID", "ONLINE", name="paymentmode")


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "events",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.VARCHAR(), nullable=False),
        sa.Column("category", event_category, nullable=False),
        sa.Column("subcategory", event_subcategory, nullable=False),
        sa.Column("fee", sa.INTEGER(), nullable=False),
        sa.Column("min_team_size", sa.INTEGER(), nullable=False),
        sa.Column("max_team_size", sa.INTEGER(), nullable=False),
        sa.Column("event_date", sa.Date(), nullable=True),
        sa.Column("venue", sa.VARCHAR(), nullable=True),
        sa.Column("capacity", sa.INTEGER(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_events_name", "events", ["name"])
    op.create_index("ix_events_category", "events", ["category"])

    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("full_name", sa.VARCHAR(), nullable=False),
        sa.Column("roll_number", sa.VARCHAR(), nullable=True),
        sa.Column("college_email", sa.VARCHAR(), nullable=True),
        sa.Column("gender", sa.VARCHAR(), nullable=True),
        sa.Column("school", sa.VARCHAR(), nullable=True),
        sa.Column("department", sa.VARCHAR(), nullable=True),
        sa.Column("program", sa.VARCHAR(), nullable=True),
        sa.Column("year_of_study", sa.VARCHAR(), nullable=True),
        sa.Column("phone", sa.VARCHAR(), nullable=True),
        sa.Column("role", sa.VARCHAR(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_profiles_roll_number", "profiles", ["roll_number"])
    op.create_index("ix_profiles_college_email", "profiles", ["college_email"])

    op.create_table(
        "registrations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("event_id", sa.Uuid(), nullable=False),
        sa.Column("profile_id", sa.Uuid(), nullable=False),
        sa.Column("status", registration_status, nullable=False),
        sa.Column("payment_mode", payment_mode, nullable=False),
        sa.Column("transaction_id", sa.VARCHAR(), nullable=True),
        sa.Column("payment_screenshot_path", sa.VARCHAR(), nullable=True),
        sa.Column("team_members", sa.JSON(), nullable=True),
        sa.Column("registered_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"]),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    # Analytics pages filter by status and event and page by registered_at
    op.create_index("ix_registrations_event_id", "registrations", ["event_id"])
    op.create_index("ix_registrations_profile_id", "registrations", ["profile_id"])
    op.create_index("ix_registrations_status", "registrations", ["status"])
    op.create_index("ix_registrations_registered_at", "registrations", ["registered_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("registrations")
    op.drop_table("profiles")
    op.drop_table("events")
    event_category.drop(op.get_bind(), checkfirst=True)
    event_subcategory.drop(op.get_bind(), checkfirst=True)
    registration_status.drop(op.get_bind(), checkfirst=True)
    payment_mode.drop(op.get_bind(), checkfirst=True)
