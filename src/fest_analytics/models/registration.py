"""SQLModel Registration model"""

import enum
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel


class RegistrationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


class PaymentMode(str, enum.Enum):
    CASH = "cash"
    HYBRID = "hybrid"
    ONLINE = "online"


class Registration(SQLModel, table=True):
    """One participant's sign-up for an event.

    For team events only the leader's row carries ``team_members``; every
    other member has their own row for the same event with an empty list.
    """

    __tablename__ = "registrations"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    event_id: uuid.UUID = Field(foreign_key="events.id", index=True)
    profile_id: uuid.UUID = Field(foreign_key="profiles.id", index=True)
    status: RegistrationStatus = Field(default=RegistrationStatus.PENDING, index=True)
    payment_mode: PaymentMode = Field(default=PaymentMode.HYBRID)
    transaction_id: Optional[str] = None
    payment_screenshot_path: Optional[str] = None
    team_members: list = Field(default_factory=list, sa_column=Column(JSON))
    registered_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), index=True),
    )
