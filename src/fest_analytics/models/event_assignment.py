"""SQLModel EventAssignment model"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


class EventAssignment(SQLModel, table=True):
    """Links a coordinator's profile to an event they run"""

    __tablename__ = "event_assignments"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    event_id: uuid.UUID = Field(foreign_key="events.id", index=True)
    coordinator_id: uuid.UUID = Field(foreign_key="profiles.id")
    assigned_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True)),
    )
