"""SQLModel Event model"""

import enum
import uuid
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


class EventCategory(str, enum.Enum):
    CULTURAL = "Cultural"
    SPORTS = "Sports"
    TECHNICAL = "Technical"


class EventSubcategory(str, enum.Enum):
    INDIVIDUAL = "Individual"
    GROUP = "Group"


class Event(SQLModel, table=True):
    """A single fest activity that students register for"""

    __tablename__ = "events"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(index=True)
    category: EventCategory = Field(index=True)
    subcategory: EventSubcategory = Field(default=EventSubcategory.INDIVIDUAL)
    fee: float = Field(default=0, ge=0)  # INR
    min_team_size: int = Field(default=1)
    max_team_size: int = Field(default=1)
    event_date: Optional[date] = None
    venue: Optional[str] = None
    capacity: Optional[int] = None
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True)),
    )
