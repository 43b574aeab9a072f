"""SQLModel Profile model"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


class Profile(SQLModel, table=True):
    """Demographic record of a student, coordinator or admin"""

    __tablename__ = "profiles"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    full_name: str
    roll_number: Optional[str] = Field(default=None, index=True)
    college_email: Optional[str] = Field(default=None, index=True)
    gender: Optional[str] = None  # "Male", "Female" or "Other"
    school: Optional[str] = None  # "SOET", "SOP" or "SOA"
    department: Optional[str] = None
    program: Optional[str] = None
    year_of_study: Optional[str] = None  # "1st Year" .. "4th Year"
    phone: Optional[str] = None
    role: str = Field(default="student")
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True)),
    )
