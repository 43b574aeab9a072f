"""Read-only registration records consumed by the analytics and report code.

Every nested value is optional: the data store may return registrations
whose event or profile has been deleted, and team member entries are free-form
JSON written by the registration form.
"""

import math
from datetime import date, datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Whole amounts stay ints so reports print "500" rather than "500.0"
Amount = Union[int, float]


def to_amount(value: Any) -> Optional[Amount]:
    """Parse a stored fee leniently; anything non-numeric becomes None"""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class EventInfo(_Record):
    id: Optional[str] = None
    name: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    fee: Optional[Amount] = None
    min_team_size: Optional[int] = None
    max_team_size: Optional[int] = None
    event_date: Optional[date] = None
    venue: Optional[str] = None
    capacity: Optional[int] = None

    @field_validator("fee", mode="before")
    @classmethod
    def _lenient_fee(cls, v):
        return to_amount(v)


class ProfileInfo(_Record):
    id: Optional[str] = None
    full_name: Optional[str] = None
    roll_number: Optional[str] = None
    college_email: Optional[str] = None
    gender: Optional[str] = None
    school: Optional[str] = None
    department: Optional[str] = None
    program: Optional[str] = None
    year_of_study: Optional[str] = None
    phone: Optional[str] = None


class TeamMember(_Record):
    """Entry of a leader's ``team_members`` list; ``id`` is the member's profile id"""

    id: Optional[str] = None
    name: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    college_email: Optional[str] = None
    roll_number: Optional[str] = None
    school: Optional[str] = None
    department: Optional[str] = None
    year_of_study: Optional[str] = None
    gender: Optional[str] = None
    phone: Optional[str] = None

    @property
    def display_name(self) -> Optional[str]:
        return self.full_name or self.name

    @property
    def contact_email(self) -> Optional[str]:
        return self.email or self.college_email


class RegistrationRecord(_Record):
    id: Optional[str] = None
    profile_id: Optional[str] = None
    status: Optional[str] = None
    payment_mode: Optional[str] = None
    transaction_id: Optional[str] = None
    registered_at: Optional[datetime] = None
    profile: Optional[ProfileInfo] = None
    event: Optional[EventInfo] = None
    team_members: list[TeamMember] = Field(default_factory=list)

    @field_validator("team_members", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return v or []

    @property
    def is_leader(self) -> bool:
        return len(self.team_members) > 0

    @property
    def registrant_id(self) -> Optional[str]:
        if self.profile_id:
            return self.profile_id
        return self.profile.id if self.profile else None

    @property
    def event_id(self) -> Optional[str]:
        return self.event.id if self.event else None

    @property
    def fee(self) -> Amount:
        if self.event is None or self.event.fee is None:
            return 0
        return self.event.fee


class RegistrationSnapshot(BaseModel):
    """Registrations loaded in one pass; ``partial`` is set when the row cap was hit"""

    records: list[RegistrationRecord] = Field(default_factory=list)
    partial: bool = False
