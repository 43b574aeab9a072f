"""Database models for Fest Analytics"""

from fest_analytics.models.event import Event
from fest_analytics.models.event_assignment import EventAssignment
from fest_analytics.models.profile import Profile
from fest_analytics.models.registration import Registration

__all__ = [
    "Event",
    "EventAssignment",
    "Profile",
    "Registration",
]
