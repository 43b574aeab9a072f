"""Snapshot service: loads registrations joined with events and profiles"""

import logging
import uuid
from typing import Optional

from sqlmodel import Session, select

from fest_analytics.config import config
from fest_analytics.models.event import Event, EventSubcategory
from fest_analytics.models.event_assignment import EventAssignment
from fest_analytics.models.profile import Profile
from fest_analytics.models.registration import Registration, RegistrationStatus
from fest_analytics.models.snapshot import (
    EventInfo,
    ProfileInfo,
    RegistrationRecord,
    RegistrationSnapshot,
)

logger = logging.getLogger(__name__)


def _enum_value(value):
    return value.value if hasattr(value, "value") else value


def event_to_info(event: Event) -> EventInfo:
    return EventInfo(
        id=str(event.id),
        name=event.name,
        category=_enum_value(event.category),
        subcategory=_enum_value(event.subcategory),
        fee=event.fee,
        min_team_size=event.min_team_size,
        max_team_size=event.max_team_size,
        event_date=event.event_date,
        venue=event.venue,
        capacity=event.capacity,
    )


def profile_to_info(profile: Profile) -> ProfileInfo:
    return ProfileInfo(
        id=str(profile.id),
        full_name=profile.full_name,
        roll_number=profile.roll_number,
        college_email=profile.college_email,
        gender=profile.gender,
        school=profile.school,
        department=profile.department,
        program=profile.program,
        year_of_study=profile.year_of_study,
        phone=profile.phone,
    )


def to_record(
    registration: Registration,
    event: Optional[Event],
    profile: Optional[Profile],
) -> RegistrationRecord:
    return RegistrationRecord(
        id=str(registration.id),
        profile_id=str(registration.profile_id) if registration.profile_id else None,
        status=_enum_value(registration.status),
        payment_mode=_enum_value(registration.payment_mode),
        transaction_id=registration.transaction_id,
        registered_at=registration.registered_at,
        event=event_to_info(event) if event is not None else None,
        profile=profile_to_info(profile) if profile is not None else None,
        team_members=registration.team_members,
    )


class SnapshotService:
    """Builds complete registration snapshots for the analytics and report code"""

    def __init__(
        self,
        db_session: Session,
        batch_size: Optional[int] = None,
        max_rows: Optional[int] = None,
    ):
        self.db = db_session
        self.batch_size = batch_size or config["export_batch_size"]
        self.max_rows = max_rows or config["export_max_rows"]

    def load_registrations(
        self,
        status: Optional[str] = None,
        event_id: Optional[uuid.UUID] = None,
        subcategory: Optional[str] = None,
    ) -> RegistrationSnapshot:
        """
        Read registrations page by page until a short page or the row cap.

        Args:
            status: Only registrations with this status ("pending", "confirmed", "rejected")
            event_id: Only registrations for this event
            subcategory: Only registrations of "Individual" or "Group" events

        Returns:
            RegistrationSnapshot, flagged partial when the row cap cut the scan short

        Raises:
            ValueError: If status or subcategory is not a known value
        """
        stmt = (
            select(Registration, Event, Profile)
            .outerjoin(Event, Registration.event_id == Event.id)
            .outerjoin(Profile, Registration.profile_id == Profile.id)
        )
        if status is not None:
            stmt = stmt.where(Registration.status == RegistrationStatus(status))
        if event_id is not None:
            stmt = stmt.where(Registration.event_id == event_id)
        if subcategory is not None:
            stmt = stmt.where(Event.subcategory == EventSubcategory(subcategory))
        stmt = stmt.order_by(Registration.registered_at, Registration.id)

        records: list[RegistrationRecord] = []
        partial = False
        offset = 0
        while True:
            limit = min(self.batch_size, self.max_rows - offset)
            rows = self.db.exec(stmt.offset(offset).limit(limit)).all()
            records.extend(to_record(reg, event, profile) for reg, event, profile in rows)
            offset += len(rows)

            if len(rows) < limit:
                break
            if offset >= self.max_rows:
                # One more row means the cap truncated the data set
                extra = self.db.exec(stmt.offset(offset).limit(1)).first()
                partial = extra is not None
                break

        if partial:
            logger.warning(
                f"Registration snapshot truncated at {self.max_rows} rows; results are partial"
            )
        logger.info(
            f"Loaded {len(records)} registrations "
            f"(status={status}, event_id={event_id}, subcategory={subcategory})"
        )
        return RegistrationSnapshot(records=records, partial=partial)

    def get_event(self, event_id: uuid.UUID) -> Optional[EventInfo]:
        """Get an event by ID"""
        event = self.db.exec(select(Event).where(Event.id == event_id)).first()
        return event_to_info(event) if event else None

    def get_event_coordinators(self, event_id: uuid.UUID) -> list[str]:
        """Full names of the coordinators assigned to an event, in assignment order"""
        stmt = (
            select(Profile.full_name)
            .join(EventAssignment, EventAssignment.coordinator_id == Profile.id)
            .where(EventAssignment.event_id == event_id)
            .order_by(EventAssignment.assigned_at, EventAssignment.id)
        )
        return [name for name in self.db.exec(stmt).all() if name]
