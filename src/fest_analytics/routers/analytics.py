"""Admin analytics endpoints: revenue, demographics and event drill-downs"""

import logging
import uuid
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlmodel import Session

from fest_analytics.auth.dependencies import require_admin_key
from fest_analytics.models.database import get_db
from fest_analytics.models.snapshot import Amount, RegistrationRecord
from fest_analytics.services.aggregator import (
    Demographics,
    EventStats,
    RegistrationSummary,
    compute_demographics,
    compute_event_stats,
    compute_events_by_category,
    compute_registration_summary,
    compute_registrations_per_event,
    revenue_by_event,
    revenue_by_payment_mode,
    select_payers,
)
from fest_analytics.services.snapshot_service import SnapshotService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/analytics",
    tags=["Analytics"],
    dependencies=[Depends(require_admin_key)],
)

StatusFilter = Optional[Literal["pending", "confirmed", "rejected"]]


class SummaryResponse(BaseModel):
    summary: RegistrationSummary
    revenue_by_payment_mode: dict[str, Amount] = Field(
        ..., description="Confirmed revenue per payment mode, teams charged once"
    )
    revenue_by_event: dict[str, Amount] = Field(
        ..., description="Confirmed revenue per event name, highest first"
    )
    partial: bool = Field(
        default=False, description="True when the registration snapshot hit the row cap"
    )


class DemographicsResponse(BaseModel):
    demographics: Demographics
    partial: bool = False


class ChartsResponse(BaseModel):
    registrations_per_event: dict[str, int]
    events_by_category: dict[str, int]
    partial: bool = False


@router.get("/summary", response_model=SummaryResponse)
def get_summary(status: StatusFilter = None, db: Session = Depends(get_db)):
    """
    Headline statistics.

    ``status`` narrows the summary only. The revenue breakdowns always cover
    confirmed payers of the whole data set, so one snapshot is loaded
    unfiltered and narrowed here.
    """
    snapshot = SnapshotService(db).load_registrations()
    records = snapshot.records
    if status is not None:
        records = [r for r in records if r.status == status]
    confirmed = [r for r in select_payers(snapshot.records) if r.status == "confirmed"]

    return SummaryResponse(
        summary=compute_registration_summary(records),
        revenue_by_payment_mode=revenue_by_payment_mode(confirmed),
        revenue_by_event=revenue_by_event(confirmed),
        partial=snapshot.partial,
    )


@router.get("/demographics", response_model=DemographicsResponse)
def get_demographics(status: StatusFilter = "confirmed", db: Session = Depends(get_db)):
    snapshot = SnapshotService(db).load_registrations(status=status)
    return DemographicsResponse(
        demographics=compute_demographics(snapshot.records),
        partial=snapshot.partial,
    )


@router.get("/charts", response_model=ChartsResponse)
def get_charts(db: Session = Depends(get_db)):
    """Registrations per event and events per category"""
    snapshot = SnapshotService(db).load_registrations()
    return ChartsResponse(
        registrations_per_event=compute_registrations_per_event(snapshot.records),
        events_by_category=compute_events_by_category(snapshot.records),
        partial=snapshot.partial,
    )


@router.get("/events/{event_id}", response_model=EventStats)
def get_event_stats(event_id: uuid.UUID, db: Session = Depends(get_db)):
    snapshot = SnapshotService(db).load_registrations(event_id=event_id)
    stats = compute_event_stats(snapshot.records, str(event_id))
    if stats is None:
        raise HTTPException(status_code=404, detail="No registrations for this event")
    return stats


@router.get("/events/{event_id}/payers", response_model=list[RegistrationRecord])
def get_event_payers(
    event_id: uuid.UUID,
    status: StatusFilter = "pending",
    db: Session = Depends(get_db),
):
    """Registrations awaiting payment review: team leaders and individuals only.

    The member lookup runs over every registration of the event, so a member
    whose own row is pending is still hidden when the leader is confirmed.
    """
    snapshot = SnapshotService(db).load_registrations(event_id=event_id)
    payers = select_payers(snapshot.records)
    if status is not None:
        payers = [r for r in payers if r.status == status]
    logger.info(f"Event {event_id}: {len(payers)} payers with status {status}")
    return payers
