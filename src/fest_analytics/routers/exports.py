"""Admin CSV export endpoints"""

import logging
import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session

from fest_analytics.auth.dependencies import require_admin_key
from fest_analytics.models.database import get_db
from fest_analytics.services.aggregator import select_payers
from fest_analytics.services.report_service import (
    RegistrationFilters,
    filter_registrations,
    generate_event_participants_csv,
    generate_individual_participants_csv,
    generate_nba_csv,
    generate_payment_csv,
    generate_registrations_csv,
    generate_team_participants_csv,
)
from fest_analytics.services.snapshot_service import SnapshotService
from fest_analytics.utils.csv_utils import report_filename, safe_filename_part

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/exports",
    tags=["Exports"],
    dependencies=[Depends(require_admin_key)],
)


def csv_response(content: str, filename: str, partial: bool = False) -> Response:
    headers = {"Content-Disposition": f"attachment; filename={filename}"}
    if partial:
        headers["X-Partial-Data"] = "true"
    return Response(
        content=content.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers=headers,
    )


def _individual_participants(svc: SnapshotService, filters: RegistrationFilters):
    snapshot = svc.load_registrations(status="confirmed", subcategory="Individual")
    return generate_individual_participants_csv(snapshot.records).to_csv(), snapshot


def _team_participants(svc: SnapshotService, filters: RegistrationFilters):
    snapshot = svc.load_registrations(status="confirmed", subcategory="Group")
    return generate_team_participants_csv(snapshot.records).to_csv(), snapshot


def _payments(svc: SnapshotService, filters: RegistrationFilters):
    # Members are resolved against every registration, then unconfirmed payers dropped
    snapshot = svc.load_registrations()
    confirmed = [r for r in select_payers(snapshot.records) if r.status == "confirmed"]
    return generate_payment_csv(confirmed).to_csv(), snapshot


def _nba_report(svc: SnapshotService, filters: RegistrationFilters):
    snapshot = svc.load_registrations()
    return generate_nba_csv(snapshot.records), snapshot


def _registrations(svc: SnapshotService, filters: RegistrationFilters):
    snapshot = svc.load_registrations()
    matching = filter_registrations(snapshot.records, filters)
    return generate_registrations_csv(matching).to_csv(), snapshot


REPORTS = {
    "individual_participants": _individual_participants,
    "team_participants": _team_participants,
    "payments": _payments,
    "nba_report": _nba_report,
    "registrations": _registrations,
}


@router.get("/events/{event_id}/participants")
def export_event_participants(event_id: uuid.UUID, db: Session = Depends(get_db)):
    """Confirmed participants of one event, as sent to its coordinators"""
    svc = SnapshotService(db)
    event = svc.get_event(event_id)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")

    snapshot = svc.load_registrations(status="confirmed", event_id=event_id)
    if not snapshot.records:
        raise HTTPException(status_code=404, detail="No confirmed participants to export")

    content = generate_event_participants_csv(
        event, snapshot.records, coordinators=svc.get_event_coordinators(event_id)
    )
    filename = (
        f"{safe_filename_part(event.name)}_Participants_{date.today().isoformat()}.csv"
    )
    logger.info(f"Exported {len(snapshot.records)} participants of event {event_id}")
    return csv_response(content, filename, snapshot.partial)


@router.get("/{report}")
def export_report(
    report: str,
    category: Optional[str] = None,
    subcategory: Optional[str] = None,
    event_id: Optional[str] = None,
    status: Optional[str] = None,
    gender: Optional[str] = None,
    school: Optional[str] = None,
    department: Optional[str] = None,
    program: Optional[str] = None,
    year_of_study: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    Download a report as CSV.

    The filter query parameters only apply to the ``registrations`` report.
    """
    generate = REPORTS.get(report)
    if generate is None:
        raise HTTPException(status_code=404, detail=f"Unknown report '{report}'")

    filters = RegistrationFilters(
        category=category,
        subcategory=subcategory,
        event_id=event_id,
        status=status,
        gender=gender,
        school=school,
        department=department,
        program=program,
        year_of_study=year_of_study,
        search=search,
    )
    content, snapshot = generate(SnapshotService(db), filters)

    logger.info(f"Exported report {report} from {len(snapshot.records)} registrations")
    return csv_response(content, report_filename(report), snapshot.partial)
