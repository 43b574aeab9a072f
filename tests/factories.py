"""Builders for snapshot records used across the aggregator and report tests"""

from datetime import datetime
from typing import Optional

from fest_analytics.models.snapshot import RegistrationRecord


def event(
    event_id: str,
    name: Optional[str] = None,
    category: str = "Cultural",
    subcategory: str = "Individual",
    fee: float = 100,
    **extra,
) -> dict:
    return {
        "id": event_id,
        "name": name or f"Event {event_id}",
        "category": category,
        "subcategory": subcategory,
        "fee": fee,
        **extra,
    }


def profile(profile_id: str, **fields) -> dict:
    data = {
        "id": profile_id,
        "full_name": f"Student {profile_id}",
        "roll_number": f"R-{profile_id}",
        "college_email": f"{profile_id}@college.edu",
        "gender": "Male",
        "school": "SOET",
        "department": "CSE",
        "year_of_study": "2nd Year",
        "phone": "9000000000",
    }
    data.update(fields)
    return data


def member(profile_id: str, **fields) -> dict:
    data = {
        "id": profile_id,
        "name": f"Student {profile_id}",
        "email": f"{profile_id}@college.edu",
        "roll_number": f"R-{profile_id}",
    }
    data.update(fields)
    return data


def registration(
    reg_id: str,
    profile_id: Optional[str],
    event_data: Optional[dict],
    status: str = "confirmed",
    payment_mode: Optional[str] = "online",
    team: Optional[list] = None,
    profile_fields: Optional[dict] = None,
    **extra,
) -> RegistrationRecord:
    return RegistrationRecord(
        id=reg_id,
        profile_id=profile_id,
        status=status,
        payment_mode=payment_mode,
        transaction_id=f"TXN-{reg_id}" if payment_mode else None,
        registered_at=datetime(2026, 2, 14, 10, 30),
        profile=profile(profile_id, **(profile_fields or {})) if profile_id else None,
        event=event_data,
        team_members=team or [],
        **extra,
    )


def team(event_data: dict, leader_id: str, member_ids: list[str], **kwargs):
    """Leader row with the team list plus one empty-list row per member"""
    rows = [
        registration(
            f"reg-{leader_id}-{event_data['id']}",
            leader_id,
            event_data,
            team=[member(mid) for mid in member_ids],
            **kwargs,
        )
    ]
    for mid in member_ids:
        rows.append(
            registration(
                f"reg-{mid}-{event_data['id']}",
                mid,
                event_data,
                payment_mode=None,
                **{k: v for k, v in kwargs.items() if k != "payment_mode"},
            )
        )
    return rows
