"""CSV report generators for administrators.

The participant and payment reports are built as ordered rows keyed by
column label, plus the column descriptors needed to serialise them. The NBA
accreditation report and the single-event participant sheet have a free-form
layout and are returned as finished CSV text.

Grouping follows the first-seen order of event ids in the input, and every
counter lives inside one call, so the same input always yields the same
output.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from pydantic import BaseModel

from fest_analytics.models.snapshot import EventInfo, RegistrationRecord
from fest_analytics.services.aggregator import (
    CATEGORIES,
    revenue_by_event,
    revenue_by_payment_mode,
    select_payers,
    sum_fees,
)
from fest_analytics.utils.csv_utils import ColumnHeader, array_to_csv, join_csv_row

NA = "N/A"

PROFILE_COLUMNS = [
    "Roll Number",
    "Name",
    "Email",
    "School",
    "Department",
    "Year of Study",
    "Gender",
    "Phone",
]

INDIVIDUAL_COLUMNS = ["Event No", "Event Name", "Member No", *PROFILE_COLUMNS, "Category"]
TEAM_COLUMNS = [
    "Event No",
    "Event Name",
    "Team No",
    "Member No",
    *PROFILE_COLUMNS,
    "Category",
]
PAYMENT_COLUMNS = [
    "Event No",
    "Event Name",
    "Registration Type",
    "Participant Name",
    "Transaction ID",
    "Payment Mode",
    "Amount",
    "Status",
    "Payment Date",
]
REGISTRATION_COLUMNS = [
    "Registration ID",
    "Status",
    "Payment Mode",
    "Transaction ID",
    "Registered At",
    "Event Name",
    "Event Category",
    "Event Subcategory",
    "Event Fee",
    "Student Name",
    "Roll Number",
    "Email",
    "Phone",
    "Gender",
    "School",
    "Department",
    "Program",
    "Year of Study",
]


def headers_for(labels: Iterable[str]) -> list[ColumnHeader]:
    return [ColumnHeader(key=label, label=label) for label in labels]


@dataclass
class Report:
    """Rows keyed by column label, with the column order used for serialisation"""

    headers: list[ColumnHeader]
    rows: list[dict[str, Any]] = field(default_factory=list)

    def to_csv(self) -> str:
        return array_to_csv(self.rows, self.headers)


class RegistrationFilters(BaseModel):
    """Advanced-search filters; unset fields match everything"""

    category: Optional[str] = None
    subcategory: Optional[str] = None
    event_id: Optional[str] = None
    status: Optional[str] = None
    gender: Optional[str] = None
    school: Optional[str] = None
    department: Optional[str] = None
    program: Optional[str] = None
    year_of_study: Optional[str] = None
    search: Optional[str] = None


def _or_na(value: Any) -> Any:
    return value if value else NA


def _profile_cells(reg: RegistrationRecord) -> dict[str, Any]:
    p = reg.profile
    if p is None:
        return {column: NA for column in PROFILE_COLUMNS}
    return {
        "Roll Number": _or_na(p.roll_number),
        "Name": _or_na(p.full_name),
        "Email": _or_na(p.college_email),
        "School": _or_na(p.school),
        "Department": _or_na(p.department),
        "Year of Study": _or_na(p.year_of_study),
        "Gender": _or_na(p.gender),
        "Phone": _or_na(p.phone),
    }


def event_name_or_na(reg: RegistrationRecord) -> str:
    return (reg.event.name if reg.event else None) or NA


def _group_by_event(
    registrations: Iterable[RegistrationRecord],
) -> dict[Optional[str], list[RegistrationRecord]]:
    groups: dict[Optional[str], list[RegistrationRecord]] = {}
    for reg in registrations:
        groups.setdefault(reg.event_id, []).append(reg)
    return groups


def _by_category(registrations: Sequence[RegistrationRecord]):
    """Yield (category, event groups) in the fixed Cultural, Sports, Technical order"""
    for category in CATEGORIES:
        in_category = [
            reg for reg in registrations if reg.event and reg.event.category == category
        ]
        yield category, _group_by_event(in_category)


def generate_individual_participants_csv(
    registrations: Sequence[RegistrationRecord],
) -> Report:
    """
    One row per registration, grouped by category then event.

    Callers pass registrations of Individual events; this function does not
    filter by subcategory.
    """
    report = Report(headers=headers_for(INDIVIDUAL_COLUMNS))
    event_no = 0

    for category, groups in _by_category(registrations):
        for event_regs in groups.values():
            event_no += 1
            for idx, reg in enumerate(event_regs):
                first = idx == 0
                report.rows.append(
                    {
                        "Event No": event_no if first else "",
                        "Event Name": event_name_or_na(reg) if first else "",
                        "Member No": idx + 1,
                        **_profile_cells(reg),
                        "Category": category,
                    }
                )
    return report


def generate_team_participants_csv(
    registrations: Sequence[RegistrationRecord],
) -> Report:
    """
    One row per team member, rebuilt from each leader's ``team_members``.

    Member rows of the input are skipped: the leader is member 1 and the
    entries of the leader's list follow as members 2, 3, ...
    """
    report = Report(headers=headers_for(TEAM_COLUMNS))
    event_no = 0

    for category, groups in _by_category(registrations):
        for event_regs in groups.values():
            # A group without a leader still takes its Event No
            event_no += 1
            leaders = [reg for reg in event_regs if reg.is_leader]

            for team_no, leader in enumerate(leaders, start=1):
                first_of_event = team_no == 1
                report.rows.append(
                    {
                        "Event No": event_no if first_of_event else "",
                        "Event Name": event_name_or_na(leader) if first_of_event else "",
                        "Team No": team_no,
                        "Member No": 1,
                        **_profile_cells(leader),
                        "Category": category,
                    }
                )
                for member_no, member in enumerate(leader.team_members, start=2):
                    report.rows.append(
                        {
                            "Event No": "",
                            "Event Name": "",
                            "Team No": "",
                            "Member No": member_no,
                            "Roll Number": _or_na(member.roll_number),
                            "Name": _or_na(member.display_name),
                            "Email": _or_na(member.contact_email),
                            "School": _or_na(member.school),
                            "Department": _or_na(member.department),
                            "Year of Study": _or_na(member.year_of_study),
                            "Gender": _or_na(member.gender),
                            "Phone": _or_na(member.phone),
                            "Category": category,
                        }
                    )
    return report


def _blank_payment_row(**values: Any) -> dict[str, Any]:
    row = {column: "" for column in PAYMENT_COLUMNS}
    row.update(values)
    return row


def generate_payment_csv(registrations: Sequence[RegistrationRecord]) -> Report:
    """
    Payment ledger with one row per payer, followed by summaries.

    Team members are dropped first (per-event lookup), so the payment mode
    summary, the event revenue summary and the total all add up to the same
    amount.
    """
    payers = select_payers(registrations)

    total_revenue = sum_fees(payers)
    mode_totals = revenue_by_payment_mode(payers)
    event_totals = revenue_by_event(payers)

    report = Report(headers=headers_for(PAYMENT_COLUMNS))
    for event_no, event_regs in enumerate(_group_by_event(payers).values(), start=1):
        for idx, reg in enumerate(event_regs):
            first = idx == 0
            report.rows.append(
                {
                    "Event No": event_no if first else "",
                    "Event Name": event_name_or_na(reg) if first else "",
                    "Registration Type": "Team" if reg.is_leader else "Individual",
                    "Participant Name": _or_na(reg.profile.full_name if reg.profile else None),
                    "Transaction ID": _or_na(reg.transaction_id),
                    "Payment Mode": _or_na(reg.payment_mode),
                    "Amount": reg.fee,
                    "Status": _or_na(reg.status),
                    "Payment Date": (
                        reg.registered_at.date().isoformat() if reg.registered_at else NA
                    ),
                }
            )

    rows = report.rows
    rows.append(_blank_payment_row())
    rows.append(_blank_payment_row())
    rows.append(_blank_payment_row(**{"Event No": "PAYMENT MODE SUMMARY"}))
    for mode, amount in mode_totals.items():
        rows.append(_blank_payment_row(**{"Event Name": mode.upper(), "Amount": amount}))
    rows.append(_blank_payment_row())
    rows.append(_blank_payment_row(**{"Event No": "EVENT REVENUE SUMMARY"}))
    for name, amount in event_totals.items():
        rows.append(_blank_payment_row(**{"Event Name": name, "Amount": amount}))
    rows.append(_blank_payment_row())
    rows.append(_blank_payment_row(**{"Event No": "TOTAL REVENUE", "Amount": total_revenue}))
    return report


@dataclass
class NBACategoryStats:
    solo_events: int = 0
    team_events: int = 0
    solo_registered: int = 0
    solo_actual: int = 0
    team_count: int = 0
    team_participants: int = 0

    @property
    def total_events(self) -> int:
        return self.solo_events + self.team_events

    @property
    def total_participants(self) -> int:
        return self.solo_actual + self.team_participants


def compute_nba_category_stats(
    registrations: Sequence[RegistrationRecord], category: str
) -> NBACategoryStats:
    """
    Accreditation counts for one category.

    Solo "actual participation" counts confirmed registrations only. Team
    counts ignore status: teams are leaders of Group events, and a team's
    participants are the leader plus every listed member.
    """
    in_category = [
        reg for reg in registrations if reg.event and reg.event.category == category
    ]
    solo = [reg for reg in in_category if reg.event.subcategory == "Individual"]
    group = [reg for reg in in_category if reg.event.subcategory == "Group"]
    leaders = [reg for reg in group if reg.is_leader]

    return NBACategoryStats(
        solo_events=len({reg.event_id for reg in solo if reg.event_id}),
        team_events=len({reg.event_id for reg in group if reg.event_id}),
        solo_registered=len(solo),
        solo_actual=sum(1 for reg in solo if reg.status == "confirmed"),
        team_count=len(leaders),
        team_participants=sum(1 + len(reg.team_members) for reg in leaders),
    )


def generate_nba_csv(registrations: Sequence[RegistrationRecord]) -> str:
    """Category blocks followed by the NBA REQUIREMENTS summary, as CSV text"""
    lines: list[str] = []

    def add_row(*cells: Any) -> None:
        lines.append(join_csv_row(cells))

    stats_by_category = {}
    for category in CATEGORIES:
        stats = compute_nba_category_stats(registrations, category)
        stats_by_category[category] = stats

        add_row(category.upper())
        add_row()
        add_row("SR NO", "SOLO", "", "", "")
        add_row("", "", "REGISTERED", "ACTUAL PARTICIPATION", "")
        add_row("1", "EVENTS", stats.solo_events, stats.solo_events, "")
        add_row("2", "PARTICIPANTS", stats.solo_registered, stats.solo_actual, "")
        add_row()
        add_row("SR NO", "TEAMS", "", "", "")
        add_row("1", "EVENTS", stats.team_events, "", "")
        add_row("2", "TEAMS", stats.team_count, "", "")
        add_row("3", "PARTICIPANTS IN THE TEAMS", stats.team_participants, "", "")
        add_row(
            "TOTAL PARTICIPATION TEAM/",
            f"{stats.solo_events}+{stats.team_events}={stats.total_events}",
            "",
            "",
            "",
        )
        add_row(
            "TOTAL PARTICIPANTS",
            f"{stats.solo_actual}+{stats.team_participants}={stats.total_participants}",
            "",
            "",
            "",
        )
        add_row()
        add_row()

    add_row("NBA REQUIREMENTS")
    add_row()
    add_row("SR NO", "EVENT", "NO OF EVENT", "NO OF TEAMS", "PARTICIPANTS", "Registered")

    total_events = total_teams = total_participants = 0
    sr_no = 1
    for category in CATEGORIES:
        stats = stats_by_category[category]
        total_events += stats.total_events
        total_teams += stats.team_count
        total_participants += stats.total_participants
        add_row(
            sr_no,
            category.upper(),
            stats.total_events,
            stats.team_count,
            stats.total_participants,
            "Registered",
        )
        sr_no += 1

    add_row(sr_no, "TOTAL", total_events, total_teams, total_participants, total_participants)
    return "\n".join(lines)


def generate_event_participants_csv(
    event: EventInfo,
    registrations: Sequence[RegistrationRecord],
    coordinators: Sequence[str] = (),
) -> str:
    """
    Participant sheet for a single event, as handed to its coordinators.

    Group events list teams (leaders only, members rebuilt from the leader's
    list); Individual events list one row per registration.
    """
    lines = [
        join_csv_row(["Event Name:", event.name or ""]),
        join_csv_row(["Category:", event.category or ""]),
        join_csv_row(["Event Type:", event.subcategory or ""]),
        join_csv_row(["Date:", event.event_date.isoformat() if event.event_date else "TBA"]),
        join_csv_row(["Venue:", event.venue or "TBA"]),
        join_csv_row(["Fee:", f"₹{event.fee or 0}"]),
    ]
    names = [name for name in coordinators if name]
    if names:
        lines.append(join_csv_row(["Coordinators:", ", ".join(names)]))
    lines.append(join_csv_row(["Total Participants:", len(registrations)]))
    lines.append("")

    profile_header = [
        "Roll Number",
        "Name",
        "Email",
        "School",
        "Department",
        "Year of Study",
        "Gender",
        "Phone Number",
    ]

    if (event.subcategory or "").lower() == "group":
        lines.append(join_csv_row(["Team No", "Member No", *profile_header]))
        leaders = [reg for reg in registrations if reg.is_leader]
        for team_no, reg in enumerate(leaders, start=1):
            p = reg.profile
            if p is not None:
                lines.append(
                    join_csv_row(
                        [
                            team_no,
                            1,
                            p.roll_number,
                            p.full_name,
                            p.college_email,
                            p.school,
                            p.department,
                            p.year_of_study,
                            p.gender,
                            p.phone,
                        ]
                    )
                )
            for member_no, m in enumerate(reg.team_members, start=2):
                lines.append(
                    join_csv_row(
                        [
                            "",
                            member_no,
                            m.roll_number,
                            m.display_name,
                            m.college_email or m.email,
                            m.school,
                            m.department,
                            m.year_of_study,
                            m.gender,
                            m.phone,
                        ]
                    )
                )
    else:
        lines.append(join_csv_row(["Member No", *profile_header]))
        member_no = 0
        for reg in registrations:
            p = reg.profile
            if p is None:
                continue
            member_no += 1
            lines.append(
                join_csv_row(
                    [
                        member_no,
                        p.roll_number,
                        p.full_name,
                        p.college_email,
                        p.school,
                        p.department,
                        p.year_of_study,
                        p.gender,
                        p.phone,
                    ]
                )
            )

    # Trailing newline after the last row, as the coordinator sheet always had
    return "\n".join(lines) + "\n"


def _matches(reg: RegistrationRecord, filters: RegistrationFilters) -> bool:
    event = reg.event
    profile = reg.profile

    def same(expected: Optional[str], actual: Optional[str]) -> bool:
        return expected is None or (actual or "").lower() == expected.lower()

    if not same(filters.category, event.category if event else None):
        return False
    if not same(filters.subcategory, event.subcategory if event else None):
        return False
    if filters.event_id is not None and reg.event_id != filters.event_id:
        return False
    if not same(filters.status, reg.status):
        return False
    for attr in ("gender", "school", "department", "program", "year_of_study"):
        if not same(getattr(filters, attr), getattr(profile, attr, None) if profile else None):
            return False

    if filters.search:
        needle = filters.search.strip().lower()
        haystack = [reg.transaction_id]
        if profile:
            haystack += [profile.full_name, profile.roll_number, profile.college_email]
        if not any(needle in (value or "").lower() for value in haystack):
            return False
    return True


def filter_registrations(
    registrations: Sequence[RegistrationRecord], filters: RegistrationFilters
) -> list[RegistrationRecord]:
    return [reg for reg in registrations if _matches(reg, filters)]


def generate_registrations_csv(registrations: Sequence[RegistrationRecord]) -> Report:
    """Flat dump of registrations joined with event and student details"""
    report = Report(headers=headers_for(REGISTRATION_COLUMNS))
    for reg in registrations:
        event = reg.event
        p = reg.profile
        report.rows.append(
            {
                "Registration ID": reg.id or "",
                "Status": reg.status or "",
                "Payment Mode": reg.payment_mode or "",
                "Transaction ID": reg.transaction_id or "",
                "Registered At": (
                    reg.registered_at.isoformat(sep=" ", timespec="seconds")
                    if reg.registered_at
                    else ""
                ),
                "Event Name": (event.name if event else None) or "",
                "Event Category": (event.category if event else None) or "",
                "Event Subcategory": (event.subcategory if event else None) or "",
                "Event Fee": reg.fee,
                "Student Name": (p.full_name if p else None) or "",
                "Roll Number": (p.roll_number if p else None) or "",
                "Email": (p.college_email if p else None) or "",
                "Phone": (p.phone if p else None) or "",
                "Gender": (p.gender if p else None) or "",
                "School": (p.school if p else None) or "",
                "Department": (p.department if p else None) or "",
                "Program": (p.program if p else None) or "",
                "Year of Study": (p.year_of_study if p else None) or "",
            }
        )
    return report
