"""Registration aggregator: team-aware revenue and demographic breakdowns.

A team pays once. The leader's registration carries the ``team_members`` list
and is charged the event fee; each other member has an own registration for
the same event with an empty list and contributes nothing to revenue. Team
membership is looked up per event, since a student can lead a team in one
event and be a plain member in another.

Demographic counts are not deduplicated: every registration row is a person
with their own profile.

All functions here are pure and tolerate missing events, profiles and fields.
"""

from collections import Counter, defaultdict
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, Field

from fest_analytics.models.snapshot import Amount, RegistrationRecord, to_amount

CATEGORIES = ("Cultural", "Sports", "Technical")
YEARS_OF_STUDY = ("1st Year", "2nd Year", "3rd Year", "4th Year")
DEFAULT_PAYMENT_MODE = "hybrid"
UNKNOWN_EVENT = "Unknown"

# Substrings matched case-insensitively against ``profile.school``
SCHOOL_BUCKETS = (
    ("soet", ("ENGINEERING", "SOET")),
    ("sop", ("PHARMACY", "SOP")),
    ("soa", ("ARCHITECTURE", "SOA")),
)


class CategoryMetric(BaseModel):
    count: int = 0
    soet: int = 0
    sop: int = 0
    soa: int = 0


class EventPopularity(BaseModel):
    count: int = 0
    male: int = 0
    female: int = 0
    other: int = 0


class Demographics(BaseModel):
    gender_breakdown: dict[str, int] = Field(default_factory=dict)
    department_breakdown: dict[str, int] = Field(default_factory=dict)
    category_metrics: dict[str, CategoryMetric] = Field(default_factory=dict)
    event_popularity: dict[str, EventPopularity] = Field(default_factory=dict)


class CategoryStats(BaseModel):
    category: str
    registrations: int = 0
    events: int = 0
    revenue: Amount = 0


class RegistrationSummary(BaseModel):
    total_registrations: int = 0
    confirmed: int = 0
    pending: int = 0
    rejected: int = 0
    confirmed_revenue: Amount = 0
    pending_revenue: Amount = 0
    expected_revenue: Amount = 0
    average_fee: float = 0
    categories: list[CategoryStats] = Field(default_factory=list)
    year_distribution: dict[str, int] = Field(default_factory=dict)
    top_schools: list[tuple[str, int]] = Field(default_factory=list)
    top_departments: list[tuple[str, int]] = Field(default_factory=list)


class TeamStats(BaseModel):
    total_teams: int = 0
    avg_size: float = 0
    min_size: int = 0
    max_size: int = 0


class EventStats(BaseModel):
    event_id: str
    event_name: Optional[str] = None
    total: int = 0
    confirmed: int = 0
    pending: int = 0
    rejected: int = 0
    revenue: Amount = 0
    pending_revenue: Amount = 0
    gender_distribution: dict[str, int] = Field(default_factory=dict)
    top_schools: list[tuple[str, int]] = Field(default_factory=list)
    top_departments: list[tuple[str, int]] = Field(default_factory=list)
    year_distribution: dict[str, int] = Field(default_factory=dict)
    team_stats: Optional[TeamStats] = None
    capacity: Optional[int] = None
    utilization_percent: Optional[float] = None


# --- payer selection and revenue ---------------------------------------------


def _team_member_index(
    registrations: Iterable[RegistrationRecord],
) -> dict[str, set[str]]:
    """Map event id -> profile ids listed in some leader's team for that event"""
    index: dict[str, set[str]] = defaultdict(set)
    for reg in registrations:
        if not reg.is_leader or not reg.event_id:
            continue
        for member in reg.team_members:
            if member.id:
                index[reg.event_id].add(member.id)
    return index


def is_team_member(reg: RegistrationRecord, index: dict[str, set[str]]) -> bool:
    if reg.is_leader or not reg.event_id or not reg.registrant_id:
        return False
    return reg.registrant_id in index.get(reg.event_id, ())


def select_payers(registrations: Sequence[RegistrationRecord]) -> list[RegistrationRecord]:
    """
    Keep one registration per payer: team leaders and individual participants.

    The member index is built from the whole collection before filtering, so
    the result does not depend on input order.
    """
    index = _team_member_index(registrations)
    return [reg for reg in registrations if not is_team_member(reg, index)]


def sum_fees(registrations: Iterable[RegistrationRecord]) -> Amount:
    """Add up fees, rounded to paise; whole totals come back as ints"""
    return to_amount(round(sum(reg.fee for reg in registrations), 2)) or 0


def compute_revenue(registrations: Sequence[RegistrationRecord]) -> Amount:
    """Total fees with each team charged once, to its leader"""
    return sum_fees(select_payers(registrations))


def _revenue_by(payers: Iterable[RegistrationRecord], key) -> dict[str, Amount]:
    groups: dict[str, list[RegistrationRecord]] = {}
    for reg in payers:
        groups.setdefault(key(reg), []).append(reg)
    return {name: sum_fees(regs) for name, regs in groups.items()}


def payment_mode_of(reg: RegistrationRecord) -> str:
    return reg.payment_mode or DEFAULT_PAYMENT_MODE


def event_name_of(reg: RegistrationRecord) -> str:
    return (reg.event.name if reg.event else None) or UNKNOWN_EVENT


def revenue_by_payment_mode(
    registrations: Sequence[RegistrationRecord],
) -> dict[str, Amount]:
    return _revenue_by(select_payers(registrations), payment_mode_of)


def revenue_by_event(registrations: Sequence[RegistrationRecord]) -> dict[str, Amount]:
    """Revenue per event name, highest first"""
    totals = _revenue_by(select_payers(registrations), event_name_of)
    return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))


# --- demographics -------------------------------------------------------------


def school_bucket(school: Optional[str]) -> Optional[str]:
    """Return "soet", "sop" or "soa" for a free-text school name, else None"""
    if not school:
        return None
    upper = school.upper()
    for bucket, needles in SCHOOL_BUCKETS:
        if any(needle in upper for needle in needles):
            return bucket
    return None


def gender_bucket(gender: Optional[str]) -> str:
    gender = (gender or "").strip().lower()
    return gender if gender in ("male", "female") else "other"


def compute_demographics(registrations: Sequence[RegistrationRecord]) -> Demographics:
    """Gender, department, category and event breakdowns in a single pass"""
    genders: Counter = Counter()
    departments: Counter = Counter()
    categories = {name: CategoryMetric() for name in CATEGORIES}
    popularity: dict[str, EventPopularity] = {}

    for reg in registrations:
        profile = reg.profile
        gender = profile.gender if profile else None
        genders[(gender or "unknown").strip().lower()] += 1
        departments[(profile.department if profile else None) or "N/A"] += 1

        event = reg.event
        if event is None:
            continue

        metric = categories.get(event.category or "")
        if metric is not None:
            metric.count += 1
            bucket = school_bucket(profile.school if profile else None)
            if bucket:
                setattr(metric, bucket, getattr(metric, bucket) + 1)

        if event.name:
            entry = popularity.setdefault(event.name, EventPopularity())
            entry.count += 1
            g = gender_bucket(gender)
            setattr(entry, g, getattr(entry, g) + 1)

    # sorted() is stable, so ties keep first-seen order
    ranked = sorted(popularity.items(), key=lambda item: item[1].count, reverse=True)
    return Demographics(
        gender_breakdown=dict(genders),
        department_breakdown=dict(departments),
        category_metrics=categories,
        event_popularity=dict(ranked),
    )


# --- dashboard summaries ------------------------------------------------------


def _with_status(registrations, status: str) -> list[RegistrationRecord]:
    return [reg for reg in registrations if reg.status == status]


def _payer_revenue(payers, status: str) -> Amount:
    return sum_fees(reg for reg in payers if reg.status == status)


def _top(counter: Counter, limit: int) -> list[tuple[str, int]]:
    return counter.most_common(limit)


def _profile_counter(registrations, attr: str) -> Counter:
    counter: Counter = Counter()
    for reg in registrations:
        value = getattr(reg.profile, attr, None) if reg.profile else None
        if value:
            counter[value] += 1
    return counter


def _year_distribution(registrations) -> dict[str, int]:
    years = _profile_counter(registrations, "year_of_study")
    return {year: years.get(year, 0) for year in YEARS_OF_STUDY}


def compute_registration_summary(
    registrations: Sequence[RegistrationRecord],
) -> RegistrationSummary:
    """Headline numbers for the admin statistics page"""
    confirmed = _with_status(registrations, "confirmed")
    pending = _with_status(registrations, "pending")
    rejected = _with_status(registrations, "rejected")

    payers = select_payers(registrations)
    expected_revenue = sum_fees(payers)
    average_fee = round(expected_revenue / len(payers), 2) if payers else 0

    categories = []
    for name in CATEGORIES:
        category_regs = [
            reg for reg in registrations if reg.event and reg.event.category == name
        ]
        event_ids = {reg.event_id for reg in category_regs if reg.event_id}
        categories.append(
            CategoryStats(
                category=name,
                registrations=len(category_regs),
                events=len(event_ids),
                revenue=_payer_revenue(select_payers(category_regs), "confirmed"),
            )
        )

    return RegistrationSummary(
        total_registrations=len(registrations),
        confirmed=len(confirmed),
        pending=len(pending),
        rejected=len(rejected),
        confirmed_revenue=_payer_revenue(payers, "confirmed"),
        pending_revenue=_payer_revenue(payers, "pending"),
        expected_revenue=expected_revenue,
        average_fee=average_fee,
        categories=categories,
        year_distribution=_year_distribution(registrations),
        top_schools=_top(_profile_counter(registrations, "school"), 10),
        top_departments=_top(_profile_counter(registrations, "department"), 10),
    )


def compute_team_stats(registrations: Sequence[RegistrationRecord]) -> TeamStats:
    """Team size statistics over leaders; a team's size is its members plus the leader"""
    sizes = [len(reg.team_members) + 1 for reg in registrations if reg.is_leader]
    if not sizes:
        return TeamStats()
    return TeamStats(
        total_teams=len(sizes),
        avg_size=round(sum(sizes) / len(sizes), 1),
        min_size=min(sizes),
        max_size=max(sizes),
    )


def compute_event_stats(
    registrations: Sequence[RegistrationRecord], event_id: str
) -> Optional[EventStats]:
    """Drill-down statistics for one event, or None when it has no registrations"""
    event_regs = [reg for reg in registrations if reg.event_id == event_id]
    if not event_regs:
        return None

    event = event_regs[0].event
    payers = select_payers(event_regs)
    genders = Counter(
        gender_bucket(reg.profile.gender if reg.profile else None) for reg in event_regs
    )

    stats = EventStats(
        event_id=event_id,
        event_name=event.name,
        total=len(event_regs),
        confirmed=len(_with_status(event_regs, "confirmed")),
        pending=len(_with_status(event_regs, "pending")),
        rejected=len(_with_status(event_regs, "rejected")),
        revenue=_payer_revenue(payers, "confirmed"),
        pending_revenue=_payer_revenue(payers, "pending"),
        gender_distribution={g: genders.get(g, 0) for g in ("male", "female", "other")},
        top_schools=_top(_profile_counter(event_regs, "school"), 5),
        top_departments=_top(_profile_counter(event_regs, "department"), 5),
        year_distribution=_year_distribution(event_regs),
        capacity=event.capacity,
    )
    if event.subcategory == "Group":
        stats.team_stats = compute_team_stats(event_regs)
    if event.capacity:
        stats.utilization_percent = round(len(event_regs) / event.capacity * 100, 1)
    return stats


def compute_registrations_per_event(
    registrations: Sequence[RegistrationRecord],
) -> dict[str, int]:
    """Confirmed registrations per event name (bar chart data)"""
    counts: Counter = Counter()
    for reg in _with_status(registrations, "confirmed"):
        if reg.event and reg.event.name:
            counts[reg.event.name] += 1
    return dict(counts)


def compute_events_by_category(
    registrations: Sequence[RegistrationRecord],
) -> dict[str, int]:
    """Distinct events per category (pie chart data)"""
    seen: dict[str, set[str]] = defaultdict(set)
    for reg in registrations:
        if reg.event and reg.event.category and reg.event_id:
            seen[reg.event.category].add(reg.event_id)
    return {category: len(ids) for category, ids in seen.items()}
