"""Analytics, report and data-access services"""

from fest_analytics.services.aggregator import (
    compute_demographics,
    compute_revenue,
    select_payers,
)
from fest_analytics.services.report_service import (
    Report,
    generate_individual_participants_csv,
    generate_nba_csv,
    generate_payment_csv,
    generate_team_participants_csv,
)
from fest_analytics.services.snapshot_service import SnapshotService

__all__ = [
    "Report",
    "SnapshotService",
    "compute_demographics",
    "compute_revenue",
    "generate_individual_participants_csv",
    "generate_nba_csv",
    "generate_payment_csv",
    "generate_team_participants_csv",
    "select_payers",
]
