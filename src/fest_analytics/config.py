"""Settings for Fest Analytics, read once from the environment at import time"""

import os
from pathlib import Path

from dotenv import load_dotenv

# A .env beside pyproject.toml is only picked up in local checkouts
_env_file = Path(__file__).resolve().parents[2] / ".env"
if _env_file.exists():
    load_dotenv(_env_file)


def _positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


config = {
    "database_url": os.getenv("DATABASE_URL"),
    "sql_echo": os.getenv("SQL_ECHO", "false").lower() == "true",
    "port": _positive_int("PORT", 8080),
    "log_level": os.getenv("LOG_LEVEL", "INFO"),
    "admin_api_key": os.getenv("ADMIN_API_KEY"),
    "environment": os.getenv("ENVIRONMENT", "development"),
    # Page size used when reading registrations for a snapshot
    "export_batch_size": _positive_int("EXPORT_BATCH_SIZE", 1000),
    # Snapshots stop here and are flagged partial
    "export_max_rows": _positive_int("EXPORT_MAX_ROWS", 50000),
}
