"""Engine and request-scoped sessions for the registration database"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlmodel import Session

from fest_analytics.config import config


def make_engine(url: str | None, echo: bool = False) -> Engine:
    if not url:
        raise ValueError(
            "DATABASE_URL is not set; export it or add it to the local .env file"
        )
    connect_args = {}
    if url.startswith("sqlite"):
        # Sessions are handed across FastAPI's threadpool workers
        connect_args["check_same_thread"] = False
    return create_engine(url, echo=echo, connect_args=connect_args)


engine = make_engine(config["database_url"], echo=config["sql_echo"])


def get_db():
    """Yield one session per request"""
    with Session(engine) as session:
        yield session
