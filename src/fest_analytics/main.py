#!/usr/bin/env python3
"""Fest Analytics - admin analytics and CSV export API"""

import uvicorn
from fastapi import FastAPI

from fest_analytics.config import config
from fest_analytics.logging_config import get_logger, setup_logging
from fest_analytics.routers.analytics import router as analytics_router
from fest_analytics.routers.exports import router as exports_router
from fest_analytics.routers.health import health

# Configure logging (INFO -> stdout, WARNING/ERROR -> stderr)
setup_logging()
logger = get_logger(__name__)


app = FastAPI(
    title="Fest Analytics",
    description="Registration analytics, revenue reporting and CSV exports for college fest administrators",
    version="1.0.0",
    license_info={
        "name": "MIT",
    },
)

app.include_router(health)
app.include_router(analytics_router)
app.include_router(exports_router)


if __name__ == "__main__":
    port = config.get("port")
    logger.info(f"Starting Fest Analytics on 0.0.0.0:{port}")
    logger.info("Health check available at /health")

    try:
        uvicorn.run(
            app, host="0.0.0.0", port=port, log_level=config["log_level"].lower()
        )
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
