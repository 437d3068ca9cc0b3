import logging

from fastapi import FastAPI
from cleanops.api.routes import payroll, recurring_shifts, schedule_entries
from cleanops.core.logging import configure_logging
from cleanops.db import database

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="CleanOps Scheduling API", version="0.1.0")

app.include_router(recurring_shifts.router, prefix="/api/v1")
app.include_router(schedule_entries.router, prefix="/api/v1")
app.include_router(payroll.router, prefix="/api/v1")


@app.on_event("startup")
def create_tables():
    """Make sure the schema exists before the first request."""
    database.init_db()
    logger.info("Database tables ready")


@app.get("/health")
def health_check():
    return {"status": "ok"}
