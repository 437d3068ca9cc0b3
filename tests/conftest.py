import pytest
from datetime import date

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cleanops.api.deps import get_db
from cleanops.db.models import Base
from cleanops.main import app
from cleanops.services.scheduling.types import (
    EntryStatus,
    PatternType,
    PaymentType,
    RecurringShiftPattern,
    ScheduleEntry,
)
from cleanops.services.scheduling.dates import week_bucket_key, weekday_name


def get_test_today() -> date:
    # fixed "today" for deterministic lifecycle tests (a Monday)
    return date(2024, 3, 4)


def make_pattern(**overrides) -> RecurringShiftPattern:
    fields = dict(
        id="pattern-1",
        building_name="Harbor Tower",
        client_name="Harbor Properties",
        cleaner_names=["Ana"],
        hours=4.0,
        pattern_type=PatternType.DAILY,
        start_date=date(2024, 1, 1),
        interval=1,
    )
    fields.update(overrides)
    return RecurringShiftPattern(**fields)


def make_entry(entry_date: date, hours: float, cleaner: str = "Ana", **overrides) -> ScheduleEntry:
    fields = dict(
        id=f"entry-{entry_date.isoformat()}-{hours}",
        client_name="Harbor Properties",
        building_name="Harbor Tower",
        cleaner_name=cleaner,
        cleaner_names=[cleaner],
        hours=hours,
        day=weekday_name(entry_date),
        date=entry_date,
        week_id=week_bucket_key(entry_date),
        status=EntryStatus.SCHEDULED,
        payment_type=PaymentType.HOURLY,
        hourly_rate=15.0,
    )
    fields.update(overrides)
    return ScheduleEntry(**fields)


@pytest.fixture
def weekly_pattern() -> RecurringShiftPattern:
    # every other Tuesday and Thursday from Tue 2024-01-02
    return make_pattern(
        pattern_type=PatternType.WEEKLY,
        interval=2,
        days_of_week=[2, 4],
        start_date=date(2024, 1, 2),
    )


@pytest.fixture
def monthly_pattern() -> RecurringShiftPattern:
    return make_pattern(
        pattern_type=PatternType.MONTHLY,
        interval=1,
        day_of_month=31,
        start_date=date(2024, 1, 31),
    )


@pytest.fixture
def db_session():
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
