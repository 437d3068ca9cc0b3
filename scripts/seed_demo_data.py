"""
Seed script for the CleanOps development database.

- Creates the tables if they do not exist
- Clears recurring shifts and schedule entries
- Adds one pattern of each type (daily, weekly, monthly, custom)
- Runs recurring shift generation once so the schedule has entries

Run with: python -m scripts.seed_demo_data
"""

import sys
from datetime import date, timedelta

from cleanops.db.database import SessionLocal, engine
from cleanops.db.models import Base, RecurringShifts, ScheduleEntries, RecurrenceType, PayType
from cleanops.services.scheduling import LoggingShiftNotifier, generate_recurring_shifts_for_db
from cleanops.core.logging import configure_logging


def clear_tables(db):
    """Delete generated entries before the patterns that own them."""
    print("Clearing tables...")
    db.query(ScheduleEntries).delete()
    db.query(RecurringShifts).delete()
    db.commit()
    print("Tables cleared.")


def get_current_week_monday():
    """Get the Monday of the current week."""
    today = date.today()
    return today - timedelta(days=today.weekday())


def seed_recurring_shifts(db):
    """One pattern per repeat rule, all starting this week."""
    print("Seeding recurring shifts...")
    monday = get_current_week_monday()

    patterns = [
        RecurringShifts(
            id="pattern-daily-lobby",
            building_name="Harbor Tower",
            client_name="Harbor Properties",
            cleaner_names=["Ana Silva"],
            hours=4,
            start_time="18:00",
            pattern_type=RecurrenceType.DAILY,
            interval=1,
            start_date=monday,
            payment_type=PayType.HOURLY,
            hourly_rate=18.0,
        ),
        RecurringShifts(
            id="pattern-weekly-offices",
            building_name="Maple Office Park",
            client_name="Maple Holdings",
            cleaner_names=["Ben Okafor", "Ana Silva"],
            hours=6,
            start_time="20:00",
            pattern_type=RecurrenceType.WEEKLY,
            interval=2,
            days_of_week=[2, 4],  # Tue, Thu
            start_date=monday + timedelta(days=1),
            max_occurrences=12,
            payment_type=PayType.HOURLY,
            hourly_rate=20.0,
        ),
        RecurringShifts(
            id="pattern-monthly-deep-clean",
            building_name="Cedar Clinic",
            client_name="Cedar Health",
            cleaner_names=["Carla Mendes"],
            hours=8,
            start_time="07:00",
            pattern_type=RecurrenceType.MONTHLY,
            interval=1,
            day_of_month=31,
            start_date=monday,
            payment_type=PayType.FLAT_RATE,
            flat_rate_amount=350.0,
        ),
        RecurringShifts(
            id="pattern-custom-warehouse",
            building_name="Northside Warehouse",
            client_name="Northside Logistics",
            cleaner_names=[],
            hours=5,
            pattern_type=RecurrenceType.CUSTOM,
            custom_days=3,
            start_date=monday,
            end_date=monday + timedelta(days=90),
            payment_type=PayType.HOURLY,
        ),
    ]

    db.add_all(patterns)
    db.commit()
    print(f"Seeded {len(patterns)} recurring shifts.")


def main():
    """Main seed function."""
    configure_logging()
    print("\n" + "="*50)
    print("CleanOps Database Seeder")
    print("="*50 + "\n")

    response = input("This will DELETE ALL recurring shifts and schedule entries. Continue? (yes/no): ")
    if response.lower() != "yes":
        print("Aborted.")
        sys.exit(0)

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        clear_tables(db)
        seed_recurring_shifts(db)

        print("Generating recurring shift entries...")
        report = generate_recurring_shifts_for_db(db, notifier=LoggingShiftNotifier())
        print(f"Generated {report.generated} entries for {report.patterns_processed} patterns.")
        if report.skipped_invalid:
            print(f"Skipped invalid patterns: {report.skipped_invalid}")

        print("\n" + "="*50)
        print("Seeding complete!")
        print("="*50 + "\n")
    except Exception as e:
        db.rollback()
        print(f"Error during seeding: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
