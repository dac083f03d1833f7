# create_tables.py
import sys

from sqlalchemy import text
from app.database import Base, engine, DATABASE_URL
from app.models import Client, CourtDate, CourtDateReminder, Notification

def create_tables(drop_existing: bool = False):
    """Create all tables, optionally dropping the existing ones first"""
    try:
        if drop_existing:
            # Drop in dependency order because of foreign keys
            cascade = " CASCADE" if "postgresql" in DATABASE_URL.lower() else ""
            with engine.connect() as conn:
                conn.execute(text(f"DROP TABLE IF EXISTS court_date_reminders{cascade}"))
                conn.execute(text(f"DROP TABLE IF EXISTS notifications{cascade}"))
                conn.execute(text(f"DROP TABLE IF EXISTS court_dates{cascade}"))
                conn.execute(text(f"DROP TABLE IF EXISTS clients{cascade}"))
                conn.commit()

        Base.metadata.create_all(bind=engine)
        print("✅ All tables created successfully!")

    except Exception as e:
        print(f"❌ Error creating tables: {e}")
        raise

if __name__ == "__main__":
    create_tables(drop_existing="--drop" in sys.argv)
