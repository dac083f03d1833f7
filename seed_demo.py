"""
Demo Data Seeding Script
Creates tables, adds demo clients and court dates, and schedules their reminders
"""

from datetime import datetime, timedelta

from app.database import SessionLocal
from app.models import Client, CourtDate
from app.services.court_reminder_service import build_court_reminder_service
from create_tables import create_tables

DEMO_CLIENTS = [
    {"client_id": "CLT-001", "full_name": "John Doe", "phone_number": "808-555-0123", "email": "john.doe@example.com"},
    {"client_id": "CLT-002", "full_name": "Jane Smith", "phone_number": None, "email": "jane.smith@example.com"},
    {"client_id": "CLT-003", "full_name": "Alice Kamaka", "phone_number": "808-555-0155", "email": None},
]

# (client index, days from now, hour, court type, location, case number)
DEMO_COURT_DATES = [
    (0, 30, 10, "hearing", "Honolulu District Court", "CR-2026-001"),
    (1, 5, 13, "arraignment", "Maui Circuit Court", "CR-2026-002"),
    (2, 1, 9, "trial", "Kona Court", "CR-2026-003"),
    (0, -5, 10, "hearing", "Honolulu District Court", "CR-2026-004"),
]

def seed_demo_data():
    """Insert demo clients and court dates, skipping clients that already exist"""
    db = SessionLocal()
    try:
        service = build_court_reminder_service(db)
        now = datetime.now()

        clients = []
        for data in DEMO_CLIENTS:
            client = db.query(Client).filter(Client.client_id == data["client_id"]).first()
            if client:
                print(f"ℹ️  Client {data['client_id']} already exists, skipping")
            else:
                client = Client(**data)
                db.add(client)
                db.commit()
                db.refresh(client)
                print(f"✅ Created client {client.client_id}: {client.full_name}")
            clients.append(client)

        for client_index, days, hour, court_type, location, case_number in DEMO_COURT_DATES:
            when = (now + timedelta(days=days)).replace(hour=hour, minute=0, second=0, microsecond=0)
            court_date = CourtDate(
                client_id=clients[client_index].id,
                court_date=when,
                court_type=court_type,
                court_location=location,
                case_number=case_number,
            )
            db.add(court_date)
            db.commit()
            db.refresh(court_date)

            reminders = service.schedule_reminders(court_date)
            print(f"✅ Court date {case_number} on {when:%Y-%m-%d %H:%M} with {len(reminders)} reminders")

    finally:
        db.close()

if __name__ == "__main__":
    create_tables()
    seed_demo_data()
    print("\n🎉 Demo data seeded")
