import os

# Configure before any app module reads the environment
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["RELOAD"] = "false"
for key in ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_FROM_NUMBER", "SENDGRID_API_KEY", "NOTIFICATION_FROM_EMAIL"):
    os.environ[key] = ""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base
from app.models import Client, CourtDate


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_client(db):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "client_id": f"CLT-{counter['n']:03d}",
            "full_name": "Test Client",
            "phone_number": "808-555-0123",
            "email": "client@example.com",
        }
        data.update(overrides)
        client = Client(**data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    return _make


@pytest.fixture
def make_court_date(db):
    def _make(client, court_date, **overrides):
        data = {
            "client_id": client.id,
            "court_date": court_date,
            "court_type": "hearing",
            "court_location": "Honolulu District Court",
            "case_number": "CR-2026-001",
        }
        data.update(overrides)
        record = CourtDate(**data)
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    return _make
