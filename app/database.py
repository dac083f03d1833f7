from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from app.config.settings import settings

DATABASE_URL = settings.DATABASE["url"]

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    # SQLite connections are shared with the scheduler's event loop thread
    connect_args["check_same_thread"] = False
elif settings.DATABASE["sslmode"]:
    connect_args["sslmode"] = settings.DATABASE["sslmode"]

engine = create_engine(DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Imported wherever a request-scoped DB session is needed
def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
