# booking_portal/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from booking_portal.config import get_settings

settings = get_settings()

# For SQLite, `check_same_thread=False` is needed since FastAPI runs sync
# endpoints (and confirmations) on worker threads
engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {},
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    from sqlalchemy.orm import Session
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
