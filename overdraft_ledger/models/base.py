"""
Database engine, session management, and base model.

Every table inherits from Base. Every request gets its own
session from get_db(), and that session is the transaction
boundary for one deposit, withdrawal, or dispute.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from overdraft_ledger.config import get_settings

settings = get_settings()

# --- Engine ---
# pool_pre_ping=True checks a pooled connection before handing
# it out, so a restarted database doesn't fail the next request.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
)

# --- Session Factory ---
# autocommit=False: the API layer commits once the balance update
# and its log entries are all flushed, or rolls everything back.
# autoflush=False: SQL is only sent when the store flushes.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The session is closed when the request finishes, even
    if the handler raised. Closing also releases any row
    locks a rolled-back operation was still holding.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
