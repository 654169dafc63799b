# backend/app/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from backend.app.core.config import DATABASE_URL, SQL_ECHO

# Create the SQLAlchemy engine
# A single engine (and its pool) is shared by every request
engine = create_engine(DATABASE_URL, echo=SQL_ECHO)

# autocommit=False: the cache pipeline commits explicitly once a batch is stored
# autoflush=False: inserts are flushed inside their own savepoint
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for declarative models
Base = declarative_base()

# Dependency to get a database session for one request
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
