# app/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings

connect_args = {}
if settings.database_url.startswith("sqlite"):
    # FastAPI serves sync routes from a threadpool
    connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.database_url,
    echo=settings.debug,  # SQL query log
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all models
Base = declarative_base()

def get_db():
    """Open and close a DB session per request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
