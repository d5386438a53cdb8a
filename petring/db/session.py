from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from petring.core.config import settings


connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # sqlite connections are shared across FastAPI's worker threads
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
