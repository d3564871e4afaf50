import logging

from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import StaticPool

from .config import settings
from . import models  # registers the tables on SQLModel.metadata

logger = logging.getLogger(__name__)

# Choose engine options based on database scheme
db_url = settings.DATABASE_URL
engine_kwargs = {}

if db_url.startswith("sqlite"):
    # SQLite specific connect args
    engine_kwargs.update({
        "connect_args": {"check_same_thread": False}
    })
    if db_url in ("sqlite://", "sqlite:///:memory:"):
        # an in-memory database only lives as long as its single connection
        engine_kwargs["poolclass"] = StaticPool
else:
    # Better resiliency for managed Postgres
    engine_kwargs.update({
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_size": 5,
        "max_overflow": 10,
    })

engine = create_engine(db_url, echo=settings.DEBUG, **engine_kwargs)


def create_db_and_tables():
    SQLModel.metadata.create_all(engine)
    logger.info("Database tables ensured")


def get_session():
    with Session(engine) as session:
        yield session
