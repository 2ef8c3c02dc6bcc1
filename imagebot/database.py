from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool
from .logger import logger

Base = declarative_base()

def create_db_engine(database_url: str):
    """Build an engine for the configured database URL"""
    if database_url.startswith("sqlite"):
        # Single shared connection so in-memory databases survive across sessions
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )

    # Convert postgresql:// to postgresql+psycopg:// to use psycopg driver instead of psycopg2
    if database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+psycopg://", 1)

    logger.info("Creating pooled database engine")
    return create_engine(
        database_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,  # Validates connections before use
        pool_recycle=1800,
        pool_timeout=10,
        echo=False,
    )

def create_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
