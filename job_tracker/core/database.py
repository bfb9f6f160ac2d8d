import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from job_tracker.core.config import settings

logger = logging.getLogger(__name__)

# Bounded pool shared by all requests
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_recycle=settings.DB_POOL_RECYCLE,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Create the applicants table and its indexes if they do not exist yet.

    Schema changes beyond that are applied out of band.
    """
    from job_tracker.models import applicant  # noqa: F401  Import models to register them

    Base.metadata.create_all(bind=engine)
    logger.info(f"Database schema ready on {settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}")
