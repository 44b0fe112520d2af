import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from pathforge.core.config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.database_url

if DATABASE_URL.startswith("sqlite"):
    # SQLite connections are shared across FastAPI's threadpool
    engine = create_engine(
        DATABASE_URL, connect_args={"check_same_thread": False}
    )
else:
    engine = create_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    Session Provider: Provides a database session per request.
    Transaction management is handled explicitly in the Service Layer.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Optional[Engine] = None):
    """
    Registers all domain models and initializes the database schema.
    This should be called during the application startup lifespan.
    """
    # Import all models to ensure they are registered with Base.metadata before create_all
    from pathforge.models import user, job  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)


def reset_db(bind: Optional[Engine] = None):
    """Drop every table and recreate the schema. All data is lost."""
    from pathforge.models import user, job  # noqa: F401
    target = bind or engine
    logger.warning("Dropping all tables", extra={"tables": sorted(Base.metadata.tables)})
    Base.metadata.drop_all(bind=target)
    Base.metadata.create_all(bind=target)


def purge_jobs(db: Session) -> int:
    """Delete every job application. Returns the number of rows removed."""
    from pathforge.models.job import Job
    deleted = db.query(Job).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Purged {deleted} job(s)")
    return deleted


def purge_users(db: Session) -> int:
    """Delete every user together with the jobs they own. Returns the number of users removed."""
    from pathforge.models.user import User
    purge_jobs(db)
    deleted = db.query(User).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Purged {deleted} user(s)")
    return deleted
