from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy import create_engine
from catalog_admin.core.config import settings


def _engine_options():
    """Pool options for the configured backend (SQLite has no sized pool)"""
    if settings.is_sqlite:
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.DB_MIN_CONNECTIONS,
        "max_overflow": settings.DB_MAX_CONNECTIONS - settings.DB_MIN_CONNECTIONS,
        "pool_pre_ping": True,
    }


# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    **_engine_options(),
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create declarative base for models
Base = declarative_base()


def commit_session(db_session):
    """
    Commit the session, or only flush it when the session belongs to a
    larger unit of work (``db_session.info["atomic"]``) that the caller
    commits or rolls back as a whole.
    """
    if db_session.info.get("atomic"):
        db_session.flush()
    else:
        db_session.commit()


def get_db_session():
    """
    Dependency for getting DB session.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
