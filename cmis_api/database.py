### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - App Database Setup -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
App Database Setup

SQLite database (or any SQLAlchemy URL via CMIS_APP_DATABASE_URL) for storing:
- Tenants (counties, national HQ)
- Users, role assignments and identity accounts
- Registration applications and the cooperatives created from them
- In-app notifications

Uses synchronous SQLAlchemy (no greenlet dependency).
"""

import os
import uuid
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from cmis_api.errors import ConsoleError, ConstraintError

# Database file location
DATA_DIR = Path(__file__).parent.parent / "data"
DATA_DIR.mkdir(exist_ok=True)
DATABASE_PATH = DATA_DIR / "cmis_console.db"
DATABASE_URL = os.environ.get("CMIS_APP_DATABASE_URL", f"sqlite:///{DATABASE_PATH}")

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

# Create engine (synchronous)
engine = create_engine(
    DATABASE_URL,
    connect_args=_connect_args,  # Allow multi-threaded access for SQLite
    echo=False,  # Set True for SQL debugging
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def new_id() -> str:
    """Generate a primary key (UUID4 string, shared with identity subject ids)"""
    return str(uuid.uuid4())


def get_db():
    """
    Dependency that provides a database session.

    Usage:
        @app.get("/endpoint")
        def endpoint(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory():
    """
    Dependency that provides the session factory.

    Used by side channels (notifications) that write in their own session
    so a failure there never touches the caller's transaction.
    """
    return SessionLocal


def init_db():
    """
    Initialize the database - create all tables.

    Call this on application startup.
    """
    # Import models to register them with Base
    from cmis_api.models import (  # noqa: F401
        application,
        auth_account,
        cooperative,
        notification,
        tenant,
        user,
    )

    Base.metadata.create_all(bind=engine)
    print(f"Database initialized at: {DATABASE_URL}")


def commit_or_raise(db, action: str):
    """
    Commit the session, converting database failures into console errors.

    Rolls back before raising so the session stays usable.

    Args:
        db: Database session
        action: Human-readable description used in the error message
            (e.g. "update user")

    Raises:
        ConstraintError: On unique/foreign-key violations
        ConsoleError: On any other database failure
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConstraintError(f"Failed to {action}: {e.orig}") from e
    except SQLAlchemyError as e:
        db.rollback()
        raise ConsoleError(f"Failed to {action}") from e
