import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .config import settings
from .errors import AppError, ConflictError, TransientInfraError

logger = logging.getLogger(__name__)

connect_args = (
    {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
)
engine = create_engine(settings.database_url, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(
    db: Session, action: str, conflict_message: str | None = None
) -> Iterator[Session]:
    """Commit everything written inside the block, or nothing.

    Unique-constraint violations surface as ConflictError, any other database
    failure as TransientInfraError. Errors already raised as AppError pass
    through untouched after the rollback.
    """
    try:
        yield db
        db.commit()
    except AppError:
        db.rollback()
        raise
    except IntegrityError as exc:
        db.rollback()
        logger.warning("%s rejected by a constraint: %s", action, exc.orig)
        raise ConflictError(conflict_message or f"Failed to {action}: duplicate record") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("%s failed", action)
        raise TransientInfraError(f"Failed to {action}.") from exc
