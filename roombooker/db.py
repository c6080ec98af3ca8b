import logging
import os
from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from roombooker.config import settings
from roombooker.exceptions import InternalError, RoomBookerError

logger = logging.getLogger(__name__)

SQLALCHEMY_DATABASE_URL = settings.database_url


def _connect_args(url):
    if make_url(url).get_backend_name() == "sqlite":
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args=_connect_args(SQLALCHEMY_DATABASE_URL)
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_database():
    url = make_url(SQLALCHEMY_DATABASE_URL)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        directory = os.path.dirname(url.database)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)

    # Register the tables on Base.metadata before creating them.
    from roombooker.models import booking, user  # noqa: F401  pylint: disable=import-outside-toplevel,unused-import

    Base.metadata.create_all(bind=engine)


def get_db():
    """Provide a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db, error_message, commit=True):
    """
    Commit the work done in the block, or roll it back. Reads pass
    ``commit=False``.

    Application errors propagate unchanged; any SQLAlchemy fault is logged and
    re-raised as InternalError carrying only ``error_message``.
    """
    try:
        yield db
        if commit:
            db.commit()
    except RoomBookerError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(error_message)
        raise InternalError(error_message, context={"error": str(e)}) from e
