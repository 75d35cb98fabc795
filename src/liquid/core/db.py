import functools
import logging
from contextlib import contextmanager

from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from liquid.core.config import settings
from liquid.core.exceptions import LiquidError

# make sure all SQLModel models are imported before creating tables
import liquid.models  # noqa: F401

logger = logging.getLogger(__name__)


def make_engine(url: str):
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url)


engine = make_engine(str(settings.SQLALCHEMY_DATABASE_URI))


def init_db(bind=None) -> None:
    SQLModel.metadata.create_all(bind or engine)


_UOW_KEY = "liquid_unit_of_work"


@contextmanager
def unit_of_work(session: Session):
    """
    Apply everything done inside the block atomically.

    Nested blocks on the same session join the outermost one, so a cashier call
    that mints through the vault commits or reverts as a whole.
    """
    if session.info.get(_UOW_KEY):
        yield session
        return

    session.info[_UOW_KEY] = True
    try:
        yield session
        session.commit()
    except LiquidError as e:
        session.rollback()
        logger.warning("Reverted: %s", e.reason)
        raise
    except Exception:
        session.rollback()
        logger.error("Reverted on unexpected error", exc_info=True)
        raise
    finally:
        session.info[_UOW_KEY] = False


def transactional(func):
    """Run a component method inside ``unit_of_work(self.session)``."""

    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        with unit_of_work(self.session):
            return func(self, *args, **kwargs)

    return wrapper
