import logging
from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from lendtrack.core.exceptions import StoreError

logger = logging.getLogger(__name__)

Base = declarative_base()


class Store:
    """Handle on the book database.

    Constructed explicitly and passed to whatever needs it; `init()` creates
    the tables and `close()` releases the connection pool.
    """

    def __init__(self, uri: str, echo: bool = False):
        self.uri = uri
        engine_kwargs = {'echo': echo}
        if uri.startswith('sqlite'):
            # One in-memory database shared by every thread of the app
            if uri in ('sqlite://', 'sqlite:///:memory:'):
                engine_kwargs['poolclass'] = StaticPool
            engine_kwargs['connect_args'] = {'check_same_thread': False}
        else:
            engine_kwargs['client_encoding'] = 'utf8'
        self.engine = create_engine(uri, **engine_kwargs)
        self._sessionmaker = sessionmaker(
            bind=self.engine, autocommit=False, autoflush=False)

    def init(self):
        from lendtrack.core import models  # noqa: F401 registers tables
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            logger.warning(f"Database initialization failed: {e}")
            raise StoreError(f"Failed to initialize database: {e}") from e
        return self

    def close(self):
        self.engine.dispose()

    @contextmanager
    def session(self):
        """Yields a session; database failures surface as StoreError."""
        session = self._sessionmaker()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning(f"Store failure: {e}")
            raise StoreError(str(e)) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
