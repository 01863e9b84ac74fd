from contextlib import contextmanager
from typing import Iterator
import logging
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from resume_builder.core.database import Database
from resume_builder.core.exceptions import InternalError

logger = logging.getLogger(__name__)


class BaseStore:
    def __init__(self, database: Database):
        self.database = database

    @contextmanager
    def session(self, action: str) -> Iterator[Session]:
        """Database session; storage failures other than IntegrityError become InternalError"""
        try:
            with self.database.session() as db:
                yield db
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Storage failure while {action}: {e}")
            raise InternalError() from e
