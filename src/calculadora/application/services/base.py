import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from calculadora.core.exceptions import ConflictError, StoreUnavailableError

logger = logging.getLogger(__name__)


class BaseService:
    """Owns the unit of work for one request."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self, conflict_message: str = "conflict") -> Iterator[None]:
        """
        Commit on success, roll back on any error.

        A unique-constraint violation that slipped past the service checks
        (a concurrent write) becomes ConflictError(conflict_message); an
        unreachable database becomes StoreUnavailableError.
        """
        try:
            yield
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(
                "Integrity violation, reporting conflict",
                extra={"conflict": conflict_message, "detail": str(e.orig)},
            )
            raise ConflictError(conflict_message) from e
        except OperationalError as e:
            self.db.rollback()
            logger.exception("Database unavailable")
            raise StoreUnavailableError() from e
        except Exception:
            self.db.rollback()
            raise
