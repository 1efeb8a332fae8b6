"""Shared commit handling for SQLAlchemy repositories."""

import logging
from typing import Type

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rbac_admin.core.exceptions import RBACAdminError, StorageError

logger = logging.getLogger("rbac_admin.repositories")


class SqlalchemyRepository:
    # Raised when a unique constraint rejects the write
    conflict_error: Type[RBACAdminError] = StorageError
    conflict_message = "Resource already exists"

    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self, instance=None) -> None:
        """Commit the session, translating database failures into domain errors."""
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Unique constraint rejected write: %s", e.orig)
            raise self.conflict_error(self.conflict_message)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Database commit failed")
            raise StorageError("A storage error occurred")
        if instance is not None:
            self.db.refresh(instance)

    def _delete(self, instance) -> bool:
        self.db.delete(instance)
        self._commit()
        return True
