"""
Base commune des repositories SQLAlchemy.

Un repository encapsule tous les accès BDD d'une entité (CRUD + recherches)
et ne contient aucune règle métier. Les violations de contraintes d'unicité
remontent en ConflictError, les autres échecs BDD en StoreError avec le
message d'origine.
"""

import uuid
import logging
from contextlib import contextmanager
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from coursehub.errors import ConflictError, NotFoundError, StoreError

logger = logging.getLogger(__name__)


def _constraint_name(exc: IntegrityError) -> Optional[str]:
    """Nom de la contrainte violée, fourni par psycopg2 (diag) si disponible."""
    diag = getattr(exc.orig, "diag", None)
    return getattr(diag, "constraint_name", None)


def _store_code(exc: SQLAlchemyError) -> Optional[str]:
    """Code SQLSTATE renvoyé par PostgreSQL, si disponible."""
    return getattr(getattr(exc, "orig", None), "pgcode", None)


class SqlRepository:
    model: Any = None
    entity_name: str = ""
    # Messages lisibles par nom de contrainte PostgreSQL
    constraint_messages: dict = {}

    def __init__(self, db: Session) -> None:
        self.db = db

    # --- Lecture ---

    def find_all(self) -> list:
        """Toutes les lignes, de la plus récente à la plus ancienne."""
        return self._scalars(select(self.model).order_by(self.model.created_at.desc()))

    def find_by_id(self, entity_id: uuid.UUID):
        with self._store_errors("lecture"):
            return self.db.get(self.model, entity_id)

    # --- Écriture ---

    def create(self, values: dict):
        entity = self.model(**values)
        self.db.add(entity)
        self._commit("création")
        self.db.refresh(entity)
        return entity

    def update(self, entity_id: uuid.UUID, changes: dict):
        """Fusion partielle : seuls les champs fournis sont modifiés, updated_at est rafraîchi par la BDD."""
        entity = self.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self.entity_name, entity_id)

        for field, value in changes.items():
            setattr(entity, field, value)

        self._commit("mise à jour")
        self.db.refresh(entity)
        return entity

    def delete(self, entity_id: uuid.UUID) -> None:
        entity = self.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self.entity_name, entity_id)
        self.db.delete(entity)
        self._commit("suppression")

    # --- Helpers ---

    def _scalars(self, stmt) -> list:
        with self._store_errors("lecture"):
            return list(self.db.execute(stmt).scalars().all())

    def _scalar(self, stmt):
        with self._store_errors("lecture"):
            return self.db.execute(stmt).scalar()

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            constraint = _constraint_name(exc)
            message = self.constraint_messages.get(
                constraint,
                f"Échec de la {action} ({self.entity_name}) : contrainte d'intégrité violée.",
            )
            logger.warning("Conflit BDD sur %s (%s) : %s", self.entity_name, constraint, exc.orig)
            raise ConflictError(message, entity=self.entity_name, constraint=constraint) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(
                f"Échec de la {action} ({self.entity_name}) : {exc}",
                code=_store_code(exc),
            ) from exc

    @contextmanager
    def _store_errors(self, action: str):
        try:
            yield
        except SQLAlchemyError as exc:
            raise StoreError(
                f"Échec de la {action} ({self.entity_name}) : {exc}",
                code=_store_code(exc),
            ) from exc
