"""
Erreurs métier levées par les services et les repositories.

Chaque erreur porte un type explicite (ErrorKind) et des champs structurés
(entité, identifiant, contrainte) en plus du message affiché à l'utilisateur.
Le mapping vers les codes HTTP est fait dans main.py.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


class ServiceError(Exception):
    """Erreur métier de base."""

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        entity: Optional[str] = None,
        entity_id: Any = None,
        constraint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.entity = entity
        self.entity_id = entity_id
        self.constraint = constraint

    def to_dict(self) -> dict:
        return {
            "detail": self.message,
            "kind": self.kind.value,
            "entity": self.entity,
            "entity_id": str(self.entity_id) if self.entity_id is not None else None,
            "constraint": self.constraint,
        }


class ValidationError(ServiceError):
    """Donnée absente, mal formée ou hors bornes."""
    kind = ErrorKind.VALIDATION


class NotFoundError(ServiceError):
    """L'identifiant référencé n'existe pas."""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, entity_id: Any, message: Optional[str] = None) -> None:
        super().__init__(
            message or f"{entity} {entity_id} introuvable.",
            entity=entity,
            entity_id=entity_id,
        )


class ConflictError(ServiceError):
    """Violation d'unicité, de capacité ou d'une règle métier."""
    kind = ErrorKind.CONFLICT


class StoreError(Exception):
    """Échec de la base de données (connexion, requête) remonté avec le message d'origine."""

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
