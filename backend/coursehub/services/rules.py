"""
Règles de validation partagées par les services (fonctions pures, sans accès BDD).
"""

import math
import re
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from coursehub.errors import ValidationError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: str) -> bool:
    return bool(value) and EMAIL_RE.match(value) is not None


def require_fields(data: Mapping[str, Any], fields: Iterable[str]) -> None:
    """Lève ValidationError sur le premier champ absent, None ou vide."""
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"Le champ '{field}' est obligatoire.", constraint=field)


def validate_email(value: str) -> None:
    if not is_valid_email(value):
        raise ValidationError("Format d'email invalide.", constraint="email")


def validate_positive(value: int, field: str = "max_participants") -> None:
    if value <= 0:
        raise ValidationError(f"Le champ '{field}' doit être supérieur à 0.", constraint=field)


def as_utc(value: datetime) -> datetime:
    """Les datetime sans fuseau sont considérés comme UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_date_window(start: datetime, end: datetime) -> None:
    if as_utc(start) >= as_utc(end):
        raise ValidationError("La date de fin doit être postérieure à la date de début.", constraint="end_date")


def validate_not_in_past(value: datetime, now: datetime, field: str = "start_date") -> None:
    if as_utc(value) < as_utc(now):
        raise ValidationError("La date de début ne peut pas être dans le passé.", constraint=field)


def days_until(value: datetime, now: datetime) -> int:
    """Nombre de jours restants avant `value`, arrondi au jour supérieur."""
    delta = as_utc(value) - as_utc(now)
    return math.ceil(delta.total_seconds() / 86400)
