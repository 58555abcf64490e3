import uuid
from datetime import datetime, timezone

from flask import jsonify

from notetodo.common.errors import NotFound

def success(data=None, status=200, count=None, **extra):
    """Enveloppe uniforme {success, data, count?} (+ champs additionnels, ex: token)."""
    body = {"success": True, "data": data}
    if count is not None:
        body["count"] = count
    body.update(extra)
    return jsonify(body), status

def utcnow() -> datetime:
    # Horodatage UTC naïf: même comportement sur PostgreSQL et SQLite
    return datetime.now(timezone.utc).replace(tzinfo=None)

def to_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value

def parse_id(raw, label="Resource") -> uuid.UUID:
    """Un identifiant mal formé est traité comme introuvable, jamais comme une 500."""
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except (TypeError, ValueError):
        raise NotFound(f"{label} not found.")
