# notetodo/common/health.py
from flask import Blueprint, current_app, jsonify
from sqlalchemy import text

from notetodo.extensions import db

bp = Blueprint("health", __name__)

def _db_up() -> bool:
    try:
        with db.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False

def _redis_state() -> str:
    # redis n'est sondé que s'il sert de stockage au limiter
    uri = current_app.config.get("RATELIMIT_STORAGE_URI") or "memory://"
    if not uri.startswith(("redis://", "rediss://")):
        return "n/a"
    try:
        import redis  # import tardif
        redis.from_url(uri).ping()
        return "up"
    except Exception:
        return "down"

@bp.get("/healthz")
def healthz():
    return jsonify({
        "status": "ok",
        "env": current_app.config.get("APP_ENV_NAME"),
        "db": "up" if _db_up() else "down",
    })

@bp.get("/readyz")
def readyz():
    checks = {"db": "up" if _db_up() else "down", "redis": _redis_state()}
    ok = "down" not in checks.values()
    checks["status"] = "ok" if ok else "error"
    return jsonify(checks), (200 if ok else 503)
