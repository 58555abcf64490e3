import os
from flask import Flask, jsonify, request
from flask_limiter import RateLimitExceeded
from dotenv import load_dotenv

from .config import DevConfig, ProdConfig, TestConfig
from .extensions import db, migrate, jwt, cors, limiter
from .common.errors import register_error_handlers, error_body
from .common.logging import setup_json_logging, register_request_logging

CONFIGS = {
    "test": TestConfig,
    "testing": TestConfig,
    "production": ProdConfig,
}

def _csv(value, default_if_empty):
    """"a, b" -> ["a", "b"]; None -> défaut; toute autre valeur passe telle quelle."""
    if value is None:
        return default_if_empty
    if isinstance(value, str) and "," in value:
        return [x.strip() for x in value.split(",") if x.strip()] or default_if_empty
    return value


def create_app():
    load_dotenv()  # .env si présent (dev)

    app = Flask(__name__)

    env = os.getenv("APP_ENV") or os.getenv("FLASK_ENV", "development")
    app.config.from_object(CONFIGS.get(env, DevConfig))
    app.config["APP_ENV_NAME"] = env

    # /api/v1/notes et /api/v1/notes/ désignent la même ressource
    app.url_map.strict_slashes = False

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    setup_json_logging(app)
    register_request_logging(app)

    cors.init_app(app, resources={
        r"/api/*": {
            "origins": _csv(app.config.get("CORS_ORIGINS", "*"), "*"),
            "allow_headers": _csv(app.config.get("CORS_ALLOW_HEADERS"), ["Authorization", "Content-Type"]),
            "expose_headers": _csv(app.config.get("CORS_EXPOSE_HEADERS"), ["Content-Type"]),
            "supports_credentials": False,
        }
    })

    # lit RATELIMIT_* depuis app.config
    limiter.init_app(app)

    # tables visibles pour Flask-Migrate/Alembic
    from .users import models as users_models          # noqa: F401
    from .notes import models as notes_models          # noqa: F401
    from .notebooks import models as notebooks_models  # noqa: F401
    from .weights import models as weights_models      # noqa: F401

    register_error_handlers(app)

    from .auth.tokens import register_jwt_callbacks
    register_jwt_callbacks(jwt)

    @app.after_request
    def set_security_headers(resp):
        # uniquement du JSON: CSP fermé
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'; base-uri 'none'"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["Referrer-Policy"] = "no-referrer"

        behind_https = request.is_secure or request.headers.get("X-Forwarded-Proto", "") == "https"
        if (env == "production" or app.config.get("ENFORCE_HTTPS")) and behind_https:
            resp.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains; preload"
        return resp

    @app.errorhandler(RateLimitExceeded)
    def handle_rate_limit(e):
        return jsonify(error_body("Rate limit exceeded.", "rate_limited")), 429

    # --- Blueprints ---
    from .auth.routes import bp as auth_bp
    from .users.routes import bp as users_bp
    from .notes.routes import bp as notes_bp
    from .notebooks.routes import bp as notebooks_bp
    from .weights.routes import bp as weights_bp
    from .docs.routes import bp as docs_bp
    from .common.health import bp as health_bp

    for prefix, blueprint in (
        ("auth", auth_bp),
        ("users", users_bp),
        ("notes", notes_bp),
        ("notebooks", notebooks_bp),
        ("weights", weights_bp),
    ):
        app.register_blueprint(blueprint, url_prefix=f"/api/v1/{prefix}")
    app.register_blueprint(docs_bp)
    app.register_blueprint(health_bp)

    # quota par défaut sur les données (ex: 60/min)
    limiter.limit("60/minute")(notes_bp)
    limiter.limit("60/minute")(notebooks_bp)

    return app
