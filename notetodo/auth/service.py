import logging
import uuid

from flask import current_app
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import undefer

from notetodo.extensions import db
from notetodo.users.models import User
from notetodo.common.errors import BadRequest, Conflict, Unauthenticated
from notetodo.common.utils import utcnow

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password."
USERNAME_MIN = 3

def normalize_username(username: str) -> str:
    return (username or "").strip()

def register_user(username: str, password: str, avatar: str | None = None) -> User:
    username_n = normalize_username(username)
    if not username_n or not password:
        raise BadRequest("Username & password required.")
    if len(username_n) < USERNAME_MIN:
        raise BadRequest(f"Username must be at least {USERNAME_MIN} characters.", details={"field": "username"})

    if User.query.filter_by(username=username_n).first() is not None:
        raise Conflict("Username already taken.", details={"username": username_n})

    # le tout premier compte devient administrateur
    # NB: test puis insertion non atomiques; deux inscriptions simultanées sur
    # une base vide peuvent toutes deux obtenir is_admin
    is_first = db.session.query(User.id).first() is None

    user = User(
        username=username_n,
        avatar=avatar or current_app.config["DEFAULT_AVATAR"],
        is_admin=is_first,
        created_at=utcnow(),
    )
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("Username already taken.", details={"username": username_n})

    logger.info("user_registered", extra={"user_id": str(user.id)})
    return user

def authenticate_user(username: str, password: str) -> User:
    """Même message pour "inconnu" et "mauvais mot de passe" (pas d'énumération)."""
    user: User | None = (
        User.query.options(undefer(User.password_hash))
        .filter_by(username=normalize_username(username))
        .first()
    )
    if not user or not user.check_password(password or ""):
        raise Unauthenticated(INVALID_CREDENTIALS)
    return user

def issue_token(user: User) -> str:
    """JWT signé, durée JWT_ACCESS_TOKEN_EXPIRES (30 j), sans état côté serveur."""
    claims = {"username": user.username, "is_admin": user.is_admin}
    return create_access_token(identity=str(user.id), additional_claims=claims)

def load_identity(subject) -> User | None:
    """sub -> User, relu en base à chaque requête (suppression = révocation)."""
    try:
        uid = uuid.UUID(str(subject))
    except ValueError:
        return None
    return db.session.get(User, uid)

def resolve_token(token: str) -> User:
    """
    Même résolution que le guard HTTP (signature, expiration, relecture en base),
    utilisable hors requête, ex: scripts ou shell Flask.
    """
    if not token:
        raise Unauthenticated("Missing token.")
    try:
        payload = decode_token(token)
    except (PyJWTError, JWTExtendedException):
        raise Unauthenticated("Invalid or expired token.")
    user = load_identity(payload.get("sub"))
    if user is None:
        raise Unauthenticated("User not found.")
    return user

def update_avatar(user: User, avatar: str) -> User:
    if not avatar:
        raise BadRequest("Avatar URL required.")
    user.avatar = avatar
    db.session.commit()
    return user
