import logging

from sqlalchemy.exc import IntegrityError

from notetodo.extensions import db
from notetodo.users.models import User
from notetodo.notes.models import Note
from notetodo.notebooks.models import Notebook
from notetodo.weights.models import Weight
from notetodo.common.errors import BadRequest, Conflict, Forbidden, NotFound
from notetodo.common.utils import parse_id
from notetodo.auth.service import USERNAME_MIN

logger = logging.getLogger(__name__)


def _load(user_id) -> User:
    user = db.session.get(User, parse_id(user_id, "User"))
    if user is None:
        raise NotFound("User not found.")
    return user

def _ensure_self_or_admin(actor: User, user_id):
    if not actor.is_admin and parse_id(user_id, "User") != actor.id:
        raise Forbidden("No permission to access another user's account.")

def list_users():
    return User.query.order_by(User.created_at.desc()).all()

def get_user(actor: User, user_id) -> User:
    _ensure_self_or_admin(actor, user_id)
    return _load(user_id)

def update_user(actor: User, user_id, fields: dict) -> User:
    _ensure_self_or_admin(actor, user_id)
    user = _load(user_id)

    if "username" in fields:
        username = (fields["username"] or "").strip()
        if len(username) < USERNAME_MIN:
            raise BadRequest(f"Username must be at least {USERNAME_MIN} characters.", details={"field": "username"})
        taken = User.query.filter(User.username == username, User.id != user.id).first()
        if taken is not None:
            raise Conflict("Username already taken.", details={"username": username})
        user.username = username

    # seul un admin peut (dé)promouvoir
    if "is_admin" in fields and actor.is_admin:
        user.is_admin = fields["is_admin"]

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("Username already taken.")
    return user

def delete_user(actor: User, user_id) -> None:
    user = _load(user_id)
    deleted_id = str(user.id)
    if user.id == actor.id:
        raise BadRequest("You cannot delete your own account.")

    # données possédées d'abord (FK owner_id)
    Note.query.filter_by(owner_id=user.id).delete(synchronize_session=False)
    db.session.flush()
    Notebook.query.filter_by(owner_id=user.id).delete(synchronize_session=False)
    weight = Weight.query.filter_by(owner_id=user.id).first()
    if weight is not None:
        db.session.delete(weight)
        db.session.flush()
    db.session.delete(user)
    db.session.commit()
    logger.info("user_deleted", extra={"user_id": deleted_id})
