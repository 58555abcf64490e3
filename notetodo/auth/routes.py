from flask import Blueprint, request, current_app

from notetodo.extensions import limiter
from notetodo.auth import service
from notetodo.auth.schemas import RegisterSchema, LoginSchema, AvatarSchema, IdentityOut
from notetodo.common.authz import login_required, current_identity
from notetodo.common.utils import success

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
avatar_schema = AvatarSchema()
identity_out = IdentityOut()


def _auth_response(user, status):
    """Enveloppe d'authentification: {success, token, data: {id, username, avatar, isAdmin}}."""
    token = service.issue_token(user)
    return success(identity_out.dump(user), status=status, token=token)


@bp.post("/register")
@limiter.limit(lambda: current_app.config.get("RATELIMIT_AUTH_REGISTER", "10/hour"))
def register():
    payload = request.get_json(silent=True) or {}
    data = register_schema.load(payload)
    user = service.register_user(data["username"], data["password"], data.get("avatar"))
    return _auth_response(user, 201)


@bp.post("/login")
@limiter.limit(lambda: current_app.config.get("RATELIMIT_AUTH_LOGIN", "5/minute"))
def login():
    payload = request.get_json(silent=True) or {}
    data = login_schema.load(payload)
    user = service.authenticate_user(data["username"], data["password"])
    return _auth_response(user, 200)


@bp.get("/me")
@login_required
def me():
    return success(identity_out.dump(current_identity()))


@bp.put("/avatar")
@login_required
def update_avatar():
    payload = request.get_json(silent=True) or {}
    data = avatar_schema.load(payload)
    user = service.update_avatar(current_identity(), data["avatar"])
    return success(identity_out.dump(user))
