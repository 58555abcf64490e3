from flask import Blueprint, request
from notetodo.users import service
from notetodo.users.schemas import UserOut, UserUpdateIn
from notetodo.common.authz import login_required, admin_required, current_identity
from notetodo.common.utils import success

bp = Blueprint("users", __name__)
user_out = UserOut()
user_out_many = UserOut(many=True)
user_update_in = UserUpdateIn()

@bp.get("/")
@admin_required
def list_users():
    # simple listing (pas de pagination)
    users = service.list_users()
    return success(user_out_many.dump(users), count=len(users))

@bp.get("/<user_id>")
@login_required
def get_user(user_id):
    user = service.get_user(current_identity(), user_id)
    return success(user_out.dump(user))

@bp.put("/<user_id>")
@login_required
def update_user(user_id):
    payload = request.get_json(silent=True) or {}
    data = user_update_in.load(payload)
    user = service.update_user(current_identity(), user_id, data)
    return success(user_out.dump(user))

@bp.delete("/<user_id>")
@admin_required
def delete_user(user_id):
    service.delete_user(current_identity(), user_id)
    return success({})
