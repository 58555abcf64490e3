from flask import Blueprint, request
from notetodo.weights import service
from notetodo.weights.schemas import WeightIn, RecordIn, WeightOut
from notetodo.common.authz import login_required, current_identity
from notetodo.common.utils import success

bp = Blueprint("weights", __name__)

weight_in = WeightIn()
record_in = RecordIn()
weight_out = WeightOut()

def _owner_id():
    return current_identity().id

def _dump(weight):
    return weight_out.dump(weight) if weight is not None else None

@bp.get("/")
@login_required
def get_weight_data():
    # aucun agrégat = état normal pour un nouvel utilisateur -> data: null
    return success(_dump(service.get_or_none(_owner_id())))

@bp.post("/")
@login_required
def save_weight_data():
    payload = request.get_json(silent=True) or {}
    data = weight_in.load(payload)
    return success(_dump(service.upsert_profile(_owner_id(), data)))

@bp.delete("/")
@login_required
def reset_weight_data():
    service.reset(_owner_id())
    return success({})

@bp.post("/record")
@login_required
def add_weight_record():
    payload = request.get_json(silent=True) or {}
    data = record_in.load(payload)
    weight = service.add_record(_owner_id(), data["date"], data["weight"], data.get("note"))
    return success(_dump(weight))

@bp.delete("/record/<record_id>")
@login_required
def delete_weight_record(record_id):
    return success(_dump(service.delete_record(_owner_id(), record_id)))
