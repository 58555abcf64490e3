from flask import Blueprint, request
from notetodo.notes.schemas import NoteIn, NoteOut
from notetodo.notes.service import notes
from notetodo.common.authz import login_required, current_identity
from notetodo.common.utils import success

bp = Blueprint("notes", __name__)

note_in = NoteIn()
note_in_partial = NoteIn(partial=True)
note_out = NoteOut()
note_out_many = NoteOut(many=True)

def _owner_id():
    return current_identity().id

@bp.post("/")
@login_required
def create_note():
    payload = request.get_json(silent=True) or {}
    data = note_in.load(payload)
    note = notes.create(_owner_id(), data)
    return success(note_out.dump(note), status=201)

@bp.get("/")
@login_required
def list_notes():
    items = notes.list(_owner_id())
    return success(note_out_many.dump(items), count=len(items))

@bp.get("/<note_id>")
@login_required
def get_note(note_id):
    note = notes.get(note_id, _owner_id())
    return success(note_out.dump(note))

@bp.put("/<note_id>")
@login_required
def update_note(note_id):
    payload = request.get_json(silent=True) or {}
    # Validations partielles (autorise subset des champs)
    data = note_in_partial.load(payload)
    note = notes.update(note_id, _owner_id(), data)
    return success(note_out.dump(note))

@bp.delete("/<note_id>")
@login_required
def delete_note(note_id):
    notes.delete(note_id, _owner_id())
    return success({})
