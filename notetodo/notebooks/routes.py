from flask import Blueprint, request
from notetodo.notebooks.schemas import NotebookIn, NotebookOut, NotebookDetailOut
from notetodo.notebooks.service import notebooks
from notetodo.notebooks import relations
from notetodo.common.authz import login_required, current_identity
from notetodo.common.utils import success

bp = Blueprint("notebooks", __name__)

notebook_in = NotebookIn()
notebook_in_partial = NotebookIn(partial=True)
notebook_out = NotebookOut()
notebook_out_many = NotebookOut(many=True)
notebook_detail_out = NotebookDetailOut()

def _owner_id():
    return current_identity().id

@bp.get("/")
@login_required
def list_notebooks():
    items = notebooks.list(_owner_id())
    return success(notebook_out_many.dump(items), count=len(items))

@bp.post("/")
@login_required
def create_notebook():
    payload = request.get_json(silent=True) or {}
    data = notebook_in.load(payload)
    notebook = notebooks.create(_owner_id(), data)
    return success(notebook_out.dump(notebook), status=201)

@bp.get("/<notebook_id>")
@login_required
def get_notebook(notebook_id):
    detail = notebooks.get_with_notes(notebook_id, _owner_id())
    return success(notebook_detail_out.dump(detail))

@bp.put("/<notebook_id>")
@login_required
def update_notebook(notebook_id):
    payload = request.get_json(silent=True) or {}
    data = notebook_in_partial.load(payload)
    notebook = notebooks.update(notebook_id, _owner_id(), data)
    return success(notebook_out.dump(notebook))

@bp.delete("/<notebook_id>")
@login_required
def delete_notebook(notebook_id):
    # les notes du carnet sont détachées, pas supprimées
    notebooks.delete(notebook_id, _owner_id())
    return success({})

@bp.put("/<notebook_id>/notes/<note_id>")
@login_required
def add_note(notebook_id, note_id):
    notebook = relations.attach(notebook_id, note_id, _owner_id())
    return success(notebook_out.dump(notebook))

@bp.delete("/<notebook_id>/notes/<note_id>")
@login_required
def remove_note(notebook_id, note_id):
    notebook = relations.detach(notebook_id, note_id, _owner_id())
    return success(notebook_out.dump(notebook))
