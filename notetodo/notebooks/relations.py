"""
Lien carnet <-> note.

Deux références indépendantes: Notebook.note_ids (liste ordonnée) et
Note.notebook_id. Elles ne sont modifiées qu'ici, jamais ailleurs.
Les deux côtés sont écrits dans la même transaction.
"""
import logging

from notetodo.extensions import db
from notetodo.notes.models import Note
from notetodo.notebooks.models import Notebook
from notetodo.common.errors import BadRequest, Forbidden, NotFound
from notetodo.common.utils import parse_id, utcnow

logger = logging.getLogger(__name__)


def _load_pair(notebook_id, note_id, owner_id):
    notebook = db.session.get(Notebook, parse_id(notebook_id, "Notebook"))
    if notebook is None:
        raise NotFound("Notebook not found.")
    note = db.session.get(Note, parse_id(note_id, "Note"))
    if note is None:
        raise NotFound("Note not found.")
    if notebook.owner_id != owner_id or note.owner_id != owner_id:
        raise Forbidden("No permission to perform this operation.")
    return notebook, note

def _without(notebook: Notebook, note_id) -> list:
    return [i for i in (notebook.note_ids or []) if i != str(note_id)]


def attach(notebook_id, note_id, owner_id) -> Notebook:
    notebook, note = _load_pair(notebook_id, note_id, owner_id)
    if notebook.has_note(note.id):
        raise BadRequest("Note is already in this notebook.")

    now = utcnow()
    # une note appartient à au plus un carnet: on la retire de l'ancien
    if note.notebook_id is not None and note.notebook_id != notebook.id:
        previous = db.session.get(Notebook, note.notebook_id)
        if previous is not None:
            previous.note_ids = _without(previous, note.id)
            previous.updated_at = now

    notebook.note_ids = [*(notebook.note_ids or []), str(note.id)]
    notebook.updated_at = now
    note.notebook_id = notebook.id
    note.updated_at = now
    db.session.commit()

    logger.info("note_attached", extra={"notebook_id": str(notebook.id), "note_id": str(note.id)})
    return notebook

def detach(notebook_id, note_id, owner_id) -> Notebook:
    notebook, note = _load_pair(notebook_id, note_id, owner_id)
    if not notebook.has_note(note.id):
        raise BadRequest("Note is not in this notebook.")

    now = utcnow()
    notebook.note_ids = _without(notebook, note.id)
    notebook.updated_at = now
    note.notebook_id = None
    note.updated_at = now
    db.session.commit()

    logger.info("note_detached", extra={"notebook_id": str(notebook.id), "note_id": str(note.id)})
    return notebook

def cascade_on_notebook_delete(notebook_id) -> int:
    """Détache (sans les supprimer) toutes les notes qui pointent sur ce carnet. Pas de commit."""
    orphans = Note.query.filter(Note.notebook_id == notebook_id).all()
    for note in orphans:
        note.notebook_id = None
    db.session.flush()
    return len(orphans)

def release_note(note: Note) -> None:
    """Avant suppression d'une note: la retire de son carnet. Pas de commit."""
    if note.notebook_id is None:
        return
    notebook = db.session.get(Notebook, note.notebook_id)
    if notebook is not None:
        notebook.note_ids = _without(notebook, note.id)
        notebook.updated_at = utcnow()
    note.notebook_id = None
    db.session.flush()
