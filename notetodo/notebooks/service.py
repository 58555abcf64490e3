import uuid

from notetodo.common.repository import OwnedRepository
from notetodo.notebooks.models import Notebook
from notetodo.notebooks import relations
from notetodo.notes.models import Note


class NotebookRepository(OwnedRepository):
    model = Notebook
    label = "Notebook"
    writable = ("title", "description")
    required = ("title",)
    trimmed = ("title", "description")

    def ordering(self):
        return Notebook.updated_at.desc()

    def members(self, notebook: Notebook) -> list:
        ids = [uuid.UUID(i) for i in (notebook.note_ids or [])]
        if not ids:
            return []
        found = {n.id: n for n in Note.query.filter(Note.id.in_(ids)).all()}
        return [found[i] for i in ids if i in found]

    def get_with_notes(self, entity_id, owner_id) -> dict:
        notebook = self.get(entity_id, owner_id)
        return {
            "id": notebook.id,
            "title": notebook.title,
            "description": notebook.description,
            "owner_id": notebook.owner_id,
            "members": self.members(notebook),
            "created_at": notebook.created_at,
            "updated_at": notebook.updated_at,
        }

    def before_delete(self, entity):
        relations.cascade_on_notebook_delete(entity.id)


notebooks = NotebookRepository()
