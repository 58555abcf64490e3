from notetodo.common.repository import OwnedRepository
from notetodo.common.utils import to_utc_naive
from notetodo.notes.models import Note
from notetodo.notebooks import relations


class NoteRepository(OwnedRepository):
    model = Note
    label = "Note"
    writable = ("title", "content", "completed", "created_at")
    required = ("title",)
    trimmed = ("title", "content")

    def ordering(self):
        return Note.created_at.desc()

    def clean(self, fields, partial):
        data = super().clean(fields, partial)
        if data.get("created_at") is not None:
            data["created_at"] = to_utc_naive(data["created_at"])
        else:
            data.pop("created_at", None)
        return data

    def before_delete(self, entity):
        # pas de référence pendante dans le carnet
        relations.release_note(entity)


notes = NoteRepository()
