import uuid
from sqlalchemy import Uuid, ForeignKey
from notetodo.extensions import db

class Notebook(db.Model):
    __tablename__ = "notebooks"

    id = db.Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False, default="")

    owner_id = db.Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    # côté "carnet" du lien: ids (str) des notes, dans l'ordre d'ajout.
    # Réassigner une nouvelle liste à chaque modification (JSON non mutable-tracké).
    note_ids = db.Column(db.JSON, nullable=False, default=list)

    created_at = db.Column(db.DateTime, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=False)

    def has_note(self, note_id) -> bool:
        return str(note_id) in (self.note_ids or [])
