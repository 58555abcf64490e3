import uuid
from sqlalchemy import Uuid, ForeignKey
from notetodo.extensions import db

class Note(db.Model):
    __tablename__ = "notes"

    id = db.Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False, default="")
    completed = db.Column(db.Boolean, nullable=False, default=False)

    owner_id = db.Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    # côté "note" du lien carnet <-> note; modifié uniquement par notebooks.relations
    notebook_id = db.Column(Uuid(as_uuid=True), ForeignKey("notebooks.id"), nullable=True, index=True)

    created_at = db.Column(db.DateTime, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=False)
