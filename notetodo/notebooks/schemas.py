from marshmallow import Schema, fields, validate
from notetodo.notes.schemas import NoteOut

class NotebookIn(Schema):
    title = fields.String(required=True, validate=validate.Length(max=200))
    description = fields.String(load_default="")

class NotebookOut(Schema):
    id = fields.UUID(required=True)
    title = fields.String(required=True)
    description = fields.String(required=True)
    owner = fields.UUID(attribute="owner_id", required=True)
    notes = fields.List(fields.String(), attribute="note_ids")
    created_at = fields.DateTime(required=True, data_key="createdAt")
    updated_at = fields.DateTime(required=True, data_key="updatedAt")

class NotebookDetailOut(NotebookOut):
    """GET /notebooks/<id>: les notes sont développées, dans l'ordre du carnet."""
    notes = fields.List(fields.Nested(NoteOut), attribute="members")
