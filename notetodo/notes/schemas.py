from marshmallow import Schema, fields, validate

class NoteIn(Schema):
    # strip + "non vide" vérifiés dans le repository
    title = fields.String(required=True, validate=validate.Length(max=200))
    content = fields.String(load_default="")
    completed = fields.Boolean(load_default=False)
    # une note peut être antidatée par le client
    created_at = fields.DateTime(data_key="createdAt")

class NoteOut(Schema):
    id = fields.UUID(required=True)
    title = fields.String(required=True)
    content = fields.String(required=True)
    completed = fields.Boolean(required=True)
    owner = fields.UUID(attribute="owner_id", required=True)
    notebook = fields.UUID(attribute="notebook_id", allow_none=True)
    created_at = fields.DateTime(required=True, data_key="createdAt")
    updated_at = fields.DateTime(required=True, data_key="updatedAt")
