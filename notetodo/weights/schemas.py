import datetime as dt

from marshmallow import Schema, fields, validate, ValidationError

GENDERS = ("male", "female")

class DayOrDateTime(fields.DateTime):
    """Accepte "2024-05-01" comme "2024-05-01T08:30:00+08:00" (minuit UTC pour une date seule)."""

    def _deserialize(self, value, attr, data, **kwargs):
        try:
            return super()._deserialize(value, attr, data, **kwargs)
        except ValidationError:
            try:
                day = dt.date.fromisoformat(str(value))
            except ValueError:
                raise ValidationError("Not a valid date or datetime.")
            return dt.datetime(day.year, day.month, day.day)

class ProfileIn(Schema):
    height = fields.Float(required=True, validate=validate.Range(min=0, min_inclusive=False))
    weight = fields.Float(required=True, validate=validate.Range(min=0, min_inclusive=False))
    age = fields.Integer(required=True, validate=validate.Range(min=0))
    gender = fields.String(required=True, validate=validate.OneOf(GENDERS))
    start_date = DayOrDateTime(data_key="startDate")

class RecordIn(Schema):
    # date / weight obligatoires: contrôlés par le service (BadRequest explicite)
    date = DayOrDateTime(load_default=None)
    weight = fields.Float(load_default=None, validate=validate.Range(min=0, min_inclusive=False))
    note = fields.String(load_default=None, allow_none=True)

class WeightIn(Schema):
    profile = fields.Nested(ProfileIn, load_default=None)
    records = fields.List(fields.Nested(RecordIn))

class ProfileOut(Schema):
    height = fields.Float()
    weight = fields.Float()
    age = fields.Integer()
    gender = fields.String()
    start_date = fields.DateTime(data_key="startDate")

class RecordOut(Schema):
    id = fields.UUID()
    date = fields.DateTime()
    weight = fields.Float()
    note = fields.String(allow_none=True)

class WeightOut(Schema):
    id = fields.UUID()
    owner = fields.UUID(attribute="owner_id")
    profile = fields.Nested(ProfileOut)
    records = fields.List(fields.Nested(RecordOut))
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")
