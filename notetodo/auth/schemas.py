from marshmallow import Schema, fields, validate

USERNAME_LENGTH = validate.Length(min=3, max=64)

class TrimmedString(fields.String):
    """Chaîne nettoyée (strip) avant les validateurs: "  ab  " est trop court."""

    def _deserialize(self, value, attr, data, **kwargs):
        return super()._deserialize(value, attr, data, **kwargs).strip()

class RegisterSchema(Schema):
    username = TrimmedString(required=True, validate=USERNAME_LENGTH)
    # bcrypt ignore au-delà de 72 octets
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=6, max=72))
    avatar = fields.URL(load_default=None, allow_none=True, validate=validate.Length(max=2048))

class LoginSchema(Schema):
    username = fields.String(required=True)
    password = fields.String(required=True, load_only=True)

class AvatarSchema(Schema):
    avatar = fields.URL(required=True, validate=validate.Length(max=2048))

class IdentityOut(Schema):
    id = fields.UUID(required=True)
    username = fields.String(required=True)
    avatar = fields.String(required=True)
    is_admin = fields.Boolean(required=True, data_key="isAdmin")
