from marshmallow import Schema, fields, EXCLUDE

from notetodo.auth.schemas import TrimmedString, USERNAME_LENGTH

class UserOut(Schema):
    id = fields.UUID(required=True)
    username = fields.String(required=True)
    avatar = fields.String(required=True)
    is_admin = fields.Boolean(required=True, data_key="isAdmin")
    created_at = fields.DateTime(required=True, data_key="createdAt")

class UserUpdateIn(Schema):
    # password / avatar ont leurs propres routes: ignorés ici, sans erreur
    class Meta:
        unknown = EXCLUDE

    username = TrimmedString(validate=USERNAME_LENGTH)
    is_admin = fields.Boolean(data_key="isAdmin")
