# notetodo/docs/spec.py
from apispec import APISpec
from apispec.ext.marshmallow import MarshmallowPlugin
from marshmallow import Schema, fields

from notetodo.auth.schemas import RegisterSchema, LoginSchema, AvatarSchema, IdentityOut
from notetodo.users.schemas import UserOut, UserUpdateIn
from notetodo.notes.schemas import NoteIn, NoteOut
from notetodo.notebooks.schemas import NotebookIn, NotebookOut, NotebookDetailOut
from notetodo.weights.schemas import (
    ProfileIn, RecordIn, WeightIn, ProfileOut, RecordOut, WeightOut,
)

PREFIX = "/api/v1"
BEARER = [{"bearerAuth": []}]

class EnvelopeSchema(Schema):
    success = fields.Boolean(required=True)
    data = fields.Raw(allow_none=True)
    count = fields.Integer()

class ErrorSchema(Schema):
    success = fields.Boolean(required=True)
    error = fields.String(required=True)
    code = fields.String()
    details = fields.Dict()

class AuthEnvelopeSchema(Schema):
    success = fields.Boolean(required=True)
    token = fields.String(required=True)
    data = fields.Nested(IdentityOut)

def _ref(name: str):
    return {"$ref": f"#/components/schemas/{name}"}

def _json(name: str):
    return {"content": {"application/json": {"schema": _ref(name)}}}

def _body(name: str):
    return {"required": True, **_json(name)}

def _ok(description="OK", schema="Envelope"):
    return {"description": description, **_json(schema)}

def _errors(*codes):
    labels = {400: "Bad request", 401: "Unauthenticated", 403: "Forbidden",
              404: "Not found", 409: "Conflict"}
    return {str(c): {"description": labels[c], **_json("Error")} for c in codes}

def _path_params(*names):
    return [{"in": "path", "name": n, "required": True, "schema": {"type": "string"}} for n in names]

def _op(summary, responses, body=None, params=(), secured=True):
    op = {"summary": summary, "responses": responses}
    if secured:
        op["security"] = BEARER
    if body:
        op["requestBody"] = _body(body)
    if params:
        op["parameters"] = _path_params(*params)
    return op

def build_spec():
    spec = APISpec(
        title="NoteTodo API",
        version="1.0.0",
        openapi_version="3.0.3",
        info={"description": "Notes, notebooks & weight tracking API"},
        plugins=[MarshmallowPlugin()],
    )

    # Sécurité JWT Bearer
    spec.components.security_scheme(
        "bearerAuth",
        {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"},
    )

    # Composants (les schémas imbriqués d'abord)
    for name, schema in (
        ("Envelope", EnvelopeSchema), ("Error", ErrorSchema),
        ("Identity", IdentityOut), ("AuthEnvelope", AuthEnvelopeSchema),
        ("Register", RegisterSchema), ("Login", LoginSchema), ("Avatar", AvatarSchema),
        ("UserOut", UserOut), ("UserUpdate", UserUpdateIn),
        ("NoteIn", NoteIn), ("NoteOut", NoteOut),
        ("NotebookIn", NotebookIn), ("NotebookOut", NotebookOut), ("NotebookDetail", NotebookDetailOut),
        ("ProfileIn", ProfileIn), ("RecordIn", RecordIn), ("WeightIn", WeightIn),
        ("ProfileOut", ProfileOut), ("RecordOut", RecordOut), ("WeightOut", WeightOut),
    ):
        spec.components.schema(name, schema=schema)

    # ---- AUTH ----
    spec.path(path=f"{PREFIX}/auth/register", operations={
        "post": _op("Register (first account becomes admin)",
                    {"201": _ok("Created", "AuthEnvelope"), **_errors(400, 409)},
                    body="Register", secured=False),
    })
    spec.path(path=f"{PREFIX}/auth/login", operations={
        "post": _op("Login", {"200": _ok(schema="AuthEnvelope"), **_errors(400, 401)},
                    body="Login", secured=False),
    })
    spec.path(path=f"{PREFIX}/auth/me", operations={
        "get": _op("Get current user", {"200": _ok(), **_errors(401)}),
    })
    spec.path(path=f"{PREFIX}/auth/avatar", operations={
        "put": _op("Update avatar URL", {"200": _ok(), **_errors(400, 401)}, body="Avatar"),
    })

    # ---- NOTES ----
    spec.path(path=f"{PREFIX}/notes", operations={
        "get": _op("List my notes (newest first)", {"200": _ok(), **_errors(401)}),
        "post": _op("Create note", {"201": _ok("Created"), **_errors(400, 401)}, body="NoteIn"),
    })
    spec.path(path=f"{PREFIX}/notes/{{id}}", operations={
        "get": _op("Get note", {"200": _ok(), **_errors(401, 403, 404)}, params=("id",)),
        "put": _op("Update note (partial)", {"200": _ok(), **_errors(400, 401, 403, 404)},
                   body="NoteIn", params=("id",)),
        "delete": _op("Delete note", {"200": _ok(), **_errors(401, 403, 404)}, params=("id",)),
    })

    # ---- NOTEBOOKS ----
    spec.path(path=f"{PREFIX}/notebooks", operations={
        "get": _op("List my notebooks (recently updated first)", {"200": _ok(), **_errors(401)}),
        "post": _op("Create notebook", {"201": _ok("Created"), **_errors(400, 401)}, body="NotebookIn"),
    })
    spec.path(path=f"{PREFIX}/notebooks/{{id}}", operations={
        "get": _op("Get notebook with its notes", {"200": _ok(), **_errors(401, 403, 404)}, params=("id",)),
        "put": _op("Update notebook (partial)", {"200": _ok(), **_errors(400, 401, 403, 404)},
                   body="NotebookIn", params=("id",)),
        "delete": _op("Delete notebook (notes are detached, not deleted)",
                      {"200": _ok(), **_errors(401, 403, 404)}, params=("id",)),
    })
    spec.path(path=f"{PREFIX}/notebooks/{{id}}/notes/{{note_id}}", operations={
        "put": _op("Add note to notebook", {"200": _ok(), **_errors(400, 401, 403, 404)},
                   params=("id", "note_id")),
        "delete": _op("Remove note from notebook", {"200": _ok(), **_errors(400, 401, 403, 404)},
                      params=("id", "note_id")),
    })

    # ---- USERS ----
    spec.path(path=f"{PREFIX}/users", operations={
        "get": _op("List users (admin)", {"200": _ok(), **_errors(401, 403)}),
    })
    spec.path(path=f"{PREFIX}/users/{{id}}", operations={
        "get": _op("Get user (self or admin)", {"200": _ok(), **_errors(401, 403, 404)}, params=("id",)),
        "put": _op("Update user (self or admin)", {"200": _ok(), **_errors(400, 401, 403, 404, 409)},
                   body="UserUpdate", params=("id",)),
        "delete": _op("Delete user (admin, not self)", {"200": _ok(), **_errors(400, 401, 403, 404)},
                      params=("id",)),
    })

    # ---- WEIGHTS ----
    spec.path(path=f"{PREFIX}/weights", operations={
        "get": _op("Get my weight data (null if none)", {"200": _ok(), **_errors(401)}),
        "post": _op("Create or update weight profile", {"200": _ok(), **_errors(400, 401)}, body="WeightIn"),
        "delete": _op("Reset weight data", {"200": _ok(), **_errors(401)}),
    })
    spec.path(path=f"{PREFIX}/weights/record", operations={
        "post": _op("Add record (same day overwrites)", {"200": _ok(), **_errors(400, 401, 404)},
                    body="RecordIn"),
    })
    spec.path(path=f"{PREFIX}/weights/record/{{id}}", operations={
        "delete": _op("Delete record", {"200": _ok(), **_errors(401, 404)}, params=("id",)),
    })

    return spec.to_dict()
