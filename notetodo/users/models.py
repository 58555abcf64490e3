import uuid
from sqlalchemy import Uuid
from sqlalchemy.orm import deferred
from passlib.hash import bcrypt
from notetodo.extensions import db

class User(db.Model):
    __tablename__ = "users"

    id = db.Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    # jamais chargé par les requêtes par défaut (undefer explicite au login)
    password_hash = deferred(db.Column(db.String(255), nullable=False))
    avatar = db.Column(db.String(2048), nullable=False)
    is_admin = db.Column(db.Boolean, nullable=False, default=False, index=True)

    created_at = db.Column(db.DateTime, nullable=False)

    # helpers mot de passe (sel aléatoire inclus dans le hash bcrypt)
    def set_password(self, raw_password: str) -> None:
        self.password_hash = bcrypt.hash(raw_password)

    def check_password(self, raw_password: str) -> bool:
        return bcrypt.verify(raw_password, self.password_hash)

    def __repr__(self):
        return f"<User {self.username}>"
