from notetodo.extensions import db
from notetodo.common.errors import BadRequest, Forbidden, NotFound
from notetodo.common.utils import parse_id, utcnow


class OwnedRepository:
    """
    CRUD générique sur une collection dont chaque ligne appartient à un utilisateur.

    Les sous-classes déclarent:
      - model:     classe SQLAlchemy (doit avoir owner_id, created_at, updated_at)
      - label:     nom lisible utilisé dans les messages d'erreur
      - writable:  champs acceptés en création / mise à jour
      - required:  champs obligatoires (non vides après strip)
      - trimmed:   champs texte à nettoyer (strip)
      - ordering:  colonne de tri, ex: Note.created_at.desc()

    Les horodatages sont posés ici, explicitement, avant persistance.
    """

    model = None
    label = "Resource"
    writable = ()
    required = ()
    trimmed = ()

    def ordering(self):
        return self.model.created_at.desc()

    # --- Lecture ---
    def list(self, owner_id):
        return (
            db.session.query(self.model)
            .filter(self.model.owner_id == owner_id)
            .order_by(self.ordering())
            .all()
        )

    def find(self, entity_id):
        entity = db.session.get(self.model, parse_id(entity_id, self.label))
        if entity is None:
            raise NotFound(f"{self.label} not found.")
        return entity

    def check_owner(self, entity, owner_id):
        if entity.owner_id != owner_id:
            raise Forbidden(
                f"No permission to access this {self.label.lower()}.",
                details={"id": str(entity.id)},
            )
        return entity

    def get(self, entity_id, owner_id):
        return self.check_owner(self.find(entity_id), owner_id)

    # --- Écriture ---
    def clean(self, fields: dict, partial: bool) -> dict:
        data = {k: v for k, v in fields.items() if k in self.writable}
        for key in self.trimmed:
            if isinstance(data.get(key), str):
                data[key] = data[key].strip()
        for key in self.required:
            if partial and key not in data:
                continue
            if not data.get(key):
                raise BadRequest(f"{self.label} {key} is required.", details={"field": key})
        return data

    def stamp(self, entity, created=False):
        now = utcnow()
        if created and getattr(entity, "created_at", None) is None:
            entity.created_at = now
        entity.updated_at = now

    def create(self, owner_id, fields: dict):
        data = self.clean(fields, partial=False)
        entity = self.model(owner_id=owner_id, **data)
        self.stamp(entity, created=True)
        db.session.add(entity)
        db.session.commit()
        return entity

    def update(self, entity_id, owner_id, fields: dict):
        entity = self.get(entity_id, owner_id)
        for key, value in self.clean(fields, partial=True).items():
            setattr(entity, key, value)
        self.stamp(entity)
        db.session.commit()
        return entity

    def before_delete(self, entity):
        """Point d'extension (détachements, cascades) avant suppression."""

    def delete(self, entity_id, owner_id):
        entity = self.get(entity_id, owner_id)
        self.before_delete(entity)
        db.session.delete(entity)
        db.session.commit()
