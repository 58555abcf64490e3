import uuid
from sqlalchemy import Uuid, ForeignKey
from notetodo.extensions import db

class Weight(db.Model):
    """Agrégat unique par utilisateur: profil + historique des pesées."""
    __tablename__ = "weights"

    id = db.Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = db.Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, unique=True, index=True)

    # profil
    height = db.Column(db.Float, nullable=False)
    start_weight = db.Column(db.Float, nullable=False)
    age = db.Column(db.Integer, nullable=False)
    gender = db.Column(db.String(16), nullable=False)  # "male" | "female"
    start_date = db.Column(db.DateTime, nullable=False)

    records = db.relationship(
        "WeightRecord",
        back_populates="weight_log",
        cascade="all, delete-orphan",
        order_by="WeightRecord.date.desc()",
        lazy="selectin",
    )

    created_at = db.Column(db.DateTime, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=False)

    @property
    def profile(self) -> dict:
        return {
            "height": self.height,
            "weight": self.start_weight,
            "age": self.age,
            "gender": self.gender,
            "start_date": self.start_date,
        }


class WeightRecord(db.Model):
    __tablename__ = "weight_records"

    id = db.Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    weight_id = db.Column(Uuid(as_uuid=True), ForeignKey("weights.id", ondelete="CASCADE"), nullable=False, index=True)
    weight_log = db.relationship("Weight", back_populates="records")

    date = db.Column(db.DateTime, nullable=False)
    weight = db.Column(db.Float, nullable=False)
    note = db.Column(db.Text, nullable=True)
