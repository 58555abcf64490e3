"""
Suivi du poids: un agrégat par utilisateur (profil + pesées datées).

Au plus une pesée par jour calendaire. Le jour est obtenu en tronquant la
date UTC décalée de WEIGHT_DAY_UTC_OFFSET_HOURS (une seule valeur pour tous
les utilisateurs). Les pesées restent triées par date décroissante.
"""
from datetime import timedelta

from flask import current_app

from notetodo.extensions import db
from notetodo.weights.models import Weight, WeightRecord
from notetodo.common.errors import BadRequest, NotFound
from notetodo.common.utils import parse_id, to_utc_naive, utcnow


def day_of(value, offset_hours=None):
    if offset_hours is None:
        offset_hours = current_app.config.get("WEIGHT_DAY_UTC_OFFSET_HOURS", 0)
    return (to_utc_naive(value) + timedelta(hours=offset_hours)).date()

def _sort_records(weight: Weight):
    weight.records.sort(key=lambda r: r.date, reverse=True)

def _apply_profile(weight: Weight, profile: dict):
    weight.height = profile["height"]
    weight.start_weight = profile["weight"]
    weight.age = profile["age"]
    weight.gender = profile["gender"]
    if profile.get("start_date") is not None:
        weight.start_date = to_utc_naive(profile["start_date"])
    elif weight.start_date is None:
        weight.start_date = utcnow()

def _upsert_record(weight: Weight, date, value, note=None):
    date = to_utc_naive(date)
    day = day_of(date)
    for record in weight.records:
        if day_of(record.date) == day:
            # même jour: on écrase, pas de doublon
            record.weight = value
            if note:
                record.note = note
            return record
    record = WeightRecord(date=date, weight=value, note=note)
    weight.records.append(record)
    return record


def get_or_none(owner_id) -> Weight | None:
    return Weight.query.filter_by(owner_id=owner_id).first()

def upsert_profile(owner_id, payload: dict) -> Weight:
    if not payload.get("profile"):
        raise BadRequest("Profile information is required.")

    now = utcnow()
    weight = get_or_none(owner_id)
    if weight is None:
        weight = Weight(owner_id=owner_id, created_at=now)
        db.session.add(weight)

    _apply_profile(weight, payload["profile"])

    if "records" in payload:
        weight.records = []
        for item in payload["records"] or []:
            if item.get("date") is None or item.get("weight") is None:
                raise BadRequest("Each record needs a date and a weight.")
            _upsert_record(weight, item["date"], item["weight"], item.get("note"))

    _sort_records(weight)
    weight.updated_at = now
    db.session.commit()
    return weight

def add_record(owner_id, date, value, note=None) -> Weight:
    if date is None or value is None:
        raise BadRequest("Date and weight are required.")
    weight = get_or_none(owner_id)
    if weight is None:
        raise NotFound("Create a weight profile first.")

    _upsert_record(weight, date, value, note)
    _sort_records(weight)
    weight.updated_at = utcnow()
    db.session.commit()
    return weight

def delete_record(owner_id, record_id) -> Weight:
    weight = get_or_none(owner_id)
    if weight is None:
        raise NotFound("Weight data not found.")
    rid = parse_id(record_id, "Record")
    record = next((r for r in weight.records if r.id == rid), None)
    if record is None:
        raise NotFound("Record not found.")

    weight.records.remove(record)
    weight.updated_at = utcnow()
    db.session.commit()
    return weight

def reset(owner_id) -> None:
    # idempotent: rien à faire si aucun agrégat
    weight = get_or_none(owner_id)
    if weight is not None:
        db.session.delete(weight)
        db.session.commit()
