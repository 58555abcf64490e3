# tests/conftest.py
import os, sys
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from notetodo import create_app
from notetodo.extensions import db

PASSWORD = "SuperSecret123"

@pytest.fixture(scope="session")
def app():
    app = create_app()
    app.config.update(TESTING=True)
    with app.app_context():
        db.drop_all()
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()

@pytest.fixture(autouse=True)
def _fresh_tables(app):
    # base vide à chaque test: la règle "premier inscrit = admin" doit être déterministe
    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.create_all()
    yield

@pytest.fixture()
def client(app):
    return app.test_client()

@pytest.fixture()
def register(client):
    """register("alice") -> (headers, identity)"""
    def _register(username, password=PASSWORD, **extra):
        r = client.post("/api/v1/auth/register", json={"username": username, "password": password, **extra})
        assert r.status_code == 201, r.get_json()
        body = r.get_json()
        return {"Authorization": f"Bearer {body['token']}"}, body["data"]
    return _register
