import pytest

from app import create_app
from config import TestingConfig
from extensions import db


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(intern_id, name="Test User"):
        return client.post(
            "/login",
            data={"name": name, "intern_id": intern_id},
            follow_redirects=False,
        )
    return _login
