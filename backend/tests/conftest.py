import io

import pytest
from flask_jwt_extended import create_access_token
from werkzeug.datastructures import FileStorage

from agency_cms import create_app
from agency_cms.domain.session import AuthSession
from agency_cms.extensions import db
from agency_cms.models.user import User


@pytest.fixture
def app(tmp_path):
    app = create_app("testing")
    app.config["UPLOAD_FOLDER"] = str(tmp_path / "uploads")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin(app):
    user = User()
    user.email = "admin@example.com"
    user.role = "admin"
    user.set_password("s3cret-pass")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def session(admin):
    return AuthSession(user_id=admin.id, role="admin")


@pytest.fixture
def auth_headers(admin):
    token = create_access_token(identity=admin.id, additional_claims={"role": "admin"})
    return {"Authorization": f"Bearer {token}"}


def make_upload(filename="hero.png", data=b"\x89PNG fake image bytes"):
    return FileStorage(stream=io.BytesIO(data), filename=filename, content_type="image/png")


@pytest.fixture
def upload_file():
    return make_upload
