import pytest
from fastapi.testclient import TestClient

from forum.core.config import Settings
from forum.main import create_app
from tests.helpers import ADMIN_EMAIL, ADMIN_PASSWORD


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        SECRET_KEY="test-secret",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'forum.db'}",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        UPLOAD_MAX_BYTES=1024,
        COOKIE_SECURE=False,
        ALLOWED_ORIGINS="*",
        ADMIN_EMAIL=ADMIN_EMAIL,
        ADMIN_USERNAME="admin",
        ADMIN_PASSWORD=ADMIN_PASSWORD,
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def upload_dir(settings):
    return settings.UPLOAD_DIR
