"""
Pytest configuration and fixtures

Settings are read from the environment when `app` is first imported, so the
database and public directory are pointed at a scratch location here before
anything from the project is imported.
"""
import io
import os
import shutil
import tempfile

import pytest

_SCRATCH = tempfile.mkdtemp(prefix="portal-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_SCRATCH}/portal.db"
os.environ["PUBLIC_DIR"] = os.path.join(_SCRATCH, "public")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_SAMPLE_CONTENT"] = "false"

from fastapi.testclient import TestClient
from PIL import Image

from app.config.bootstrap import bootstrap
from app.config.database import Base, SessionLocal, engine
from app.config.settings import settings
import main


@pytest.fixture(autouse=True)
def fresh_store():
    """Empty schema and asset directories, default admin seeded"""
    Base.metadata.drop_all(bind=engine)
    for directory in (settings.backgrounds_dir, settings.system_images_dir):
        shutil.rmtree(directory, ignore_errors=True)
    bootstrap()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client():
    return TestClient(main.app)


@pytest.fixture
def make_image():
    def _make(width=64, height=64, color=(200, 30, 30), fmt="PNG", mode="RGB"):
        img = Image.new(mode, (width, height), color)
        buf = io.BytesIO()
        img.save(buf, format=fmt)
        return buf.getvalue()
    return _make
