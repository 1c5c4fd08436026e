import os
import tempfile

# config.py lee el entorno al importarse: apuntar DATA_DIR a un temporal
# antes de que cualquier test importe main/config.
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="music-uploader-tests-"))
os.environ.setdefault("ENV", "development")

import pytest
from fastapi.testclient import TestClient

from config import settings


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", tmp_path / "uploads")
    monkeypatch.setattr(settings, "METADATA_FILE", tmp_path / "songs.json")
    monkeypatch.setattr(settings, "API_URL", "http://api.test:4000")
    return tmp_path


@pytest.fixture
def app(data_dir):
    from main import create_app
    return create_app()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def upload(client):
    def _upload(name="song.mp3", content=b"ID3fake-mp3-bytes", mimetype="audio/mpeg", **fields):
        return client.post(
            "/upload",
            files={"track": (name, content, mimetype)},
            data=fields,
        )
    return _upload


@pytest.fixture
def anyio_backend():
    return "asyncio"
