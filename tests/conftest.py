from datetime import datetime, timezone

import pytest

from app import create_app
from models import store

JUNE_3 = datetime(2025, 6, 3, 10, 15, tzinfo=timezone.utc)
JUNE_4 = datetime(2025, 6, 4, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def app(data_dir):
    app = create_app({"TESTING": True, "DATA_DIR": str(data_dir)})
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def freeze_clock(monkeypatch):
    def _freeze(moment):
        monkeypatch.setattr(store, "clock", lambda: moment)
    return _freeze
