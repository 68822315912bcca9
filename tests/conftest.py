from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from highscore_api.app.core.db import ConnectionPool, init_db
from highscore_api.app.main import create_app
from highscore_api.app.services.highscore_service import HighscoreService


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "highscores.db")


@pytest.fixture
def pool(db_path):
    pool = ConnectionPool(db_path, size=5, timeout=5.0)
    init_db(pool)
    yield pool
    pool.close()


@pytest.fixture
def service(pool):
    return HighscoreService(pool)


@pytest.fixture
def client(db_path):
    app = create_app(database_url=db_path, seed_demo=False)
    with TestClient(app) as api:
        yield api
