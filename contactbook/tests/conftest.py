from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient
from support import make_config

from contactbook.app import create_app
from contactbook.infrastructure.container import Container


@pytest.fixture()
def app(tmp_path: Path) -> Iterator[Flask]:
    flask_app = create_app(make_config(tmp_path))
    flask_app.testing = True
    yield flask_app
    container: Container = flask_app.extensions["contactbook"]
    container.engine.dispose()


@pytest.fixture()
def container(app: Flask) -> Container:
    return app.extensions["contactbook"]


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()
