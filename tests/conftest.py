from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from sip_tracker.app import create_app
from sip_tracker.config import Settings


@pytest.fixture()
def app():
    return create_app(Settings(log_level="DEBUG"))


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
