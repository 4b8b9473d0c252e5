from flask.testing import FlaskClient

from sip_tracker.app import create_app
from sip_tracker.config import Settings


def test_ping_returns_pong(client: FlaskClient):
    response = client.get("/api/ping")

    assert response.status_code == 200
    assert response.json == {"message": "pong"}


def test_cors_origins_come_from_settings():
    app = create_app(Settings(cors_origins=["https://sips.example.com"]))
    with app.test_client() as client:
        allowed = client.get("/api/ping", headers={"Origin": "https://sips.example.com"})
        other = client.get("/api/ping", headers={"Origin": "https://evil.example.com"})

    assert allowed.headers.get("Access-Control-Allow-Origin") == "https://sips.example.com"
    assert "Access-Control-Allow-Origin" not in other.headers
