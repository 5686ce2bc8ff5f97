"""Tests for the HTTP endpoints."""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from cardcanvas.config import Config
from cardcanvas.server import create_app

AVATAR = "https://img.example/avatar.png"
LANDSCAPE = "https://img.example/landscape.png"


@pytest.fixture
def client(dict_loader):
    return TestClient(create_app(Config(), loader=dict_loader))


def assert_error(response, status_code, message):
    assert response.status_code == status_code
    body = response.json()
    assert body["error"] == message
    datetime.fromisoformat(body["timestamp"])


def test_get_renders_png(client):
    response = client.get("/canvas/snews", params={"headline": "he love Jea", "name": "Lance", "pfp": AVATAR, "bg": LANDSCAPE})

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content.startswith(b"\x89PNG")


def test_post_renders_png(client, dict_loader):
    response = client.post("/canvas/snews", json={"headline": "he love Jea", "name": "Lance", "pfp": AVATAR})

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert dict_loader.calls == [AVATAR, AVATAR]


@pytest.mark.parametrize(
    "params",
    [
        {},
        {"headline": "x", "name": "Lance"},
        {"headline": "x", "pfp": AVATAR},
        {"name": "Lance", "pfp": AVATAR},
    ],
)
def test_missing_parameters(client, params):
    response = client.get("/canvas/snews", params=params)
    assert_error(response, 400, "Missing required parameters: headline, name, pfp")


def test_post_without_body_is_missing_parameters(client):
    response = client.post("/canvas/snews")
    assert_error(response, 400, "Missing required parameters: headline, name, pfp")


def test_invalid_pfp_url(client):
    response = client.get("/canvas/snews", params={"headline": "x", "name": "Lance", "pfp": "not a url"})
    assert_error(response, 400, "Invalid pfp URL")


def test_invalid_bg_url(client):
    response = client.get("/canvas/snews", params={"headline": "x", "name": "Lance", "pfp": AVATAR, "bg": "ftp://host/bg.png"})
    assert_error(response, 400, "Invalid bg URL")


def test_load_failure_maps_to_bad_gateway(client):
    response = client.get(
        "/canvas/snews",
        params={"headline": "x", "name": "Lance", "pfp": "https://img.example/gone.png"},
    )

    assert response.status_code == 502
    assert "gone.png" in response.json()["error"]


def test_unexpected_failure_maps_to_server_error():
    def broken_loader(source):
        raise RuntimeError("decoder exploded")

    client = TestClient(create_app(Config(), loader=broken_loader))

    response = client.get("/canvas/snews", params={"headline": "x", "name": "Lance", "pfp": AVATAR})

    assert_error(response, 500, "decoder exploded")


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_post_accepts_non_string_values(client):
    response = client.post("/canvas/snews", json={"headline": 5, "name": "Lance", "pfp": AVATAR})

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"


def test_post_non_object_body_is_bad_request(client):
    response = client.post("/canvas/snews", json=["he love Jea", "Lance", AVATAR])
    assert_error(response, 400, "Invalid request parameters")


def test_post_malformed_json_is_bad_request(client):
    response = client.post("/canvas/snews", content=b"{not json", headers={"content-type": "application/json"})
    assert_error(response, 400, "Invalid request parameters")
