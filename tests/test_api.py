"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from api.main import create_app, parse_id
from src.lib.settings import Settings
from src.racing.errors import InvalidInput

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(Settings(random_seed=3)))


def _add_driver(client, driver_id, car_type="GT", hp=500, name=None):
    return client.post(
        "/drivers",
        json={
            "id": driver_id,
            "name": name or f"driver{driver_id}",
            "carType": car_type,
            "horsePower": hp,
        },
    )


def _seed_example(client):
    for driver_id, car_type, hp in [(1, "GT", 500), (2, "GT", 530), (3, "GT", 600), (4, "F1", 900)]:
        assert _add_driver(client, driver_id, car_type, hp).status_code == 200


# ---------------------------------------------------------------------------
# Drivers
# ---------------------------------------------------------------------------


def test_create_and_get_driver(client) -> None:
    response = _add_driver(client, 7, "F1", 950, name="Jim")
    assert response.status_code == 200
    assert response.json() == {
        "id": 7, "name": "Jim", "carType": "F1", "horsePower": 950, "raceId": None
    }

    response = client.get("/drivers/7")
    assert response.status_code == 200
    assert response.json()["name"] == "Jim"


def test_create_driver_zero_id(client) -> None:
    response = _add_driver(client, 0)
    assert response.status_code == 400
    assert response.json()["detail"] == "ID is required"


def test_create_driver_missing_id(client) -> None:
    response = client.post("/drivers", json={"name": "No Id", "carType": "GT", "horsePower": 500})
    assert response.status_code == 400


def test_create_driver_duplicate(client) -> None:
    _add_driver(client, 1, name="First")
    response = _add_driver(client, 1, name="Second")
    assert response.status_code == 409
    assert client.get("/drivers/1").json()["name"] == "First"


def test_create_driver_malformed_body(client) -> None:
    response = client.post("/drivers", json={"id": "abc"})
    assert response.status_code == 400
    assert isinstance(response.json()["detail"], list)
    assert "Traceback" not in response.text
    assert "File " not in response.text


def test_create_driver_mistyped_fields_rejected(client) -> None:
    """Numeric strings and floats are not coerced into ids."""
    assert client.post("/drivers", json={"id": "7", "name": "x"}).status_code == 400
    assert client.post("/drivers", json={"id": 8.0, "name": "x"}).status_code == 400
    assert client.post("/drivers", json={"id": 9, "horsePower": "500"}).status_code == 400
    assert client.get("/drivers").json() == []


def test_create_race_mistyped_label_rejected(client) -> None:
    _seed_example(client)
    assert client.post("/races", json={"label": 5}).status_code == 400
    assert client.get("/races").json() == []


def test_get_driver_errors(client) -> None:
    assert client.get("/drivers/99").status_code == 404
    response = client.get("/drivers/abc")
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid ID"


def test_list_drivers(client) -> None:
    assert client.get("/drivers").json() == []
    _seed_example(client)
    assert [d["id"] for d in client.get("/drivers").json()] == [1, 2, 3, 4]


# ---------------------------------------------------------------------------
# Races
# ---------------------------------------------------------------------------


def test_create_race(client) -> None:
    _seed_example(client)
    response = client.post("/races", json={"label": "GT", "winner": "cheat", "driverIds": [3, 4]})
    assert response.status_code == 200

    race = response.json()
    assert race["id"] == 1
    assert race["label"] == "GT"
    assert race["driverIds"] == [1, 2]
    assert race["winner"] in {"driver1", "driver2"}

    assert client.get("/races/1").json() == race
    assert client.get("/races").json() == [race]


def test_create_race_insufficient_drivers(client) -> None:
    _seed_example(client)
    response = client.post("/races", json={"label": "F1"})
    assert response.status_code == 400
    assert "not enough drivers" in response.json()["detail"]
    assert client.get("/races").json() == []


def test_race_ids_increment(client) -> None:
    _seed_example(client)
    ids = [client.post("/races", json={"label": "GT"}).json()["id"] for _ in range(3)]
    assert ids == [1, 2, 3]


def test_get_race_errors(client) -> None:
    assert client.get("/races/1").status_code == 404
    assert client.get("/races/one").status_code == 400


def test_lenient_id_tokens_rejected(client) -> None:
    """Ids Python's int() would accept but that are not plain integers."""
    _add_driver(client, 10)
    assert client.get("/drivers/10").status_code == 200
    assert client.get("/drivers/1_0").status_code == 400
    assert client.get("/drivers/%2010%20").status_code == 400
    assert client.get("/races/%201").status_code == 400


def test_unhandled_error_returns_500(monkeypatch) -> None:
    app = create_app(Settings())

    def explode(label):
        raise RuntimeError("boom")

    monkeypatch.setattr(app.state.orchestrator, "form_race", explode)
    response = TestClient(app, raise_server_exceptions=False).post("/races", json={"label": "GT"})
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


def test_health(client) -> None:
    _seed_example(client)
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["drivers"] == 4
    assert body["races"] == 0


def test_apps_do_not_share_state() -> None:
    first = TestClient(create_app(Settings()))
    second = TestClient(create_app(Settings()))
    _add_driver(first, 1)
    assert second.get("/drivers").json() == []


def test_parse_id() -> None:
    assert parse_id("12") == 12
    with pytest.raises(InvalidInput):
        parse_id("1.5")
    for token in ("1_0", " 1", "10 ", "\u0661", "", "0x1"):
        with pytest.raises(InvalidInput):
            parse_id(token)
