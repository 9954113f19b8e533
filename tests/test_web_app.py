"""
tests/test_web_app.py

Flask routes, driven through the test client.
"""
import pytest
import web_app
from seatgen.models import SeatingConfig


@pytest.fixture
def client(monkeypatch, tmp_path):
    config = SeatingConfig(rows=3, columns=3, roster=["Ava", "Ben", "Chloe"],
                           separation_pairs=[("Ava", "Ben")], seed=11)
    monkeypatch.setattr(web_app, "g_config", config)
    monkeypatch.setattr(web_app, "g_arrangement", None)
    monkeypatch.setitem(web_app.app.config, "SEAT_CONFIG_FILE", str(tmp_path / "seat_config.json"))
    web_app.app.config["TESTING"] = True
    with web_app.app.test_client() as client:
        yield client


def test_generate_route(client):
    response = client.get("/generate")
    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    assert set(body["arrangement"]["assignment"]) == {"Ava", "Ben", "Chloe"}
    assert body["arrangement"]["seed"] == 11

def test_generate_with_seed_is_repeatable(client):
    first = client.get("/generate?seed=abc").get_json()
    second = client.get("/generate?seed=abc").get_json()
    assert first["arrangement"]["assignment"] == second["arrangement"]["assignment"]
    assert first["arrangement"]["seed_label"] == "abc (string)"

def test_arrangement_before_and_after_generate(client):
    assert client.get("/api/arrangement").status_code == 404
    client.get("/generate")
    body = client.get("/api/arrangement").get_json()
    assert body["success"] is True
    assert "Seed: 11" in body["text"]

def test_download(client):
    assert client.get("/download").status_code == 400
    client.get("/generate")
    response = client.get("/download")
    assert response.status_code == 200
    assert response.data[:2] == b"PK"

def test_unsatisfiable_is_422(client, monkeypatch):
    config = SeatingConfig(rows=1, columns=2, roster=["a", "b"],
                           separation_pairs=[("a", "b")], seed=1, max_attempts=5)
    monkeypatch.setattr(web_app, "g_config", config)
    response = client.get("/generate")
    assert response.status_code == 422
    body = response.get_json()
    assert body["attempts"] == 5
    assert body["violations"]

def test_config_error_is_400(client, monkeypatch):
    monkeypatch.setattr(web_app, "g_config", SeatingConfig(rows=1, columns=1, roster=["a", "b"]))
    response = client.get("/generate")
    assert response.status_code == 400
    assert response.get_json()["problems"]

def test_missing_config_file(client, monkeypatch):
    monkeypatch.setattr(web_app, "g_config", None)
    response = client.get("/generate")
    assert response.status_code == 400
    assert "No seating config" in response.get_json()["error"]

def test_index_page(client):
    response = client.get("/")
    assert response.status_code == 200
    page = response.get_data(as_text=True)
    assert "FRONT" in page
    assert "Ava" in page

def test_seed_preview(client):
    body = client.get("/api/seed-preview?seed=42").get_json()
    assert body == {"seed": 42, "label": "42 (integer)"}

def test_config_get_and_post(client, tmp_path):
    assert client.get("/api/config").get_json()["config"]["row_count"] == 3

    payload = {"row_count": 2, "column_count": 2, "names": "x y", "seed": 3}
    response = client.post("/api/config?save=1", json=payload)
    assert response.status_code == 200
    assert web_app.g_config.roster == ("x", "y")
    assert (tmp_path / "seat_config.json").exists()

def test_config_post_rejects_bad_payload(client):
    response = client.post("/api/config", json={"row_count": "many", "column_count": 2})
    assert response.status_code == 400
    assert response.get_json()["success"] is False

def test_config_post_rejects_invalid_config_without_saving(client, tmp_path):
    payload = {"row_count": 1, "column_count": 1, "names": "a b c"}
    response = client.post("/api/config?save=1", json=payload)
    assert response.status_code == 400
    assert "Too many students" in response.get_json()["problems"][0]
    assert not (tmp_path / "seat_config.json").exists()
    assert web_app.g_config.roster == ("Ava", "Ben", "Chloe")

def test_config_post_rejects_non_object(client):
    response = client.post("/api/config", json=[1, 2])
    assert response.status_code == 400
    assert response.get_json()["problems"] == ["Config must be a JSON object"]

def test_seed_preview_loads_config(client, monkeypatch, tmp_path):
    (tmp_path / "seat_config.json").write_text(
        '{"row_count": 2, "column_count": 2, "names": "a b", "seed": 77}', encoding="utf-8")
    monkeypatch.setattr(web_app, "g_config", None)
    body = client.get("/api/seed-preview").get_json()
    assert body == {"seed": 77, "label": "77 (integer)"}
