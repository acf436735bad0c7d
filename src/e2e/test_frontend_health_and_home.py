import io

import pytest

import frontend.web as webmod
from frontend.web import app as flask_app
from headlines.engine import Engine

@pytest.mark.e2e
def test_frontend_health_reports_chain_stats(monkeypatch):
    eng = Engine(); eng.build(stream=io.BytesIO(b"health check line\nhealth check again"), prefix_length=2)
    monkeypatch.setattr(webmod, "_engine", eng)

    r = flask_app.test_client().get("/health")
    assert r.status_code == 200
    data = r.get_json()
    assert data["ok"] is True
    assert data["prefix_length"] == 2
    assert data["tokens"] == 4
    assert data["starting_prefixes"] == 1

def test_frontend_health_before_build(monkeypatch):
    monkeypatch.setattr(webmod, "_engine", Engine())
    r = flask_app.test_client().get("/health")
    assert r.status_code == 503
    assert r.get_json() == {"ok": False}

def test_frontend_home_page_renders():
    r = flask_app.test_client().get("/")
    assert r.status_code == 200
    html = r.data.decode("utf-8", errors="ignore").lower()
    assert "headlines" in html
    assert "/api/generate" in html
