from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from datacascade.core import dependencies
from datacascade.data.template_data import TemplateData
from datacascade.main import app

from tests.site_files import write_json, write_text


@pytest.fixture
def template_data(site, make_config, monkeypatch):
    write_json(site / "package.json", {"name": "blog"})
    write_json(site / "src" / "_data" / "site.json", {"title": "Blog"})
    write_json(site / "src" / "pages" / "pages.json", {"layout": "page"})
    td = TemplateData(config=make_config())
    monkeypatch.setattr(dependencies, "_template_data", td)
    return td


@pytest.fixture
def client(template_data):
    with TestClient(app) as c:
        yield c


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_startup_primes_cache(client, template_data):
    assert template_data.global_data is not None


def test_global_data(client):
    resp = client.get("/data")
    assert resp.status_code == 200
    assert resp.json() == {"site": {"title": "Blog"}, "pkg": {"name": "blog"}}


def test_local_data(client):
    resp = client.get("/data/local", params={"path": "src/pages/about.md"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["layout"] == "page"
    assert body["site"] == {"title": "Blog"}


def test_local_data_requires_path(client):
    assert client.get("/data/local").status_code == 422


def test_local_paths(client):
    resp = client.get("/data/paths", params={"path": "src/pages/blog/post1.md"})
    assert resp.json() == [
        "src/pages/pages.json",
        "src/pages/blog/blog.json",
        "src/pages/blog/post1.json",
    ]


def test_info(client):
    assert client.get("/data/info").json() == {
        "input_dir": "src",
        "data_dir": "src/_data",
        "data_template_engine": None,
    }


def test_refresh_picks_up_new_files(client, site):
    write_json(site / "src" / "_data" / "late.json", {"v": 1})
    assert "late" not in client.get("/data").json()
    resp = client.post("/data/refresh")
    assert resp.status_code == 200
    assert resp.json()["late"] == {"v": 1}


def test_parse_error_is_reported(client, site):
    write_text(site / "src" / "pages" / "pages.json", "{broken")
    resp = client.get("/data/local", params={"path": "src/pages/about.md"})
    assert resp.status_code == 500
    assert "pages.json" in resp.json()["detail"]
