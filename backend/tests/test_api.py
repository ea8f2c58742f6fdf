def test_normalize_endpoint(client):
    response = client.post("/markdown/normalize", json={"markdown": "# Title   "})
    assert response.status_code == 200
    assert response.json() == {"markdown": "# Title"}


def test_preview_endpoint_distinguishes_missing_field(client):
    waiting = client.post("/markdown/preview", json={"payload": '{"term":"foo"'})
    assert waiting.json() == {"preview": None}
    partial = client.post("/markdown/preview", json={"payload": '{"markdown":"# Tit'})
    assert partial.json() == {"preview": "# Tit"}


def test_render_endpoint_reports_template(client):
    response = client.post(
        "/entries/render",
        json={"entry": {"term": "go", "definitions": ["to leave"]}},
    )
    assert response.status_code == 200
    assert response.json() == {
        "markdown": "# go\n\n## Definitions\n1. to leave",
        "template": "legacy",
    }
    empty = client.post("/entries/render", json={"entry": "text"})
    assert empty.json() == {"markdown": "", "template": "none"}


def test_lookup_then_cached_endpoint(client):
    missing = client.get("/entries/cached", params={"term": "go", "model": "test"})
    assert missing.status_code == 404

    response = client.post(
        "/entries/lookup",
        json={
            "term": "go",
            "model": "test",
            "chunks": [{"value": "# go\n"}, {"value": "1. to leave"}],
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "completed"
    assert body["markdown"] == "# go\n1. to leave"
    assert body["cache_key"] == "en:default:go:test:md1"

    cached = client.get("/entries/cached", params={"term": "go", "model": "test"})
    assert cached.status_code == 200
    assert cached.json()["markdown"] == "# go\n1. to leave"

    again = client.post("/entries/lookup", json={"term": "go", "model": "test"})
    assert again.json()["from_cache"] is True


def test_lookup_without_stream_is_bad_request(client):
    response = client.post("/entries/lookup", json={"term": "nothing", "model": "test"})
    assert response.status_code == 400


def test_lookup_blank_term_is_idle(client):
    response = client.post("/entries/lookup", json={"term": ""})
    assert response.status_code == 200
    assert response.json()["status"] == "idle"
