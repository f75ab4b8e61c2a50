import io
import json

from agency_cms.models.hero_image import HeroImage
from agency_cms.models.home_content import HomeContent


def test_anonymous_get_returns_placeholder(client):
    response = client.get("/api/v1/home")

    assert response.status_code == 200
    body = response.get_json()
    assert body["content"]["id"] is None
    assert body["hero_images"] == []
    assert HomeContent.query.count() == 0


def test_authenticated_get_creates_content(client, auth_headers):
    response = client.get("/api/v1/home", headers=auth_headers)

    assert response.status_code == 200
    assert response.get_json()["content"]["id"] == HomeContent.query.one().id


def test_put_without_token_is_unauthenticated(client):
    response = client.put("/api/v1/home", json={"content": {"hero_title": "x"}})

    assert response.status_code == 401
    assert response.get_json()["error"] == "Unauthenticated"
    assert HomeContent.query.count() == 0


def test_put_json_saves_aggregate(client, auth_headers):
    payload = {
        "content": {"hero_title": "Hello", "cta_title": "Call"},
        "hero_images": [{"image_url": "https://cdn.test/a.png"}],
        "stats": [{"number": "12", "label": "Countries", "icon": "Globe"}],
        "services_preview": [{"title": "SEO", "description": "Rank", "image": {"url": ""}}],
    }

    response = client.put("/api/v1/home", json=payload, headers=auth_headers)

    assert response.status_code == 200
    body = response.get_json()
    assert body["content"]["hero_title"] == "Hello"
    assert body["hero_images"][0]["display_order"] == 1
    assert body["stats"][0]["icon"] == "Globe"
    assert body["services_preview"][0]["title"] == "SEO"


def test_put_multipart_uploads_pending_file(client, auth_headers):
    data = {
        "content": {"hero_title": "With image"},
        "hero_images": [{"image": {"type": "file", "value": "hero_0"}}],
    }

    response = client.put(
        "/api/v1/home",
        data={
            "data": json.dumps(data),
            "hero_0": (io.BytesIO(b"png-bytes"), "hero.png"),
        },
        content_type="multipart/form-data",
        headers=auth_headers,
    )

    assert response.status_code == 200
    url = response.get_json()["hero_images"][0]["image_url"]
    assert url.startswith("http://media.test/")
    assert HeroImage.query.one().image_url == url


def test_put_rejects_invalid_icon(client, auth_headers):
    response = client.put(
        "/api/v1/home",
        json={"stats": [{"number": "1", "label": "x", "icon": "Dragon"}]},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "InvariantViolation"


def test_put_rejects_malformed_payload(client, auth_headers):
    response = client.put(
        "/api/v1/home",
        data={"data": "{not json"},
        content_type="multipart/form-data",
        headers=auth_headers,
    )

    assert response.status_code == 400


def test_delete_item_endpoint(client, auth_headers):
    saved = client.put(
        "/api/v1/home",
        json={"hero_images": [{"image_url": "a.png"}, {"image_url": "b.png"}]},
        headers=auth_headers,
    ).get_json()
    target = saved["hero_images"][0]["id"]

    response = client.delete(f"/api/v1/home/hero-images/{target}", headers=auth_headers)

    assert response.status_code == 200
    assert [i.image_url for i in HeroImage.query.all()] == ["b.png"]


def test_delete_unknown_item_reports_error(client, auth_headers):
    response = client.delete("/api/v1/home/stats/missing", headers=auth_headers)

    assert response.status_code == 409
    assert response.get_json()["error"] == "DeleteError"


def test_delete_without_token(client):
    response = client.delete("/api/v1/home/stats/anything")

    assert response.status_code == 401


def test_delete_unknown_collection(client, auth_headers):
    response = client.delete("/api/v1/home/packages/1", headers=auth_headers)

    assert response.status_code == 404


def test_image_upload_endpoint(client, auth_headers):
    response = client.post(
        "/api/v1/images/upload",
        data={"file": (io.BytesIO(b"gif"), "logo.gif")},
        content_type="multipart/form-data",
        headers=auth_headers,
    )

    assert response.status_code == 201
    assert response.get_json()["url"].endswith(".gif")


def test_put_without_content_id_updates_existing_content(client, auth_headers):
    client.get("/api/v1/home", headers=auth_headers)

    response = client.put(
        "/api/v1/home", json={"content": {"hero_title": "Hello"}}, headers=auth_headers
    )

    assert response.status_code == 200
    assert HomeContent.query.count() == 1
    body = client.get("/api/v1/home").get_json()
    assert body["content"]["hero_title"] == "Hello"


def test_put_rejects_non_string_image_url(client, auth_headers):
    response = client.put(
        "/api/v1/home", json={"hero_images": [{"image_url": 5}]}, headers=auth_headers
    )

    assert response.status_code == 400
    assert HeroImage.query.count() == 0


def test_image_upload_without_file_is_client_error(client, auth_headers):
    response = client.post(
        "/api/v1/images/upload",
        data={},
        content_type="multipart/form-data",
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.get_json() == {"error": "InvalidUpload", "message": "No file selected"}


def test_image_upload_rejects_disallowed_extension(client, auth_headers):
    response = client.post(
        "/api/v1/images/upload",
        data={"file": (io.BytesIO(b"text"), "notes.txt")},
        content_type="multipart/form-data",
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "InvalidUpload"
