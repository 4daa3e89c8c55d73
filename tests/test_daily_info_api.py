"""Tests for the daily info and attachment endpoints."""
from app.core.exceptions import ExtractionError


def upload(content=b"fake-image", name="page.png", content_type="image/png"):
    return ("files", (name, content, content_type))


async def create_task(client, **overrides):
    payload = {"date": "2025-10-20", "title": "Leltár", "content": "Hűtőpult leltár"}
    payload.update(overrides)
    r = await client.post("/api/daily-info/", json=payload)
    assert r.status_code == 201
    return r.json()


async def test_root(client):
    r = await client.get("/")
    assert r.status_code == 200
    assert "Bolti Napló" in r.json()["message"]


async def test_create_then_fetch_returns_same_fields(client):
    created = await create_task(client, deadline="2025-10-20T22:00:00", image_urls=["http://test/files/a.png"])
    r = await client.get(f"/api/daily-info/{created['id']}")
    assert r.status_code == 200
    fetched = r.json()
    for field in ("date", "title", "content", "deadline", "completed", "image_urls"):
        assert fetched[field] == created[field]
    assert fetched["deadline"] == "2025-10-20T22:00:00"
    assert fetched["completed"] is False


async def test_missing_record_is_404(client):
    r = await client.get("/api/daily-info/9999")
    assert r.status_code == 404
    assert r.json()["detail"] == "A rekord nem található"

    r = await client.post("/api/daily-info/9999/toggle")
    assert r.status_code == 404


async def test_validation_error_is_422(client):
    r = await client.post("/api/daily-info/", json={"date": "2025-10-20", "title": ""})
    assert r.status_code == 422


async def test_day_view_progress_and_holiday(client):
    first = await create_task(client, date="2025-10-23", title="Első")
    await create_task(client, date="2025-10-23", title="Második")

    r = await client.post(f"/api/daily-info/{first['id']}/toggle")
    assert r.json()["completed"] is True

    r = await client.get("/api/daily-info/day/2025-10-23")
    assert r.status_code == 200
    view = r.json()
    assert view["week_number"] == 43
    assert view["holiday"] == "Nemzeti ünnep"
    assert view["is_weekend"] is False
    assert [t["title"] for t in view["todo"]] == ["Második"]
    assert [t["title"] for t in view["done"]] == ["Első"]
    assert view["completion_percentage"] == 50
    assert view["has_task_list"] is False


async def test_update_search_and_delete(client):
    task = await create_task(client)
    r = await client.patch(f"/api/daily-info/{task['id']}", json={"title": "Árazás"})
    assert r.json()["title"] == "Árazás"
    assert r.json()["content"] == "Hűtőpult leltár"

    r = await client.get("/api/daily-info/search", params={"q": "HŰTŐPULT"})
    assert [t["id"] for t in r.json()] == [task["id"]]

    r = await client.delete(f"/api/daily-info/{task['id']}")
    assert r.status_code == 204
    r = await client.get(f"/api/daily-info/{task['id']}")
    assert r.status_code == 404


async def test_markers_endpoint(client):
    await create_task(client, date="2025-10-01", completed=True)
    r = await client.get("/api/daily-info/markers")
    assert r.status_code == 200
    assert "2025-10-01" in r.json()


async def test_task_list_import_creates_tasks_with_deadlines(client, fake_gemini):
    r = await client.post("/api/attachments/task-list", params={"date": "2025-10-20"})
    assert r.status_code == 201
    placeholder = r.json()
    assert placeholder["title"] == "napi_info_10.20"
    assert placeholder["status"] == "pending"
    assert placeholder["is_task_list"] is True

    fake_gemini.outputs = [{
        "informaciok": [
            {"tema": "Leltár", "erintett": "Minden dolgozó", "tartalom": "Napzárásig kész legyen", "tartalmaz_kepet": True},
            {"tema": "", "tartalom": "Új plakátok", "tartalmaz_kepet": False},
        ]
    }]
    fake_gemini.answers = [{"deadline": "2025-10-20T22:00:00"}, {"deadline": None}]

    r = await client.post(f"/api/attachments/{placeholder['id']}/task-list", files=[upload()])
    assert r.status_code == 200
    result = r.json()
    assert result["attachment"]["status"] == "uploaded"
    assert len(result["attachment"]["file_urls"]) == 1

    first, second = result["tasks"]
    assert first["title"] == "Leltár"
    assert first["content"] == "Érintett: Minden dolgozó\n\nNapzárásig kész legyen"
    assert first["deadline"] == "2025-10-20T22:00:00"
    assert first["image_urls"] == result["attachment"]["file_urls"]
    assert second["title"] == "Napi infó"
    assert second["deadline"] is None
    assert second["image_urls"] == []

    r = await client.get("/api/daily-info/day/2025-10-20")
    assert len(r.json()["todo"]) == 2
    assert r.json()["has_task_list"] is True

    # A feladatlista törlése a nap feladatait is viszi
    r = await client.delete(f"/api/attachments/{placeholder['id']}")
    assert r.json() == {"deleted_tasks": 2}
    r = await client.get("/api/daily-info/day/2025-10-20")
    assert r.json()["todo"] == []


async def test_task_list_import_unreadable_is_422(client, fake_gemini):
    r = await client.post("/api/attachments/task-list", params={"date": "2025-10-20"})
    fake_gemini.outputs = [None]
    r = await client.post(f"/api/attachments/{r.json()['id']}/task-list", files=[upload()])
    assert r.status_code == 422
    assert r.json()["detail"] == ExtractionError.DEFAULT_MESSAGE


async def test_unsupported_file_type_is_skipped(client, fake_gemini):
    fake_gemini.outputs = [{"documents": ["Plakát"]}]
    r = await client.post(
        "/api/attachments/scan-list",
        params={"date": "2025-10-20"},
        files=[upload(b"hello", "notes.txt", "text/plain")],
    )
    assert r.status_code == 422
    assert fake_gemini.mime_types == []


async def test_document_list_scan_skips_existing_names(client, fake_gemini):
    await client.post("/api/attachments/task-list", params={"date": "2025-10-20"})
    fake_gemini.outputs = [{"documents": ["napi_info_10.20", "Plakát", "Plakát", "Akciós lista"]}]

    r = await client.post("/api/attachments/scan-list", params={"date": "2025-10-20"}, files=[upload()])
    assert r.status_code == 201
    assert [a["title"] for a in r.json()] == ["Plakát", "Akciós lista"]

    r = await client.get("/api/attachments/", params={"date": "2025-10-20"})
    assert [a["title"] for a in r.json()] == ["napi_info_10.20", "Plakát", "Akciós lista"]


async def test_plain_attachment_upload_and_delete_day(client, fake_gemini):
    r = await client.post("/api/attachments/", json={"date": "2025-10-21", "title": "Plakát"})
    assert r.status_code == 201
    doc = r.json()
    assert doc["is_task_list"] is False
    assert doc["status"] == "pending"

    r = await client.post(f"/api/attachments/{doc['id']}/upload", files=[upload(name="1.png"), upload(name="2.png")])
    assert r.status_code == 200
    assert r.json()["status"] == "uploaded"
    assert len(r.json()["file_urls"]) == 2
    assert fake_gemini.mime_types == []

    await create_task(client, date="2025-10-21")
    r = await client.delete("/api/daily-info/day/2025-10-21")
    assert r.json() == {"tasks": 1, "attachments": 1}


async def test_structure_content(client, fake_gemini):
    fake_gemini.answers = [{
        "leading_description": "Árcsere:",
        "items": [{"key": "123456", "value": "Alma"}],
        "trailing_description": "",
    }]
    r = await client.post(
        "/api/daily-info/content/structure",
        json={"content": "Érintett: Kassza\n\nÁrcsere: 123456 Alma"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["affected"] == "Kassza"
    assert body["items"] == [{"key": "123456", "value": "Alma"}]


async def test_structure_content_fallback(client, fake_gemini):
    r = await client.post("/api/daily-info/content/structure", json={"content": "Csak szöveg"})
    assert r.json() == {
        "affected": None,
        "leading_description": "Csak szöveg",
        "items": [],
        "trailing_description": "",
    }


async def test_aware_deadline_is_stored_as_local_time(client):
    # Október végéig nyári időszámítás (UTC+2), decemberben UTC+1
    task = await create_task(client, deadline="2025-10-20T20:00:00Z")
    assert task["deadline"] == "2025-10-20T22:00:00"

    r = await client.patch(f"/api/daily-info/{task['id']}", json={"deadline": "2025-12-01T10:00:00+00:00"})
    assert r.json()["deadline"] == "2025-12-01T11:00:00"

    r = await client.patch(f"/api/daily-info/{task['id']}", json={"deadline": "2025-12-02T09:30:00"})
    assert r.json()["deadline"] == "2025-12-02T09:30:00"


async def test_update_rejects_null_or_empty_required_fields(client):
    task = await create_task(client)
    for patch in ({"title": None}, {"title": ""}, {"completed": None}, {"content": None}):
        r = await client.patch(f"/api/daily-info/{task['id']}", json=patch)
        assert r.status_code == 422, patch

    r = await client.get(f"/api/daily-info/{task['id']}")
    assert r.json()["title"] == "Leltár"
    assert r.json()["content"] == "Hűtőpult leltár"

    r = await client.patch(f"/api/daily-info/{task['id']}", json={"deadline": None})
    assert r.status_code == 200
    assert r.json()["deadline"] is None
