"""Tests for distributions, missing products, returns, notices, dashboard, files and exports."""
from app.services.calendar_helper import local_today
from app.services.missing_product_service import PRICE_LABEL_ERROR
from app.services.return_service import INVALID_QUANTITY_ERROR, ITEM_NOT_FOUND_ERROR


def upload(content=b"fake-image", name="photo.png", content_type="image/png"):
    return ("files", (name, content, content_type))


# --- Elosztás -----------------------------------------------------------------------

async def test_delivery_note_import_and_received_quantities(client, fake_gemini):
    fake_gemini.outputs = [{
        "delivery_note_number": "SZ-1001",
        "area": "T12",
        "products": [
            {"order": 1, "product_name": "Liszt", "article_number": "123", "quantity": 5, "unit": "DB"},
            {"article_number": 456, "quantity": "sok"},
        ],
    }]
    r = await client.post("/api/distributions/import", files=[upload()])
    assert r.status_code == 201
    first, second = r.json()
    today = local_today().isoformat()
    assert first["date"] == today
    assert first["main_category"] == "T12"
    assert first["unit"] == "db"
    assert first["status"] == "pending"
    assert first["received_quantity"] is None
    assert second["product_name"] == "Ismeretlen termék"
    assert second["article_number"] == "456"
    assert second["quantity"] == 0
    assert second["unit"] == "karton"
    assert second["order"] == 2

    r = await client.put(f"/api/distributions/{first['id']}/received", json={"received_quantity": -3})
    assert r.json()["received_quantity"] == 0
    assert r.json()["status"] == "discrepancy"

    r = await client.post(f"/api/distributions/{first['id']}/correct")
    assert r.json()["received_quantity"] == 5
    assert r.json()["status"] == "ok"

    r = await client.post(f"/api/distributions/{first['id']}/reset")
    assert r.json()["status"] == "pending"

    r = await client.put(f"/api/distributions/{first['id']}/note", json={"note": "sérült karton"})
    assert r.json()["note"] == "sérült karton"

    r = await client.get(f"/api/distributions/day/{today}", params={"q": "12"})
    view = r.json()
    assert view["total"] == 1
    assert list(view["groups"]) == ["T12"]

    r = await client.delete(
        "/api/distributions/group",
        params={"area": "T12", "delivery_note_number": "SZ-1001", "date": today},
    )
    assert r.json() == {"deleted": 2}


async def test_delivery_note_import_nothing_readable(client, fake_gemini):
    fake_gemini.outputs = [{"delivery_note_number": "SZ-1", "products": []}]
    r = await client.post("/api/distributions/import", files=[upload()])
    assert r.status_code == 422


# --- Hiánycikkek -----------------------------------------------------------------------

async def test_missing_product_manual_and_status_flow(client):
    r = await client.post("/api/missing-products/", json={
        "date": "2025-10-20", "article_number": "4056489", "product_name": "Tej 1,5%", "category": "ismeretlen",
    })
    assert r.status_code == 201
    product = r.json()
    assert product["category"] == "troso"
    assert product["status"] == "open"

    r = await client.put(f"/api/missing-products/{product['id']}/category", json={"category": "mopro"})
    assert r.json()["category"] == "mopro"

    r = await client.put(f"/api/missing-products/{product['id']}/status", json={"status": "resolved"})
    resolved = r.json()
    assert resolved["status"] == "resolved"
    assert resolved["resolved_date"] is not None

    r = await client.put(f"/api/missing-products/{product['id']}/notes", json={"notes": "holnap jön"})
    assert r.json()["notes"] == "holnap jön"

    r = await client.get("/api/missing-products/markers")
    assert r.json() == [{"date": "2025-10-20", "completed": True}]


async def test_missing_product_manual_requires_fields(client):
    r = await client.post("/api/missing-products/", json={"date": "2025-10-20", "article_number": " ", "product_name": "Tej"})
    assert r.status_code == 400
    r = await client.post("/api/missing-products/", json={"date": "2025-10-20", "product_name": "Tej"})
    assert r.status_code == 422


async def test_price_label_scan_and_day_filters(client, fake_gemini):
    fake_gemini.outputs = [
        {"article_number": "111111", "product_name": "Croissant", "category": "bakeoff"},
        {"article_number": "", "product_name": "Olvashatatlan"},
        {"article_number": "222222", "product_name": "Pizza", "category": "tiko", "description": "fagyasztott"},
    ]
    r = await client.post(
        "/api/missing-products/scan",
        params={"date": "2025-10-21"},
        files=[upload(name="a.png"), upload(name="b.png"), upload(name="c.png")],
    )
    assert r.status_code == 201
    assert [p["product_name"] for p in r.json()] == ["Croissant", "Pizza"]
    assert all(p["image_url"] for p in r.json())

    r = await client.get("/api/missing-products/day/2025-10-21", params={"category": "tiko"})
    view = r.json()
    assert [p["product_name"] for p in view["products"]] == ["Pizza"]
    assert view["category_counts"] == {"bakeoff": 1, "tiko": 1}
    assert view["status_counts"] == {"open": 2}
    assert list(view["groups"]) == ["tiko"]

    r = await client.get("/api/missing-products/day/2025-10-21", params={"q": "111"})
    assert [p["product_name"] for p in r.json()["products"]] == ["Croissant"]

    r = await client.delete("/api/missing-products/day/2025-10-21")
    assert r.json() == {"deleted": 2}


async def test_price_label_scan_failure(client, fake_gemini):
    fake_gemini.outputs = [{"article_number": "", "product_name": ""}]
    r = await client.post("/api/missing-products/scan", params={"date": "2025-10-21"}, files=[upload()])
    assert r.status_code == 422
    assert r.json()["detail"] == PRICE_LABEL_ERROR


# --- Visszáru -------------------------------------------------------------------------------

CENTRAL_LIST = {"items": [
    {"section_title": "PLU tételek", "bizonylat_szam": "B-1", "cikkszam": "5901234", "megnevezes": "Kalapács", "tervkeszlet": 3},
    {"section_title": "Parkside", "bizonylat_szam": "B-2", "cikkszam": "7770001", "megnevezes": "Fúrógép", "tervkeszlet": "n/a"},
    {"section_title": "PLU tételek", "bizonylat_szam": "B-1", "cikkszam": "5905678", "megnevezes": "Fogó", "tervkeszlet": 1},
]}


async def import_central_list(client, fake_gemini, week=43):
    fake_gemini.outputs = [CENTRAL_LIST]
    r = await client.post("/api/returns/import", params={"week_number": week}, files=[upload()])
    assert r.status_code == 201
    return r.json()


async def test_central_list_import_and_week_view(client, fake_gemini):
    items = await import_central_list(client, fake_gemini)
    assert [(i["return_type"], i["document_custom_name"], i["order"]) for i in items] == [
        ("plu", "PLU", 1), ("parkside", "Parkside", 2), ("plu", "PLU", 3),
    ]
    assert items[1]["planned_quantity"] == 0

    r = await client.get("/api/returns/week/43")
    documents = r.json()["documents"]
    assert list(documents) == ["B-1", "B-2"]
    assert [i["product_name"] for i in documents["B-1"]] == ["Kalapács", "Fogó"]

    r = await client.get("/api/returns/week/43", params={"q": "fúró"})
    assert list(r.json()["documents"]) == ["B-2"]


async def test_add_quantity_accumulates(client, fake_gemini):
    await import_central_list(client, fake_gemini)
    payload = {"week_number": 43, "barcode": "5901234"}

    r = await client.post("/api/returns/quantity", json={**payload, "quantity": 2})
    assert r.json()["quantity"] == 2
    r = await client.post("/api/returns/quantity", json={**payload, "quantity": 3})
    assert r.json()["quantity"] == 5

    r = await client.post("/api/returns/quantity", json={**payload, "quantity": 0})
    assert r.status_code == 400
    assert r.json()["detail"] == INVALID_QUANTITY_ERROR

    r = await client.post("/api/returns/quantity", json={"week_number": 44, "barcode": "5901234", "quantity": 1})
    assert r.status_code == 400
    assert r.json()["detail"] == ITEM_NOT_FOUND_ERROR


async def test_barcode_scan(client, fake_gemini):
    await import_central_list(client, fake_gemini)

    fake_gemini.outputs = [{"barcode": " 7770001 "}]
    r = await client.post("/api/returns/barcode", params={"week_number": 43}, files=[upload()])
    assert r.status_code == 200
    assert r.json()["barcode"] == "7770001"
    assert r.json()["item"]["product_name"] == "Fúrógép"

    fake_gemini.outputs = [{"barcode": "000"}]
    r = await client.post("/api/returns/barcode", params={"week_number": 43}, files=[upload()])
    assert r.json() == {"barcode": "000", "item": None}

    fake_gemini.outputs = [None]
    r = await client.post("/api/returns/barcode", params={"week_number": 43}, files=[upload()])
    assert r.status_code == 422


async def test_document_rename_edit_and_delete(client, fake_gemini):
    items = await import_central_list(client, fake_gemini)

    r = await client.put("/api/returns/documents/B-1", json={"week_number": 43, "document_custom_name": "Szerszámok"})
    assert [i["document_custom_name"] for i in r.json()] == ["Szerszámok", "Szerszámok"]

    r = await client.put(f"/api/returns/{items[1]['id']}/quantity", json={"quantity": 7})
    assert r.json()["quantity"] == 7

    r = await client.delete(f"/api/returns/{items[1]['id']}")
    assert r.status_code == 204

    r = await client.delete("/api/returns/documents/B-1", params={"week_number": 43})
    assert r.json() == {"deleted": 2}
    r = await client.get("/api/returns/week/43")
    assert r.json()["documents"] == {}


# --- Heti és azonnali infó --------------------------------------------------------------------

async def test_weekly_info_lifecycle(client):
    r = await client.post("/api/weekly-info/", json={"week_number": 43, "title": "Akció", "content": "Hétfőtől"})
    assert r.status_code == 201
    notice = r.json()
    await client.post("/api/weekly-info/", json={"week_number": 43, "title": "Leltár"})

    r = await client.get("/api/weekly-info/week/43")
    assert [n["title"] for n in r.json()] == ["Leltár", "Akció"]

    r = await client.post(f"/api/weekly-info/{notice['id']}/archive")
    assert r.json()["is_archived"] is True
    r = await client.get("/api/weekly-info/week/43")
    assert [n["title"] for n in r.json()] == ["Leltár"]


async def test_instant_info_import_and_markers(client, fake_gemini):
    fake_gemini.outputs = [{"title": "Áramszünet", "content": "14 órától"}]
    r = await client.post("/api/instant-info/import", params={"date": "2025-10-20"}, files=[upload()])
    assert r.status_code == 201
    notice = r.json()
    assert notice["title"] == "Áramszünet"

    await client.post(f"/api/instant-info/{notice['id']}/archive")
    r = await client.get("/api/instant-info/day/2025-10-20")
    assert r.json() == []
    r = await client.get("/api/instant-info/markers")
    assert r.json() == ["2025-10-20"]

    fake_gemini.outputs = [{"title": "", "content": ""}]
    r = await client.post("/api/instant-info/import", params={"date": "2025-10-20"}, files=[upload()])
    assert r.status_code == 422


# --- Kezdőlap, fájlok, export ------------------------------------------------------------------

async def test_dashboard_summary(client):
    today = local_today().isoformat()
    await client.post("/api/daily-info/", json={"date": today, "title": "Mai feladat"})
    await client.post("/api/daily-info/", json={"date": "2020-01-01", "title": "Régi", "deadline": "2020-01-02T10:00:00"})
    await client.post("/api/missing-products/", json={"date": today, "article_number": "1", "product_name": "Tej"})

    r = await client.get("/api/dashboard/")
    assert r.status_code == 200
    summary = r.json()
    assert summary["greeting"] in ("Jó reggelt", "Szép napot", "Jó estét")
    assert [t["title"] for t in summary["today_tasks"]] == ["Mai feladat"]
    assert [t["title"] for t in summary["overdue_tasks"]] == ["Régi"]
    assert summary["headline"] == "1 Lejárt Feladat! ⚠️"
    assert summary["all_tasks_complete"] is False
    assert summary["open_missing_products"] == 1
    assert summary["total_distributions"] == 0


async def test_file_upload_is_served(client):
    r = await client.post("/api/files/upload", files={"file": ("plakat.pdf", b"%PDF-1.4 teszt", "application/pdf")})
    assert r.status_code == 200
    file_url = r.json()["file_url"]
    assert "/files/uploads/" in file_url

    r = await client.get(file_url)
    assert r.status_code == 200
    assert r.content == b"%PDF-1.4 teszt"


async def test_image_preprocess_returns_jpeg(client, png_bytes):
    r = await client.post("/api/images/preprocess", files={"file": ("kep.png", png_bytes, "image/png")})
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/jpeg"
    assert r.content[:2] == b"\xff\xd8"


async def test_ai_ask(client, fake_gemini):
    fake_gemini.answers = ["Szia, miben segíthetek?"]
    r = await client.get("/api/ai/ask", params={"prompt": "Szia"})
    assert r.json() == {"answer": "Szia, miben segíthetek?"}

    r = await client.get("/api/ai/ask", params={"prompt": "Szia"})
    assert r.status_code == 502


async def test_weekly_exports(client, fake_gemini):
    await import_central_list(client, fake_gemini)
    await client.post("/api/schedules/", json={"date": "2025-10-20", "employee_name": "Vendég", "shift_text": "06:00-14:00"})

    r = await client.get("/admin/export/returns/43.csv")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert r.content.startswith(b"\xef\xbb\xbf")
    assert "Kalapács" in r.content.decode("utf-8-sig")

    r = await client.get("/admin/export/schedules/43.pdf")
    assert r.status_code == 200
    assert r.content.startswith(b"%PDF")

    r = await client.get("/admin/export/ismeretlen/43.csv")
    assert r.status_code == 404
