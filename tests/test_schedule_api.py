"""Tests for the schedule and employee endpoints."""
from app.services.employee_service import ALL_EXIST_MESSAGE
from app.services.schedule_service import SCHEDULE_EMPTY_ERROR, SCHEDULE_READ_ERROR


async def create_employee(client, name, role="bolti_dolgozo"):
    r = await client.post("/api/employees/", json={"name": name, "role": role})
    assert r.status_code == 201
    return r.json()


async def test_employee_crud_and_grouping(client):
    worker = await create_employee(client, "Zoltán Ádám")
    manager = await create_employee(client, "Nagy Éva", "uzletvezeto")
    deputy = await create_employee(client, "Ábel Béla", "2_uzletvezeto_helyettes")
    unknown_role = await create_employee(client, "Kiss Anna", "igazgato")
    assert unknown_role["role"] == "bolti_dolgozo"
    assert worker["active"] is True

    r = await client.post(f"/api/employees/{worker['id']}/toggle-active")
    assert r.json()["active"] is False

    r = await client.get("/api/employees/")
    grouped = r.json()
    assert [e["name"] for e in grouped["active"]] == ["Nagy Éva", "Ábel Béla", "Kiss Anna"]
    assert [e["id"] for e in grouped["inactive"]] == [worker["id"]]

    r = await client.patch(f"/api/employees/{deputy['id']}", json={"role": "1_uzletvezeto_helyettes"})
    assert r.json()["role"] == "1_uzletvezeto_helyettes"

    r = await client.delete(f"/api/employees/{manager['id']}")
    assert r.status_code == 204
    r = await client.get(f"/api/employees/{manager['id']}")
    assert r.status_code == 404


async def test_roster_import_skips_existing(client, fake_gemini, png_bytes):
    await create_employee(client, "Kovács János")
    fake_gemini.outputs = [{"employees": [
        {"name": "kovács jános", "role": "Bolti dolgozó"},
        {"name": "Fehér, Zsuzsanna", "role": "2.Üzletvezető helyettes"},
    ]}]
    r = await client.post("/api/employees/import", files=[("files", ("roster.png", png_bytes, "image/png"))])
    assert r.status_code == 200
    created = r.json()["created"]
    assert [(e["name"], e["role"]) for e in created] == [("Fehér, Zsuzsanna", "2_uzletvezeto_helyettes")]
    # A kép előfeldolgozva, JPEG-ként megy a modellhez
    assert fake_gemini.mime_types == ["image/jpeg"]

    fake_gemini.outputs = [{"employees": [{"name": "Fehér, Zsuzsanna", "role": ""}]}]
    r = await client.post("/api/employees/import", files=[("files", ("roster.png", png_bytes, "image/png"))])
    assert r.json() == {"created": [], "message": ALL_EXIST_MESSAGE}


async def test_dayforce_import_matches_roster(client, fake_gemini, png_bytes):
    employee = await create_employee(client, "Kovács János", "uzletvezeto")
    fake_gemini.outputs = [{"employees": [
        {
            "name": "Kovacs Janos",
            "monday": "06:00-14:30", "monday_net": "8:00",
            "tuesday": "P",
            "wednesday": "-",
            "thursday": "Szabadság",
            "friday": "", "saturday": "-", "sunday": "-",
        },
        {"name": "Új Ember", "monday": "10:00-19:30", "monday_net": "9:00", "friday": "Táppénz"},
    ]}]

    # Szerda a hét közepén: a napok a hétfőtől számítódnak
    r = await client.post(
        "/api/schedules/import",
        params={"date": "2025-10-22"},
        files=[("files", ("week.png", png_bytes, "image/png"))],
    )
    assert r.status_code == 201
    rows = r.json()
    assert len(rows) == 5

    kovacs = [row for row in rows if row["employee_id"] == str(employee["id"])]
    assert [(row["date"], row["status"]) for row in kovacs] == [
        ("2025-10-20", "muszak"),
        ("2025-10-21", "pihenonap"),
        ("2025-10-23", "szabadsag"),
    ]
    assert kovacs[0]["employee_name"] == "Kovács János"
    assert kovacs[0]["start_time"] == "06:00"
    assert kovacs[0]["net_shift_duration"] == "8:00"
    assert all(row["week_number"] == 43 for row in rows)

    stranger = [row for row in rows if row["employee_name"] == "Új Ember"]
    assert stranger[0]["employee_id"] == "temp_Új Ember"
    assert stranger[0]["employee_role"] == "bolti_dolgozo"
    assert stranger[1]["status"] == "betegseg"

    r = await client.get("/api/schedules/day/2025-10-20")
    view = r.json()
    assert view["week_number"] == 43
    assert [(row["schedule"]["employee_name"], row["entitled_breaks"]) for row in view["rows"]] == [
        ("Kovács János", 1),
        ("Új Ember", 2),
    ]


async def test_dayforce_import_failures(client, fake_gemini):
    fake_gemini.outputs = [None]
    r = await client.post("/api/schedules/import", params={"date": "2025-10-22"}, files=[("files", ("w.png", b"x", "image/png"))])
    assert r.status_code == 422
    assert r.json()["detail"] == SCHEDULE_READ_ERROR

    fake_gemini.outputs = [{"employees": [{"name": "Valaki", "monday": "-"}]}]
    r = await client.post("/api/schedules/import", params={"date": "2025-10-22"}, files=[("files", ("w.png", b"x", "image/png"))])
    assert r.status_code == 422
    assert r.json()["detail"] == SCHEDULE_EMPTY_ERROR


async def test_manual_shift_breaks_and_ordering(client):
    employee = await create_employee(client, "Nagy Éva", "uzletvezeto")

    r = await client.post("/api/schedules/", json={
        "date": "2025-10-20", "employee_id": employee["id"], "shift_text": "10:00-18:00",
    })
    assert r.status_code == 201
    late = r.json()
    assert late["employee_name"] == "Nagy Éva"
    assert late["start_time"] == "10:00"

    r = await client.post("/api/schedules/", json={
        "date": "2025-10-20", "employee_name": "Vendég Péter", "shift_text": "06:00-14:00",
    })
    guest = r.json()
    assert guest["employee_id"].startswith("temp_")
    assert guest["employee_role"] == "bolti_dolgozo"

    r = await client.post("/api/schedules/", json={
        "date": "2025-10-20", "employee_name": "Pihenő Pál", "status": "pihenonap",
    })
    assert r.json()["status"] == "pihenonap"

    r = await client.get("/api/schedules/day/2025-10-20")
    assert [row["schedule"]["employee_name"] for row in r.json()["rows"]] == ["Vendég Péter", "Nagy Éva", "Pihenő Pál"]

    r = await client.post(f"/api/schedules/{late['id']}/breaks", json={"n": 1})
    assert r.json()["num_breaks_taken"] == 1
    r = await client.post(f"/api/schedules/{late['id']}/breaks", json={"n": 1})
    assert r.json()["num_breaks_taken"] == 0
    r = await client.post(f"/api/schedules/{late['id']}/breaks", json={"n": 3})
    assert r.status_code == 422

    r = await client.patch(f"/api/schedules/{late['id']}", json={"shift_text": "12:00-20:00"})
    assert r.json()["start_time"] == "12:00"


async def test_manual_shift_requires_employee(client):
    r = await client.post("/api/schedules/", json={"date": "2025-10-20", "shift_text": "06:00-14:00"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Válassz munkavállalót vagy adj meg egy nevet!"

    r = await client.post("/api/schedules/", json={"date": "2025-10-20", "employee_id": 999})
    assert r.status_code == 404


async def test_delete_schedules(client):
    for name in ("A", "B"):
        await client.post("/api/schedules/", json={"date": "2025-10-20", "employee_name": name})
    r = await client.get("/api/schedules/")
    first_id = r.json()[0]["id"]

    r = await client.delete(f"/api/schedules/{first_id}")
    assert r.status_code == 204
    r = await client.delete("/api/schedules/")
    assert r.json() == {"deleted": 1}


async def test_employee_update_rejects_null_or_empty_name(client):
    employee = await create_employee(client, "Nagy Éva", "uzletvezeto")
    for patch in ({"name": None}, {"name": ""}, {"active": None}):
        r = await client.patch(f"/api/employees/{employee['id']}", json=patch)
        assert r.status_code == 422, patch

    r = await client.get(f"/api/employees/{employee['id']}")
    assert r.json()["name"] == "Nagy Éva"
    assert r.json()["active"] is True

    r = await client.patch(f"/api/employees/{employee['id']}", json={"name": "Nagy Éva Mária"})
    assert r.json()["name"] == "Nagy Éva Mária"
