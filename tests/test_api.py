from datetime import datetime, timedelta

from tests.conftest import headers_for


async def create_student(client, headers, first_name="Ahmet", last_name="Yılmaz"):
    response = await client.post(
        "/students/", json={"first_name": first_name, "last_name": last_name, "phone": "5551234567"},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


async def create_course(client, headers, name="A1.1", duration_days=30):
    response = await client.post(
        "/courses/",
        json={"name": name, "category": "Türk İşaret Dili", "duration_days": duration_days, "price": 2000},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


async def enroll(client, headers, student_id, course_id, start_date=None):
    start = start_date or datetime.now()
    response = await client.post(
        "/enrollments/",
        json={"student_id": student_id, "course_id": course_id, "start_date": start.isoformat()},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


# --- auth & onboarding -----------------------------------------------------

async def test_register_login_and_onboard(client):
    register = await client.post(
        "/register", json={"email": "yeni@example.com", "password": "gizli123", "display_name": "Yeni"}
    )
    assert register.status_code == 200
    token = register.json()["access_token"]
    assert register.json()["user"]["role"] == "admin"
    headers = {"Authorization": f"Bearer {token}"}

    blocked = await client.get("/students/", headers=headers)
    assert blocked.status_code == 403
    assert blocked.json()["code"] == "ONBOARDING_REQUIRED"

    founded = await client.post("/onboarding/institution", json={"name": "Yeni Kurs"}, headers=headers)
    assert founded.status_code == 201
    again = await client.post("/onboarding/institution", json={"name": "İkinci"}, headers=headers)
    assert again.status_code == 409

    login = await client.post("/token", json={"email": "yeni@example.com", "password": "gizli123"})
    assert login.status_code == 200
    me = await client.get("/me", headers={"Authorization": f"Bearer {login.json()['access_token']}"})
    assert me.json()["institution_id"] == founded.json()["id"]


async def test_bad_credentials(client, admin_user):
    response = await client.post("/token", json={"email": "admin@example.com", "password": "yanlis"})

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Email veya şifre hatalı", "code": "AUTH_FAILED"}


async def test_missing_and_invalid_tokens(client):
    assert (await client.get("/me")).status_code == 401
    response = await client.get("/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


async def test_invite_flow(client, admin_headers, db_session):
    created = await client.post("/invites", json={"role": "teacher"}, headers=admin_headers)
    assert created.status_code == 201
    token = created.json()["id"]

    listed = await client.get("/invites", headers=admin_headers)
    assert [i["id"] for i in listed.json()] == [token]

    from kurstakip.utils import identity

    newcomer = identity.ensure_user(db_session, "google:newcomer")
    headers = headers_for(newcomer)
    joined = await client.post("/invites/redeem", json={"token": token}, headers=headers)
    assert joined.status_code == 200
    assert joined.json()["role"] == "teacher"

    latecomer = identity.ensure_user(db_session, "google:latecomer")
    reused = await client.post("/invites/redeem", json={"token": token}, headers=headers_for(latecomer))
    assert reused.status_code == 400
    assert reused.json()["error"] == "Invalid invite"


async def test_teacher_restrictions(client, teacher_headers):
    assert (await client.patch("/institution", json={"name": "X"}, headers=teacher_headers)).status_code == 403
    assert (await client.post("/invites", json={}, headers=teacher_headers)).status_code == 403
    assert (await client.get("/payments/", headers=teacher_headers)).status_code == 403
    assert (await client.get("/payments/summary", headers=teacher_headers)).status_code == 403

    dashboard = await client.get("/stats/dashboard", headers=teacher_headers)
    assert dashboard.status_code == 200
    assert "financial" not in dashboard.json()


async def test_founder_renames_institution(client, admin_headers):
    response = await client.patch("/institution", json={"name": "Cisem Akademi"}, headers=admin_headers)

    assert response.status_code == 200
    assert (await client.get("/institution", headers=admin_headers)).json()["name"] == "Cisem Akademi"


# --- records ---------------------------------------------------------------

async def test_student_crud(client, admin_headers):
    student = await create_student(client, admin_headers)

    updated = await client.patch(f"/students/{student['id']}", json={"notes": "Akşam grubu"}, headers=admin_headers)
    assert updated.json()["notes"] == "Akşam grubu"
    assert updated.json()["first_name"] == "Ahmet"

    listed = await client.get("/students/", headers=admin_headers)
    assert [s["id"] for s in listed.json()] == [student["id"]]
    assert (await client.get("/students/missing", headers=admin_headers)).status_code == 404


async def test_delete_student_cascades(client, admin_headers):
    student = await create_student(client, admin_headers)
    first = await create_course(client, admin_headers)
    second = await create_course(client, admin_headers, "A1.2")
    await enroll(client, admin_headers, student["id"], first["id"])
    await enroll(client, admin_headers, student["id"], second["id"])

    response = await client.delete(f"/students/{student['id']}", headers=admin_headers)

    assert response.json() == {"success": True, "deleted_enrollments": 2}
    remaining = await client.get("/enrollments/", headers=admin_headers)
    assert remaining.json() == []


async def test_enrollment_lifecycle(client, admin_headers):
    student = await create_student(client, admin_headers)
    course = await create_course(client, admin_headers, duration_days=5)
    enrollment = await enroll(client, admin_headers, student["id"], course["id"])

    expiring = await client.get("/enrollments/expiring", headers=admin_headers)
    assert [e["id"] for e in expiring.json()] == [enrollment["id"]]
    assert expiring.json()[0]["days_remaining"] == 5
    assert expiring.json()[0]["student"]["first_name"] == "Ahmet"

    done = await client.post(f"/enrollments/{enrollment['id']}/complete", headers=admin_headers)
    assert done.json()["status"] == "completed"
    again = await client.post(f"/enrollments/{enrollment['id']}/cancel", headers=admin_headers)
    assert again.status_code == 409
    assert again.json()["code"] == "INVALID_TRANSITION"


async def test_old_enrollment_shows_expired(client, admin_headers):
    student = await create_student(client, admin_headers)
    course = await create_course(client, admin_headers)
    await enroll(client, admin_headers, student["id"], course["id"], datetime.now() - timedelta(days=40))

    [row] = (await client.get("/enrollments/", headers=admin_headers)).json()

    assert row["status"] == "expired"
    assert row["is_expiring_soon"] is False


async def test_attendance_upsert(client, admin_headers):
    student = await create_student(client, admin_headers)
    course = await create_course(client, admin_headers)
    day = "2026-03-10T10:00:00"

    first = await client.put(
        "/attendance/",
        json={"course_id": course["id"], "date": day, "records": [{"student_id": student["id"], "status": "present"}]},
        headers=admin_headers,
    )
    second = await client.put(
        "/attendance/",
        json={"course_id": course["id"], "date": "2026-03-10T16:00:00",
              "records": [{"student_id": student["id"], "status": "late"}]},
        headers=admin_headers,
    )

    assert first.json()["id"] == second.json()["id"]
    sheets = (await client.get("/attendance/", params={"course_id": course["id"]}, headers=admin_headers)).json()
    assert len(sheets) == 1
    assert sheets[0]["records"] == [{"student_id": student["id"], "status": "late"}]

    stats = await client.get(f"/attendance/students/{student['id']}/stats", headers=admin_headers)
    assert stats.json() == {"present": 0, "absent": 0, "late": 1, "excused": 0, "total": 1}


async def test_browser_utc_dates_are_stored_as_local_days(client, admin_headers):
    student = await create_student(client, admin_headers)
    course = await create_course(client, admin_headers)

    saved = []
    for moment, status in (("2026-03-10T10:00:00Z", "present"), ("2026-03-10T11:30:00.000Z", "absent")):
        response = await client.put(
            "/attendance/",
            json={"course_id": course["id"], "date": moment, "records": [{"student_id": student["id"], "status": status}]},
            headers=admin_headers,
        )
        assert response.status_code == 200
        saved.append(response.json()["id"])

    assert saved[0] == saved[1]
    sheets = (await client.get("/attendance/", params={"course_id": course["id"]}, headers=admin_headers)).json()
    assert len(sheets) == 1
    assert sheets[0]["date"] == "2026-03-10T00:00:00"

    start = (datetime.now().astimezone() - timedelta(days=40)).isoformat()
    enrolled = await client.post(
        "/enrollments/",
        json={"student_id": student["id"], "course_id": course["id"], "start_date": start},
        headers=admin_headers,
    )
    assert enrolled.status_code == 201
    [row] = (await client.get("/enrollments/", headers=admin_headers)).json()
    assert row["status"] == "expired"

    due = (datetime.now().astimezone() - timedelta(days=2)).isoformat()
    payment = await client.post(
        "/payments/",
        json={"student_id": student["id"], "enrollment_id": row["id"], "amount": 500, "due_date": due},
        headers=admin_headers,
    )
    assert payment.status_code == 201
    assert payment.json()["status"] == "overdue"
    assert (await client.get("/payments/summary", headers=admin_headers)).json()["overdue_total"] == 500


async def test_payments(client, admin_headers):
    student = await create_student(client, admin_headers)
    course = await create_course(client, admin_headers)
    enrollment = await enroll(client, admin_headers, student["id"], course["id"])
    yesterday = (datetime.now() - timedelta(days=1)).isoformat()

    late = await client.post(
        "/payments/",
        json={"student_id": student["id"], "enrollment_id": enrollment["id"], "amount": 2000, "due_date": yesterday},
        headers=admin_headers,
    )
    assert late.status_code == 201
    assert late.json()["status"] == "overdue"

    summary = await client.get("/payments/summary", headers=admin_headers)
    assert summary.json()["overdue_total"] == 2000

    paid = await client.post(f"/payments/{late.json()['id']}/pay", json={"method": "transfer"}, headers=admin_headers)
    assert paid.json()["status"] == "paid"
    assert paid.json()["method"] == "transfer"
    cancel = await client.post(f"/payments/{late.json()['id']}/cancel", headers=admin_headers)
    assert cancel.status_code == 409

    dashboard = (await client.get("/stats/dashboard", headers=admin_headers)).json()
    assert dashboard["financial"]["total_revenue"] == 2000
    assert dashboard["students"] == 1


async def test_tenants_do_not_see_each_other(client, admin_headers, other_admin):
    student = await create_student(client, admin_headers)
    other_headers = headers_for(other_admin)

    assert (await client.get("/students/", headers=other_headers)).json() == []
    assert (await client.get(f"/students/{student['id']}", headers=other_headers)).status_code == 404
    response = await client.patch(f"/students/{student['id']}", json={"notes": "x"}, headers=other_headers)
    assert response.status_code == 404


async def test_teachers_roster(client, admin_headers, teacher_headers):
    created = await client.post(
        "/teachers/", json={"first_name": "Deniz", "last_name": "Aydın", "specialty": "TİD"}, headers=admin_headers
    )
    assert created.json()["is_active"] is True
    assert (await client.post("/teachers/", json={"first_name": "A", "last_name": "B"},
                              headers=teacher_headers)).status_code == 403

    await client.patch(f"/teachers/{created.json()['id']}", json={"is_active": False}, headers=admin_headers)
    active = await client.get("/teachers/", params={"active": True}, headers=teacher_headers)
    assert active.json() == []


async def test_inbox(client, admin_headers):
    student = await create_student(client, admin_headers)
    course = await create_course(client, admin_headers, duration_days=3)
    await enroll(client, admin_headers, student["id"], course["id"])

    checked = await client.post("/inbox/check-expiring", headers=admin_headers)
    assert checked.json()["created"] == 1

    [notification] = (await client.get("/inbox/", headers=admin_headers)).json()
    assert notification["read"] is False
    read = await client.post(f"/inbox/{notification['id']}/read", headers=admin_headers)
    assert read.json()["read"] is True
    assert (await client.get("/inbox/unread-count", headers=admin_headers)).json() == {"count": 0}


async def test_seed_only_fills_empty_institution(client, admin_headers, teacher_headers):
    assert (await client.post("/admin/seed", headers=teacher_headers)).status_code == 403

    seeded = await client.post("/admin/seed", headers=admin_headers)
    assert seeded.json()["created"] == {"courses": 12, "students": 6, "enrollments": 6}

    again = await client.post("/admin/seed", headers=admin_headers)
    assert again.json()["created"] == {"courses": 0, "students": 0, "enrollments": 0}

    by_category = (await client.get("/courses/by-category", headers=admin_headers)).json()
    assert len(by_category["Türk İşaret Dili"]) == 12
