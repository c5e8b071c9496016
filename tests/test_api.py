from datetime import date
from decimal import Decimal


API = "/api/v1"


def create_tuition(client, headers, **overrides) -> dict:
    payload = {
        "name": "Class 8 Maths",
        "subject": "Mathematics",
        "teaching_days": ["Mon", "wednesday", "FRI"],
    }
    payload.update(overrides)
    response = client.post(f"{API}/tuitions", json=payload, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def create_student(client, headers, tuition_id: int, name: str, fee: str = "500") -> dict:
    response = client.post(
        f"{API}/students",
        json={
            "tuition_id": tuition_id,
            "name": name,
            "class_level": "8",
            "fee_per_month": fee,
        },
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_first_request_provisions_tutor(client, headers_for):
    headers = headers_for("user_new", name="Priya Nair")

    response = client.get(f"{API}/auth/me", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["external_id"] == "user_new"
    assert body["name"] == "Priya Nair"
    assert body["role"] == "tutor"


def test_profile_update(client, auth_headers):
    response = client.patch(
        f"{API}/auth/me", json={"phone": "+91 98765 43210"}, headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json()["phone"] == "+91 98765 43210"


def test_invalid_token_is_rejected(client):
    response = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTH_FAILED"


def test_malformed_header_is_rejected(client):
    response = client.get(f"{API}/auth/me", headers={"Authorization": "Token abc"})
    assert response.status_code == 401


def test_create_tuition_normalises_teaching_days(client, auth_headers):
    tuition = create_tuition(client, auth_headers)

    assert tuition["teaching_days"] == ["monday", "wednesday", "friday"]
    assert tuition["days_per_week"] == 3
    assert tuition["status"] == "active"


def test_null_required_field_is_ignored_on_update(client, auth_headers):
    tuition = create_tuition(client, auth_headers)

    response = client.patch(
        f"{API}/tuitions/{tuition['id']}",
        json={"name": None, "subject": None, "address": "12 Lake Road"},
        headers=auth_headers,
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["name"] == "Class 8 Maths"
    assert body["subject"] == "Mathematics"
    assert body["address"] == "12 Lake Road"


def test_create_tuition_rejects_unknown_day(client, auth_headers):
    response = client.post(
        f"{API}/tuitions",
        json={"name": "Physics", "subject": "Physics", "teaching_days": ["funday"]},
        headers=auth_headers,
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_tuitions_are_private_to_their_tutor(client, auth_headers, headers_for):
    tuition = create_tuition(client, auth_headers)
    other = headers_for("user_other")

    response = client.get(f"{API}/tuitions/{tuition['id']}", headers=other)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"
    assert client.get(f"{API}/tuitions", headers=other).json() == []


def test_archive_restore_and_delete_tuition(client, auth_headers):
    tuition = create_tuition(client, auth_headers)
    tuition_id = tuition["id"]
    create_student(client, auth_headers, tuition_id, "Asha")

    # Active tuitions cannot be deleted
    response = client.delete(f"{API}/tuitions/{tuition_id}", headers=auth_headers)
    assert response.status_code == 422

    response = client.post(f"{API}/tuitions/{tuition_id}/archive", headers=auth_headers)
    assert response.json()["status"] == "archived"
    assert client.get(f"{API}/tuitions", headers=auth_headers).json() == []
    archived = client.get(f"{API}/tuitions?status=archived", headers=auth_headers).json()
    assert [t["id"] for t in archived] == [tuition_id]

    response = client.post(f"{API}/tuitions/{tuition_id}/restore", headers=auth_headers)
    assert response.json()["status"] == "active"

    client.post(f"{API}/tuitions/{tuition_id}/archive", headers=auth_headers)
    response = client.delete(f"{API}/tuitions/{tuition_id}", headers=auth_headers)
    assert response.status_code == 200
    assert client.get(f"{API}/tuitions/{tuition_id}", headers=auth_headers).status_code == 404


def test_student_crud(client, auth_headers):
    tuition = create_tuition(client, auth_headers)
    student = create_student(client, auth_headers, tuition["id"], "Bilal", fee="750.50")
    student_id = student["id"]

    response = client.patch(
        f"{API}/students/{student_id}",
        json={"parent_phone": "555-0100"},
        headers=auth_headers,
    )
    assert response.json()["parent_phone"] == "555-0100"

    listing = client.get(
        f"{API}/students?tuition_id={tuition['id']}&search=bil", headers=auth_headers
    ).json()
    assert listing["total"] == 1
    assert Decimal(listing["items"][0]["fee_per_month"]) == Decimal("750.50")

    client.post(f"{API}/students/{student_id}/archive", headers=auth_headers)
    listing = client.get(f"{API}/students", headers=auth_headers).json()
    assert listing["total"] == 0

    response = client.delete(f"{API}/students/{student_id}", headers=auth_headers)
    assert response.status_code == 200
    assert client.get(f"{API}/students/{student_id}", headers=auth_headers).status_code == 404


def test_mark_attendance_flow(client, auth_headers):
    tuition = create_tuition(client, auth_headers)
    tuition_id = tuition["id"]
    students = [create_student(client, auth_headers, tuition_id, n) for n in ("Asha", "Bilal", "Chen")]
    base = f"{API}/tuitions/{tuition_id}/attendance"

    response = client.put(
        f"{base}/students/{students[0]['id']}",
        json={"attendance_date": "2024-05-06", "is_present": True},
        headers=auth_headers,
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["was_conducted"] is True
    assert body["class_log"]["was_conducted"] is True
    conducted_day = next(d for d in body["month"]["days"] if d["date"] == "2024-05-06")
    assert conducted_day["status"] == "conducted"

    response = client.post(
        f"{base}/mark-all",
        json={"attendance_date": "2024-05-06", "is_present": False},
        headers=auth_headers,
    )
    body = response.json()
    assert body["updated_records"] == 3
    assert body["was_conducted"] is False
    assert body["class_log"]["was_conducted"] is False

    roster = client.get(f"{base}/roster?attendance_date=2024-05-06", headers=auth_headers).json()
    assert roster["absent_count"] == 3

    calendar = client.get(
        f"{API}/tuitions/{tuition_id}/calendar?year=2024&month=5&today=2024-05-20",
        headers=auth_headers,
    ).json()
    day = next(d for d in calendar["days"] if d["date"] == "2024-05-06")
    assert day["status"] == "missed"
    assert calendar["stats"]["scheduled"] == 14
    assert calendar["stats"]["conducted"] == 0


def test_mark_all_with_unknown_student(client, auth_headers):
    tuition = create_tuition(client, auth_headers)
    create_student(client, auth_headers, tuition["id"], "Asha")

    response = client.post(
        f"{API}/tuitions/{tuition['id']}/attendance/mark-all",
        json={"attendance_date": "2024-05-06", "is_present": True, "student_ids": [424242]},
        headers=auth_headers,
    )

    assert response.status_code == 422
    assert response.json()["error"]["details"] == {"student_ids": [424242]}


def test_class_log_endpoints(client, auth_headers):
    tuition = create_tuition(client, auth_headers)
    base = f"{API}/tuitions/{tuition['id']}/class-logs"

    response = client.put(
        base,
        json={"class_date": "2024-05-08", "was_conducted": True, "topic_covered": "Linear equations"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    log = response.json()
    assert log["created_by"] is not None

    found = client.get(f"{base}/by-date/2024-05-08", headers=auth_headers).json()
    assert found["id"] == log["id"]
    assert client.get(f"{base}/by-date/2024-05-09", headers=auth_headers).json() is None

    response = client.patch(f"{base}/{log['id']}", json={"notes": "Homework set"}, headers=auth_headers)
    assert response.json()["notes"] == "Homework set"
    assert response.json()["topic_covered"] == "Linear equations"

    logs = client.get(f"{base}?year=2024&month=5", headers=auth_headers).json()
    assert [entry["id"] for entry in logs] == [log["id"]]
    assert client.get(f"{base}?year=2024", headers=auth_headers).status_code == 422

    calendar = client.get(
        f"{API}/tuitions/{tuition['id']}/calendar?year=2024&month=5&source=logs&today=2024-05-20",
        headers=auth_headers,
    ).json()
    day = next(d for d in calendar["days"] if d["date"] == "2024-05-08")
    assert day["status"] == "conducted"
    assert day["has_log"] is True

    response = client.delete(f"{base}/{log['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert client.delete(f"{base}/{log['id']}", headers=auth_headers).status_code == 404


def test_calendar_single_day(client, auth_headers):
    tuition = create_tuition(client, auth_headers)

    response = client.get(
        f"{API}/tuitions/{tuition['id']}/calendar/days/2024-05-07?today=2024-05-20",
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "none"
    assert response.json()["scheduled"] is False


def test_dashboard(client, auth_headers):
    tuition = create_tuition(client, auth_headers)
    create_tuition(client, auth_headers, name="Physics", subject="Physics", teaching_days=["tue"])
    students = [
        create_student(client, auth_headers, tuition["id"], "Asha", fee="500"),
        create_student(client, auth_headers, tuition["id"], "Bilal", fee="1000"),
    ]
    client.put(
        f"{API}/tuitions/{tuition['id']}/attendance/students/{students[0]['id']}",
        json={"attendance_date": "2024-05-06", "is_present": True},
        headers=auth_headers,
    )

    body = client.get(f"{API}/dashboard?today=2024-05-06", headers=auth_headers).json()

    assert body["date"] == date(2024, 5, 6).isoformat()
    assert body["active_tuitions"] == 2
    assert body["active_students"] == 2
    assert Decimal(str(body["expected_monthly_fees"])) == Decimal("1500")
    assert [c["name"] for c in body["todays_classes"]] == ["Class 8 Maths"]
    assert body["todays_classes"][0]["student_count"] == 2
    assert body["todays_classes"][0]["conducted"] is True


def test_monthly_report_download(client, auth_headers):
    tuition = create_tuition(client, auth_headers)

    response = client.get(
        f"{API}/tuitions/{tuition['id']}/reports/monthly?year=2024&month=5",
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert f"attendance_{tuition['id']}_2024_05.xlsx" in response.headers["content-disposition"]
