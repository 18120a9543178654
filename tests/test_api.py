from decimal import Decimal
from io import BytesIO

from openpyxl import Workbook
from sqlalchemy import func, select

from app.models.result import Result
from app.models.student import Student

API = "/api/v1"
XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def make_xlsx(rows):
    wb = Workbook()
    ws = wb.active
    for values in rows:
        ws.append(values)
    output = BytesIO()
    wb.save(output)
    return output.getvalue()


def add_student(db, section, number="123456", manual_fail=False):
    student = Student(subscription_number=number, full_name="أحمد علي", section_id=section.id, manual_fail=manual_fail)
    db.add(student)
    db.flush()
    return student


def add_grade(db, student, subject, grade):
    db.add(Result(student_id=student.id, subject_id=subject.id, grade=Decimal(str(grade))))


def open_results(client, admin_headers):
    response = client.patch(f"{API}/settings", json={"is_results_open": True}, headers=admin_headers)
    assert response.status_code == 200


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


# ==========================================
# Authentication
# ==========================================

def test_login_and_me(client, admin_headers):
    response = client.get(f"{API}/auth/me", headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "admin"
    assert body["last_login_at"] is not None


def test_login_wrong_password(client, admin_headers):
    response = client.post(f"{API}/auth/login", json={"username": "admin", "password": "wrong-password"})
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTH_FAILED"


def test_admin_endpoint_rejects_bad_token(client, db):
    response = client.get(f"{API}/settings", headers={"Authorization": "Bearer nonsense"})
    assert response.status_code == 401
    assert response.json()["success"] is False


# ==========================================
# Release gate and result search
# ==========================================

def test_search_blocked_while_results_closed(client, db, scientific):
    section, _, _ = scientific
    add_student(db, section)
    db.commit()

    response = client.get(f"{API}/portal/results/123456")
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "RESULTS_NOT_AVAILABLE"

    status = client.get(f"{API}/portal/status").json()
    assert status["results_available"] is False
    assert status["countdown"] is None


def test_search_after_opening_results(client, db, scientific, admin_headers):
    section, math, physics = scientific
    student = add_student(db, section)
    add_grade(db, student, math, 160)
    add_grade(db, student, physics, 90)
    db.commit()
    open_results(client, admin_headers)

    response = client.get(f"{API}/portal/results/123456")
    assert response.status_code == 200
    body = response.json()
    assert body["passed"] is False
    assert body["has_failed_subject"] is True
    assert body["percentage"] == 50.0
    assert [entry["percentage"] for entry in body["results"]] == [53.33, 45.0]
    assert Decimal(body["total_grade"]) == 250
    assert Decimal(body["max_total_grade"]) == 500


def test_search_accepts_arabic_digits(client, db, scientific, admin_headers):
    section, math, physics = scientific
    student = add_student(db, section)
    add_grade(db, student, math, 250)
    add_grade(db, student, physics, 180)
    db.commit()
    open_results(client, admin_headers)

    response = client.get(f"{API}/portal/results/١٢٣٤٥٦")
    assert response.status_code == 200
    assert response.json()["passed"] is True
    assert response.json()["grade_label"] == "جيد جداً"


def test_search_validation_and_not_found(client, db, admin_headers):
    open_results(client, admin_headers)

    response = client.get(f"{API}/portal/results/12")
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    response = client.get(f"{API}/portal/results/99999")
    assert response.status_code == 404


def test_manual_fail_overrides_grades(client, db, scientific, admin_headers):
    section, math, physics = scientific
    student = add_student(db, section, manual_fail=True)
    add_grade(db, student, math, 300)
    add_grade(db, student, physics, 200)
    db.commit()
    open_results(client, admin_headers)

    body = client.get(f"{API}/portal/results/123456").json()
    assert body["percentage"] == 100.0
    assert body["passed"] is False
    assert body["grade_label"] == "راسب"


def test_countdown_controls_release(client, db, scientific, admin_headers):
    section, _, _ = scientific
    add_student(db, section)
    db.commit()

    client.patch(f"{API}/settings", json={"countdown_end": "2999-01-01T00:00:00Z"}, headers=admin_headers)
    response = client.get(f"{API}/portal/results/123456")
    assert response.status_code == 403
    assert "countdown_end" in response.json()["error"]["details"]
    status = client.get(f"{API}/portal/status").json()
    assert status["countdown"]["is_expired"] is False

    client.patch(f"{API}/settings", json={"countdown_end": "2000-01-01T00:00:00Z"}, headers=admin_headers)
    assert client.get(f"{API}/portal/results/123456").status_code == 200
    status = client.get(f"{API}/portal/status").json()
    assert status["results_available"] is True
    assert status["countdown"]["is_expired"] is True


def test_admin_evaluation_ignores_gate(client, db, scientific, admin_headers):
    section, _, _ = scientific
    student = add_student(db, section)
    db.commit()

    response = client.get(f"{API}/students/{student.id}/result", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["total_grade"] in ("0", "0.00", 0)


# ==========================================
# Structure and grade entry
# ==========================================

def test_subject_min_grade_defaults_and_validation(client, scientific, admin_headers):
    section, _, _ = scientific

    response = client.post(
        f"{API}/subjects",
        json={"name": "جغرافيا", "section_id": section.id, "max_grade": 75},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert Decimal(response.json()["min_grade"]) == 37

    response = client.post(
        f"{API}/subjects",
        json={"name": "تاريخ", "section_id": section.id, "max_grade": 100, "min_grade": 120},
        headers=admin_headers,
    )
    assert response.status_code == 422
    assert response.json()["success"] is False
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert "errors" in response.json()["error"]["details"]


def test_grade_entry_upserts_and_checks_section(client, db, scientific, admin_headers):
    section, math, _ = scientific
    student = add_student(db, section)
    db.commit()

    url = f"{API}/students/{student.id}/results"
    assert client.put(url, json={"subject_id": math.id, "grade": 120}, headers=admin_headers).status_code == 200
    response = client.put(url, json={"subject_id": math.id, "grade": 140}, headers=admin_headers)
    assert Decimal(response.json()["grade"]) == 140
    assert len(client.get(url, headers=admin_headers).json()) == 1

    other = client.post(f"{API}/sections", json={"name": "أدبي"}, headers=admin_headers).json()
    history = client.post(
        f"{API}/subjects",
        json={"name": "تاريخ", "section_id": other["id"], "max_grade": 100},
        headers=admin_headers,
    ).json()
    response = client.put(url, json={"subject_id": history["id"], "grade": 50}, headers=admin_headers)
    assert response.status_code == 422


def test_duplicate_subscription_number_conflicts(client, db, scientific, admin_headers):
    section, _, _ = scientific
    payload = {"subscription_number": "555555", "full_name": "طالب", "section_id": section.id}
    assert client.post(f"{API}/students", json=payload, headers=admin_headers).status_code == 200
    response = client.post(f"{API}/students", json=payload, headers=admin_headers)
    assert response.status_code == 409


def test_section_with_students_cannot_be_deleted(client, db, scientific, admin_headers):
    section, _, _ = scientific
    add_student(db, section)
    db.commit()
    response = client.delete(f"{API}/sections/{section.id}", headers=admin_headers)
    assert response.status_code == 409


def test_section_update_ignores_null_name(client, scientific, admin_headers):
    section, _, _ = scientific
    response = client.patch(f"{API}/sections/{section.id}", json={"name": None}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "علمي"


def test_sections_listing_is_public(client, scientific):
    response = client.get(f"{API}/sections")
    assert response.status_code == 200
    assert [s["name"] for s in response.json()] == ["علمي"]


# ==========================================
# Objections
# ==========================================

def test_objection_flow(client, scientific, admin_headers):
    section, _, _ = scientific
    response = client.post(
        f"{API}/objections",
        json={
            "subscription_number": "123456",
            "full_name": "أحمد علي",
            "section_id": section.id,
            "objection_text": "أعتقد أن درجة الرياضيات غير صحيحة",
        },
    )
    assert response.status_code == 200
    objection = response.json()
    assert objection["status"] == "new"

    listed = client.get(f"{API}/objections", params={"status": "new"}, headers=admin_headers).json()
    assert [o["id"] for o in listed] == [objection["id"]]

    response = client.patch(
        f"{API}/objections/{objection['id']}",
        json={"status": "accepted", "admin_note": "تم التصحيح"},
        headers=admin_headers,
    )
    assert response.json()["status"] == "accepted"
    assert response.json()["admin_note"] == "تم التصحيح"
    assert client.get(f"{API}/objections", params={"status": "new"}, headers=admin_headers).json() == []

    response = client.delete(f"{API}/objections/{objection['id']}", headers=admin_headers)
    assert response.status_code == 200


def test_objection_unknown_section(client, db):
    response = client.post(
        f"{API}/objections",
        json={
            "subscription_number": "123456",
            "full_name": "أحمد علي",
            "section_id": 404,
            "objection_text": "نص الاعتراض",
        },
    )
    assert response.status_code == 404


# ==========================================
# Uploads
# ==========================================

def test_upload_results_sheet(client, db, scientific, admin_headers):
    content = make_xlsx([
        ["رقم الاكتتاب", "الاسم الكامل", "القسم", "رياضيات", "فيزياء", "ملاحظات"],
        ["123456", "أحمد علي", "علمي", 160, 90, "-"],
        [654321, "سارة محمد", "علمي", 250, "غائب", None],
        ["999", "X", "غير موجود", 1, 1, None],
    ])
    files = {"file": ("results.xlsx", content, XLSX_TYPE)}

    response = client.post(f"{API}/uploads/results", files=files, headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["students_added"] == 2
    assert body["results_added"] == 3
    assert body["total_rows"] == 3
    assert len(body["errors"]) == 1
    assert "غير موجود" in body["errors"][0]

    # Same file again: grades are overwritten, not duplicated
    response = client.post(f"{API}/uploads/results", files=files, headers=admin_headers)
    body = response.json()
    assert body["students_added"] == 0
    assert body["results_added"] == 3
    assert db.execute(select(func.count(Result.id))).scalar() == 3
    assert db.execute(select(func.count(Student.id))).scalar() == 2


def test_upload_rejects_other_extensions(client, admin_headers):
    files = {"file": ("results.txt", b"hello", "text/plain")}
    response = client.post(f"{API}/uploads/results", files=files, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "UPLOAD_FAILED"


def test_upload_template(client, scientific, admin_headers):
    response = client.get(f"{API}/uploads/template", headers=admin_headers)
    assert response.status_code == 200
    assert response.headers["content-type"] == XLSX_TYPE
    assert response.content[:2] == b"PK"


def test_upload_with_repeated_subscription_number(client, db, scientific, admin_headers):
    _, math, physics = scientific
    content = make_xlsx([
        ["رقم الاكتتاب", "الاسم الكامل", "القسم", "رياضيات", "فيزياء"],
        ["123456", "أحمد علي", "علمي", 160, None],
        ["123456", "أحمد علي", "علمي", None, 120],
        ["777777", "سارة محمد", "علمي", 250, 180],
    ])
    files = {"file": ("results.xlsx", content, XLSX_TYPE)}

    response = client.post(f"{API}/uploads/results", files=files, headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["students_added"] == 2
    assert body["results_added"] == 4
    assert body["errors"] == ["Failed to add student 123456: Subscription number 123456 already exists"]

    assert db.execute(select(func.count(Student.id))).scalar() == 2
    student = db.execute(select(Student).where(Student.subscription_number == "123456")).scalar_one()
    grades = {
        r.subject_id: r.grade
        for r in db.execute(select(Result).where(Result.student_id == student.id)).scalars()
    }
    assert grades == {math.id: Decimal("160"), physics.id: Decimal("120")}
