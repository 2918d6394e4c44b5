import json
from pathlib import Path

from cvdesk.models.cv_record import CVRecord


JOHN = {"name": "John", "email": "john@x.com", "position": "Developer"}


def _create(client, headers, **overrides):
    payload = {**JOHN, **overrides}
    response = client.post("/api/cv-records", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def _count_records(app) -> int:
    with app.state.storage.session() as session:
        return session.query(CVRecord).count()


def test_create_as_capturing_user(client, headers, history):
    record = _create(client, headers["user"])
    assert record["id"] >= 1
    assert record["status"] == "pending"
    assert record["submitted_at"]

    entries = history("cv_records", record["id"])
    assert len(entries) == 1
    entry = entries[0]
    assert entry.action == "CREATE"
    assert entry.old_values is None
    assert entry.new_values == record
    assert entry.username == "ursula"
    assert entry.description == "Created CV record for: John"


def test_create_with_full_profile(client, headers):
    record = _create(
        client,
        headers["admin"],
        surname="Doe",
        experience="7",
        year_completed=2015,
        languages=["English", "isiZulu"],
        work_experiences=[
            {"company_name": "Acme", "position": "Dev", "start_date": "01/2020", "end_date": "", "is_current_role": True}
        ],
        certificate_types=[{"department": "IT", "role": "Dev", "certificate_name": "AWS"}],
    )
    assert record["experience"] == 7
    assert record["year_completed"] == "2015"
    assert record["languages"] == "English, isiZulu"
    assert record["work_experiences"][0]["end_date"] is None
    assert record["certificate_types"][0]["certificate_name"] == "AWS"


def test_manager_cannot_delete(client, headers, history):
    record = _create(client, headers["admin"])
    before = len(history())

    response = client.delete(f"/api/cv-records/{record['id']}", headers=headers["manager"])
    assert response.status_code == 403
    assert response.json() == {"message": "Not permitted"}
    assert client.get(f"/api/cv-records/{record['id']}", headers=headers["admin"]).status_code == 200
    assert len(history()) == before


def test_update_status_records_single_changed_field(client, headers, history):
    record = _create(client, headers["user"])
    response = client.put(f"/api/cv-records/{record['id']}", json={"status": "active"}, headers=headers["admin"])
    assert response.status_code == 200
    updated = response.json()
    assert updated["status"] == "active"
    assert updated["name"] == "John"
    assert updated["submitted_at"] == record["submitted_at"]

    entry = history("cv_records", record["id"])[-1]
    assert entry.action == "UPDATE"
    assert entry.changed_fields == ["status"]
    assert entry.old_values["status"] == "pending"
    assert entry.new_values["status"] == "active"


def test_update_phone_leading_zero_is_a_change(client, headers, history):
    record = _create(client, headers["user"], phone="0821234567")
    response = client.put(f"/api/cv-records/{record['id']}", json={"phone": "821234567"}, headers=headers["admin"])
    assert response.status_code == 200
    assert response.json()["phone"] == "821234567"

    entry = history("cv_records", record["id"])[-1]
    assert entry.changed_fields == ["phone"]


def test_update_ignores_client_supplied_immutable_fields(client, headers):
    record = _create(client, headers["admin"])
    response = client.put(
        f"/api/cv-records/{record['id']}",
        json={"id": 999, "submitted_at": "2001-01-01T00:00:00", "skills": "Python"},
        headers=headers["admin"],
    )
    assert response.status_code == 200
    assert response.json()["id"] == record["id"]
    assert response.json()["submitted_at"] == record["submitted_at"]
    assert response.json()["skills"] == "Python"


def test_forbidden_mutations_leave_no_trace(client, headers, history, app):
    record = _create(client, headers["admin"])
    before = len(history())

    assert client.post("/api/cv-records", json=JOHN, headers=headers["manager"]).status_code == 403
    assert client.put(f"/api/cv-records/{record['id']}", json={"status": "active"}, headers=headers["user"]).status_code == 403
    assert client.put(
        f"/api/cv-records/{record['id']}", json={"status": "active"}, headers=headers["manager"]
    ).status_code == 403
    assert client.delete(f"/api/cv-records/{record['id']}", headers=headers["super_user"]).status_code == 403

    assert len(history()) == before
    assert _count_records(app) == 1
    current = client.get(f"/api/cv-records/{record['id']}", headers=headers["admin"]).json()
    assert current["status"] == "pending"


def test_permission_is_checked_before_validation(client, headers):
    response = client.post("/api/cv-records", json={"email": "not-an-email"}, headers=headers["manager"])
    assert response.status_code == 403

    malformed = client.post(
        "/api/cv-records",
        content=b"{not json",
        headers={**headers["manager"], "Content-Type": "application/json"},
    )
    assert malformed.status_code == 403

    not_an_object = client.put("/api/cv-records/1", json=["x"], headers=headers["user"])
    assert not_an_object.status_code == 403


def test_validation_errors_are_field_level(client, headers, app):
    response = client.post(
        "/api/cv-records",
        json={"name": "", "email": "not-an-email", "position": "Dev", "experience": -1},
        headers=headers["admin"],
    )
    assert response.status_code == 400
    errors = response.json()["errors"]
    assert {"name", "email", "experience"} <= set(errors)
    assert _count_records(app) == 0


def test_update_rejects_invalid_partial(client, headers):
    record = _create(client, headers["admin"])
    response = client.put(f"/api/cv-records/{record['id']}", json={"status": "hired"}, headers=headers["admin"])
    assert response.status_code == 400
    assert "status" in response.json()["errors"]

    response = client.put(f"/api/cv-records/{record['id']}", json={"name": None}, headers=headers["admin"])
    assert response.status_code == 400


def test_missing_record_is_not_found(client, headers):
    assert client.get("/api/cv-records/404", headers=headers["admin"]).status_code == 404
    assert client.put("/api/cv-records/404", json={"status": "active"}, headers=headers["admin"]).status_code == 404
    assert client.delete("/api/cv-records/404", headers=headers["admin"]).status_code == 404


def test_list_requires_view_capability(client, headers):
    assert client.get("/api/cv-records", headers=headers["user"]).status_code == 403
    assert client.get("/api/cv-records").status_code == 401


def test_list_is_newest_first(client, headers):
    ids = [_create(client, headers["admin"], name=f"Person {index}")["id"] for index in range(4)]
    listed = client.get("/api/cv-records", headers=headers["manager"]).json()
    assert [item["id"] for item in listed] == list(reversed(ids))
    stamps = [item["submitted_at"] for item in listed]
    assert stamps == sorted(stamps, reverse=True)


def test_list_search_and_status_filters(client, headers):
    _create(client, headers["admin"], name="Alice", surname="Smith", department="Finance")
    bob = _create(client, headers["admin"], name="Bob", email="bob@corp.com", position="Analyst")
    client.put(f"/api/cv-records/{bob['id']}", json={"status": "active"}, headers=headers["admin"])

    def names(**params):
        response = client.get("/api/cv-records", params=params, headers=headers["admin"])
        assert response.status_code == 200
        return sorted(item["name"] for item in response.json())

    assert names(search="smith") == ["Alice"]
    assert names(search="FINANCE") == ["Alice"]
    assert names(search="corp.com") == ["Bob"]
    assert names(search="analyst", status="pending") == []
    assert names(status="active") == ["Bob"]
    assert names(status="all") == ["Alice", "Bob"]
    assert names() == ["Alice", "Bob"]


def test_list_advanced_filters(client, headers):
    _create(client, headers["admin"], name="Alice", languages="English, Afrikaans", sap_k_level="K3", experience=5)
    _create(client, headers["admin"], name="Bob", languages="isiZulu", role_title="Lead", experience=2)

    def names(**params):
        return [item["name"] for item in client.get("/api/cv-records", params=params, headers=headers["admin"]).json()]

    assert names(language="afrikaans") == ["Alice"]
    assert names(sap_k_level="K3") == ["Alice"]
    assert names(role_title="Lead") == ["Bob"]
    assert names(experience=2) == ["Bob"]
    assert names(role="Developer", name="bo") == ["Bob"]


def test_delete_is_audited(client, headers, history):
    record = _create(client, headers["admin"], surname="Doe")
    response = client.delete(f"/api/cv-records/{record['id']}", headers=headers["admin"])
    assert response.status_code == 204
    assert client.get(f"/api/cv-records/{record['id']}", headers=headers["admin"]).status_code == 404

    entries = history("cv_records", record["id"])
    assert [entry.action for entry in entries] == ["CREATE", "DELETE"]
    assert entries[-1].old_values["name"] == "John"
    assert entries[-1].new_values is None
    assert entries[-1].description == "Deleted CV record for: John Doe"


def test_every_successful_mutation_is_audited(client, headers, history):
    record = _create(client, headers["admin"])
    client.put(f"/api/cv-records/{record['id']}", json={"phone": "0123"}, headers=headers["admin"])
    client.put(f"/api/cv-records/{record['id']}", json={"phone": "0123"}, headers=headers["super_user"])
    client.delete(f"/api/cv-records/{record['id']}", headers=headers["admin"])

    entries = history("cv_records", record["id"])
    assert [entry.action for entry in entries] == ["CREATE", "UPDATE", "UPDATE", "DELETE"]
    assert entries[1].changed_fields == ["phone"]
    assert entries[2].changed_fields == []
    assert entries[2].username == "sue"


def test_multipart_create_stores_file(client, headers, settings):
    response = client.post(
        "/api/cv-records",
        data={
            "name": "Jane",
            "email": "jane@x.com",
            "position": "Tester",
            "experience": "",
            "work_experiences": json.dumps([{"company_name": "Acme", "position": "QA", "start_date": "02/2021"}]),
        },
        files={"cv_file": ("jane cv.pdf", b"%PDF-1.4 fake", "application/pdf")},
        headers=headers["user"],
    )
    assert response.status_code == 201, response.text
    record = response.json()
    assert record["experience"] is None
    assert record["work_experiences"][0]["company_name"] == "Acme"
    assert record["cv_file"].endswith("_jane_cv.pdf")
    assert (Path(settings.upload_dir) / record["cv_file"]).read_bytes() == b"%PDF-1.4 fake"

    download = client.get(f"/api/cv-records/{record['id']}/file", headers=headers["admin"])
    assert download.status_code == 200
    assert download.content == b"%PDF-1.4 fake"


def test_upload_with_bad_suffix_is_rejected(client, headers, settings, app):
    response = client.post(
        "/api/cv-records",
        data=JOHN,
        files={"cv_file": ("cv.exe", b"MZ", "application/octet-stream")},
        headers=headers["admin"],
    )
    assert response.status_code == 400
    assert "cv_file" in response.json()["errors"]
    assert _count_records(app) == 0
    upload_dir = Path(settings.upload_dir)
    assert not upload_dir.exists() or not any(upload_dir.iterdir())


def test_failed_validation_does_not_leave_upload_behind(client, headers, settings):
    response = client.post(
        "/api/cv-records",
        data={"name": "Jane", "email": "broken", "position": "Tester"},
        files={"cv_file": ("cv.pdf", b"%PDF", "application/pdf")},
        headers=headers["admin"],
    )
    assert response.status_code == 400
    upload_dir = Path(settings.upload_dir)
    assert not upload_dir.exists() or not any(upload_dir.iterdir())


def test_replacing_and_deleting_file(client, headers, settings):
    created = client.post(
        "/api/cv-records",
        data=JOHN,
        files={"cv_file": ("first.pdf", b"one", "application/pdf")},
        headers=headers["admin"],
    ).json()
    first = Path(settings.upload_dir) / created["cv_file"]
    assert first.exists()

    updated = client.put(
        f"/api/cv-records/{created['id']}",
        data={"status": "active"},
        files={"cv_file": ("second.docx", b"two", "application/octet-stream")},
        headers=headers["admin"],
    ).json()
    second = Path(settings.upload_dir) / updated["cv_file"]
    assert second.read_bytes() == b"two"
    assert not first.exists()

    assert client.delete(f"/api/cv-records/{created['id']}", headers=headers["admin"]).status_code == 204
    assert not second.exists()


def test_delete_succeeds_when_file_already_gone(client, headers, settings):
    created = client.post(
        "/api/cv-records",
        data=JOHN,
        files={"cv_file": ("cv.pdf", b"x", "application/pdf")},
        headers=headers["admin"],
    ).json()
    (Path(settings.upload_dir) / created["cv_file"]).unlink()
    assert client.get(f"/api/cv-records/{created['id']}/file", headers=headers["admin"]).status_code == 404
    assert client.delete(f"/api/cv-records/{created['id']}", headers=headers["admin"]).status_code == 204


def test_export_csv_honours_filters(client, headers):
    _create(client, headers["admin"], name="Alice", surname="Smith, Jr.")
    _create(client, headers["admin"], name="Bob")

    response = client.get("/api/cv-records/export/csv", params={"search": "alice"}, headers=headers["manager"])
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["content-disposition"] == 'attachment; filename="cv-records.csv"'
    lines = response.text.strip().splitlines()
    assert lines[0] == "ID,Name,Surname,Email,Phone,Position,Department,Experience,Status,Submitted At"
    assert len(lines) == 2
    assert '"Smith, Jr."' in lines[1]

    assert client.get("/api/cv-records/export/csv", headers=headers["user"]).status_code == 403


def test_document_download(client, headers):
    record = _create(client, headers["admin"], surname="<Doe>", skills="Python")
    response = client.get(f"/api/cv-records/{record['id']}/document", headers=headers["manager"])
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "John &lt;Doe&gt;" in response.text
    assert "Python" in response.text
