"""Integration tests for document creation, listing, access and export."""

from datetime import datetime, timezone
from io import BytesIO

import pytest
from httpx import AsyncClient
from openpyxl import load_workbook

from fleetgrid.infrastructure.persistence.models import TabularDocumentModel

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


async def _create(client: AsyncClient, auth, **payload) -> dict:
    res = await client.post("/api/excel/create", headers=auth, json=payload)
    assert res.status_code == 200, res.text
    return res.json()["file"]


@pytest.mark.asyncio
async def test_create_from_vehicle_template(client: AsyncClient, manager_headers, manager_account):
    res = await client.post(
        "/api/excel/create", headers=manager_headers, json={"template": "vehicle"}
    )

    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "File created successfully"
    file = body["file"]
    assert file["name"] == "Vehicle Register"
    assert file["headers"] == [
        "Vehicle ID",
        "Make",
        "Model",
        "Year",
        "Registration",
        "Status",
        "Last Service",
    ]
    assert "rows" not in file
    assert file["row_count"] == 0
    assert file["owner_id"] == manager_account.id
    assert file["version"] == 1


@pytest.mark.asyncio
async def test_create_from_headers(client: AsyncClient, manager_headers):
    file = await _create(client, manager_headers, name="Trips", headers=["Date", " ", "Km"])
    assert file["name"] == "Trips"
    assert file["headers"] == ["Date", "Km"]

    res = await client.post(
        "/api/excel/create", headers=manager_headers, json={"headers": [""]}
    )
    assert res.status_code == 400
    assert res.json()["message"] == "At least one header required"


@pytest.mark.asyncio
async def test_create_is_manager_only(client: AsyncClient, admin_headers):
    res = await client.post("/api/excel/create", headers=admin_headers, json={})
    assert res.status_code == 403
    assert res.json()["message"] == "Manager access required"

    anonymous = await client.post("/api/excel/create", json={})
    assert anonymous.status_code == 401


@pytest.mark.asyncio
async def test_upload_name_age_scenario(client: AsyncClient, manager_headers, workbook_bytes):
    content = workbook_bytes([["Name", "Age"], ["Ann", 30], ["Bo", None]])

    res = await client.post(
        "/api/excel/upload",
        headers=manager_headers,
        files={"file": ("people.xlsx", content, XLSX)},
    )

    assert res.status_code == 201
    assert res.json()["message"] == "File uploaded successfully"
    file = res.json()["file"]
    assert file["name"] == "people"
    assert file["headers"] == ["Name", "Age"]
    assert file["row_count"] == 2
    assert "rows" not in file

    stored = await client.get(f"/api/excel/{file['id']}", headers=manager_headers)
    assert stored.json()["file"]["rows"] == [
        {"Name": "Ann", "Age": "30"},
        {"Name": "Bo", "Age": ""},
    ]


@pytest.mark.asyncio
async def test_upload_failures(
    client: AsyncClient, manager_headers, workbook_bytes, malformed_workbook_bytes
):
    missing = await client.post("/api/excel/upload", headers=manager_headers)
    assert missing.status_code == 400
    assert missing.json()["message"] == "No file provided"

    wrong_type = await client.post(
        "/api/excel/upload",
        headers=manager_headers,
        files={"file": ("people.csv", b"Name,Age\nAnn,30\n", "text/csv")},
    )
    assert wrong_type.status_code == 400
    assert wrong_type.json()["message"] == "Only .xlsx and .xls files are allowed"

    empty = await client.post(
        "/api/excel/upload",
        headers=manager_headers,
        files={"file": ("empty.xlsx", workbook_bytes([]), XLSX)},
    )
    assert empty.status_code == 400
    assert empty.json()["message"] == "Excel file is empty"

    broken = await client.post(
        "/api/excel/upload",
        headers=manager_headers,
        files={"file": ("broken.xlsx", b"garbage", XLSX)},
    )
    assert broken.status_code == 400
    assert broken.json()["message"] == "Invalid Excel file"

    malformed = await client.post(
        "/api/excel/upload",
        headers=manager_headers,
        files={"file": ("malformed.xlsx", malformed_workbook_bytes, XLSX)},
    )
    assert malformed.status_code == 400
    assert malformed.json()["message"] == "Invalid Excel file"


@pytest.mark.asyncio
async def test_list_own_documents(
    client: AsyncClient, manager_headers, other_manager_headers
):
    first = await _create(client, manager_headers, template="vehicle")
    second = await _create(client, manager_headers, template="driver")
    await _create(client, other_manager_headers, template="expense")

    res = await client.get("/api/excel", headers=manager_headers)

    assert res.status_code == 200
    files = res.json()["files"]
    assert [f["id"] for f in files] == [second["id"], first["id"]]
    assert "rows" not in files[0]


@pytest.mark.asyncio
async def test_admin_listing_includes_owners(
    client: AsyncClient, admin_headers, manager_headers, manager_account
):
    created = await _create(client, manager_headers, template="blank")

    res = await client.get("/api/excel/admin", headers=admin_headers)

    assert res.status_code == 200
    files = res.json()["files"]
    assert files[0]["id"] == created["id"]
    assert files[0]["owner"]["email"] == manager_account.email

    forbidden = await client.get("/api/excel/admin", headers=manager_headers)
    assert forbidden.status_code == 403


@pytest.mark.asyncio
async def test_manager_cannot_touch_another_managers_document(
    client: AsyncClient, manager_headers, other_manager_headers
):
    file = await _create(client, manager_headers, template="blank")

    read = await client.get(f"/api/excel/{file['id']}", headers=other_manager_headers)
    assert read.status_code == 404
    assert read.json()["message"] == "File not found"

    write = await client.put(
        f"/api/excel/{file['id']}", headers=other_manager_headers, json={"name": "Hijacked"}
    )
    assert write.status_code == 404

    download = await client.get(
        f"/api/excel/{file['id']}/download", headers=other_manager_headers
    )
    assert download.status_code == 404


@pytest.mark.asyncio
async def test_admin_can_read_and_update_but_not_delete(
    client: AsyncClient, admin_headers, manager_headers
):
    file = await _create(client, manager_headers, template="blank")
    url = f"/api/excel/{file['id']}"

    read = await client.get(url, headers=admin_headers)
    assert read.status_code == 200

    update = await client.put(url, headers=admin_headers, json={"name": "Reviewed"})
    assert update.status_code == 200
    assert update.json()["file"]["name"] == "Reviewed"

    delete = await client.delete(url, headers=admin_headers)
    assert delete.status_code == 404

    duplicate = await client.post(f"{url}/duplicate", headers=admin_headers)
    assert duplicate.status_code == 404

    still_there = await client.get(url, headers=manager_headers)
    assert still_there.status_code == 200


@pytest.mark.asyncio
async def test_owner_deletes_document(client: AsyncClient, manager_headers):
    file = await _create(client, manager_headers, template="blank")
    url = f"/api/excel/{file['id']}"

    res = await client.delete(url, headers=manager_headers)
    assert res.status_code == 200
    assert res.json() == {"message": "File deleted successfully"}

    assert (await client.get(url, headers=manager_headers)).status_code == 404


@pytest.mark.asyncio
async def test_owner_duplicates_document(client: AsyncClient, manager_headers):
    file = await _create(client, manager_headers, name="Trips", headers=["A"])

    res = await client.post(f"/api/excel/{file['id']}/duplicate", headers=manager_headers)

    assert res.status_code == 201
    assert res.json()["message"] == "File duplicated successfully"
    copy = res.json()["file"]
    assert copy["id"] != file["id"]
    assert copy["name"] == "Trips (Copy)"
    assert copy["headers"] == ["A"]
    assert "rows" not in copy


@pytest.mark.asyncio
async def test_invalid_document_id(client: AsyncClient, manager_headers):
    res = await client.get("/api/excel/not-a-uuid", headers=manager_headers)
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid file ID"


@pytest.mark.asyncio
async def test_download(client: AsyncClient, manager_headers, admin_headers):
    file = await _create(client, manager_headers, name="Fleet Q1 (draft)", headers=["Name"])
    await client.put(
        f"/api/excel/{file['id']}",
        headers=manager_headers,
        json={"rows": [{"Name": "Ann"}]},
    )

    res = await client.get(f"/api/excel/{file['id']}/download", headers=admin_headers)

    assert res.status_code == 200
    assert res.headers["content-type"] == XLSX
    assert (
        res.headers["content-disposition"]
        == 'attachment; filename="Fleet_Q1__draft_.xlsx"'
    )
    sheet = load_workbook(BytesIO(res.content)).active
    assert [list(row) for row in sheet.iter_rows(values_only=True)] == [["Name"], ["Ann"]]


@pytest.mark.asyncio
async def test_admin_listing_tolerates_missing_owner(
    client: AsyncClient, admin_headers, db_session
):
    now = datetime.now(timezone.utc)

    orphan = TabularDocumentModel(
        id="00000000-0000-4000-8000-000000000001",
        owner_id="00000000-0000-4000-8000-0000000000ff",
        name="Left behind",
        headers=["A"],
        rows=[],
        version=1,
        created_at=now,
        updated_at=now,
    )
    db_session.add(orphan)
    await db_session.commit()

    res = await client.get("/api/excel/admin", headers=admin_headers)

    assert res.status_code == 200
    [listed] = res.json()["files"]
    assert listed["id"] == orphan.id
    assert listed["owner"] is None


@pytest.mark.asyncio
async def test_update_with_stale_version_conflicts(client: AsyncClient, manager_headers):
    file = await _create(client, manager_headers, headers=["A"])
    url = f"/api/excel/{file['id']}"

    first = await client.put(url, headers=manager_headers, json={"name": "One", "version": 1})
    assert first.status_code == 200
    assert first.json()["file"]["version"] == 2

    stale = await client.put(url, headers=manager_headers, json={"name": "Two", "version": 1})
    assert stale.status_code == 409
    assert stale.json()["message"] == "File was modified by another request"


@pytest.mark.asyncio
async def test_update_validation(client: AsyncClient, manager_headers):
    file = await _create(client, manager_headers, headers=["A"])
    url = f"/api/excel/{file['id']}"

    blank_name = await client.put(url, headers=manager_headers, json={"name": "  "})
    assert blank_name.status_code == 400
    assert blank_name.json()["message"] == "Name cannot be empty"

    bad_rows = await client.put(url, headers=manager_headers, json={"rows": "nope"})
    assert bad_rows.status_code == 400
    assert bad_rows.json()["message"] == "Rows must be an array"


@pytest.mark.asyncio
async def test_blank_rows_survive_download_and_upload(client: AsyncClient, manager_headers):
    file = await _create(client, manager_headers, name="Log", headers=["A", "B"])
    url = f"/api/excel/{file['id']}"
    await client.put(url, headers=manager_headers, json={"rows": [{"A": "x", "B": "y"}]})
    await client.post(f"{url}/rows", headers=manager_headers)

    download = await client.get(f"{url}/download", headers=manager_headers)
    upload = await client.post(
        "/api/excel/upload",
        headers=manager_headers,
        files={"file": ("Log.xlsx", download.content, XLSX)},
    )

    assert upload.status_code == 201
    assert upload.json()["file"]["row_count"] == 2
    reimported = await client.get(
        f"/api/excel/{upload.json()['file']['id']}", headers=manager_headers
    )
    assert reimported.json()["file"]["rows"] == [{"A": "x", "B": "y"}, {"A": "", "B": ""}]
