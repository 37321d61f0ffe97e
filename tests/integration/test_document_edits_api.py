"""Integration tests for cell and structure edits."""

import pytest
from httpx import AsyncClient


@pytest.fixture
def people_rows() -> list[dict[str, str]]:
    return [{"Name": "Ann", "Age": "30"}, {"Name": "Bo", "Age": "41"}]


async def _seed(client: AsyncClient, headers, rows) -> str:
    res = await client.post(
        "/api/excel/create", headers=headers, json={"name": "People", "headers": ["Name", "Age"]}
    )
    document_id = res.json()["file"]["id"]
    await client.put(f"/api/excel/{document_id}", headers=headers, json={"rows": rows})
    return document_id


@pytest.mark.asyncio
async def test_edit_cell(client: AsyncClient, manager_headers, people_rows):
    document_id = await _seed(client, manager_headers, people_rows)

    res = await client.patch(
        f"/api/excel/{document_id}/cells",
        headers=manager_headers,
        json={"row_index": 1, "header": "Age", "value": 42},
    )

    assert res.status_code == 200
    assert res.json()["message"] == "File updated successfully"
    assert res.json()["file"]["rows"][1] == {"Name": "Bo", "Age": "42"}


@pytest.mark.asyncio
async def test_edit_cell_rejects_unknown_targets(client: AsyncClient, manager_headers, people_rows):
    document_id = await _seed(client, manager_headers, people_rows)
    url = f"/api/excel/{document_id}/cells"

    out_of_range = await client.patch(
        url, headers=manager_headers, json={"row_index": 5, "header": "Age", "value": "1"}
    )
    assert out_of_range.status_code == 400
    assert out_of_range.json()["message"] == "Row index out of range"

    unknown = await client.patch(
        url, headers=manager_headers, json={"row_index": 0, "header": "Height", "value": "1"}
    )
    assert unknown.status_code == 400
    assert unknown.json()["message"] == "Unknown header"


@pytest.mark.asyncio
async def test_rename_header_moves_values(client: AsyncClient, manager_headers, people_rows):
    document_id = await _seed(client, manager_headers, people_rows)

    res = await client.patch(
        f"/api/excel/{document_id}/headers",
        headers=manager_headers,
        json={"old": "Age", "new": "Years"},
    )

    file = res.json()["file"]
    assert file["headers"] == ["Name", "Years"]
    assert file["rows"][0] == {"Name": "Ann", "Years": "30"}


@pytest.mark.asyncio
async def test_rename_to_blank_is_ignored(client: AsyncClient, manager_headers, people_rows):
    document_id = await _seed(client, manager_headers, people_rows)
    before = (await client.get(f"/api/excel/{document_id}", headers=manager_headers)).json()

    res = await client.patch(
        f"/api/excel/{document_id}/headers",
        headers=manager_headers,
        json={"old": "Age", "new": "   "},
    )

    assert res.status_code == 200
    assert res.json()["file"]["headers"] == ["Name", "Age"]
    assert res.json()["file"]["version"] == before["file"]["version"]


@pytest.mark.asyncio
async def test_add_and_delete_rows(client: AsyncClient, manager_headers, people_rows):
    document_id = await _seed(client, manager_headers, people_rows)

    added = await client.post(f"/api/excel/{document_id}/rows", headers=manager_headers)
    assert added.json()["file"]["rows"][-1] == {"Name": "", "Age": ""}

    deleted = await client.delete(f"/api/excel/{document_id}/rows/0", headers=manager_headers)
    assert [row["Name"] for row in deleted.json()["file"]["rows"]] == ["Bo", ""]

    ignored = await client.delete(f"/api/excel/{document_id}/rows/99", headers=manager_headers)
    assert ignored.status_code == 200
    assert len(ignored.json()["file"]["rows"]) == 2

    malformed = await client.delete(f"/api/excel/{document_id}/rows/first", headers=manager_headers)
    assert malformed.status_code == 400
    assert malformed.json()["error"] == "Validation error"


@pytest.mark.asyncio
async def test_add_and_delete_columns(client: AsyncClient, manager_headers, people_rows):
    document_id = await _seed(client, manager_headers, people_rows)

    added = await client.post(f"/api/excel/{document_id}/columns", headers=manager_headers)
    file = added.json()["file"]
    assert file["headers"] == ["Name", "Age", "Column 3"]
    assert all(row["Column 3"] == "" for row in file["rows"])

    deleted = await client.delete(
        f"/api/excel/{document_id}/columns/Name", headers=manager_headers
    )
    file = deleted.json()["file"]
    assert file["headers"] == ["Age", "Column 3"]
    assert "Name" not in file["rows"][0]


@pytest.mark.asyncio
async def test_last_column_is_kept(client: AsyncClient, manager_headers):
    res = await client.post(
        "/api/excel/create", headers=manager_headers, json={"headers": ["Only"]}
    )
    document_id = res.json()["file"]["id"]

    deleted = await client.delete(
        f"/api/excel/{document_id}/columns/Only", headers=manager_headers
    )

    assert deleted.status_code == 200
    assert deleted.json()["file"]["headers"] == ["Only"]


@pytest.mark.asyncio
async def test_admin_can_edit_any_document(
    client: AsyncClient, manager_headers, admin_headers, people_rows
):
    document_id = await _seed(client, manager_headers, people_rows)

    res = await client.post(f"/api/excel/{document_id}/rows", headers=admin_headers)

    assert res.status_code == 200
    assert len(res.json()["file"]["rows"]) == 3


@pytest.mark.asyncio
async def test_edits_require_access(
    client: AsyncClient, manager_headers, other_manager_headers, people_rows
):
    document_id = await _seed(client, manager_headers, people_rows)

    res = await client.post(f"/api/excel/{document_id}/rows", headers=other_manager_headers)

    assert res.status_code == 404


@pytest.mark.asyncio
async def test_delete_column_with_slash_in_label(client: AsyncClient, manager_headers):
    res = await client.post(
        "/api/excel/create", headers=manager_headers, json={"headers": ["Date/Time", "Odometer"]}
    )
    document_id = res.json()["file"]["id"]

    deleted = await client.delete(
        f"/api/excel/{document_id}/columns/Date%2FTime", headers=manager_headers
    )

    assert deleted.status_code == 200
    assert deleted.json()["file"]["headers"] == ["Odometer"]
