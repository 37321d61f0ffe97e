"""Integration tests for the admin directory endpoints."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_accounts_with_document_counts(
    client: AsyncClient,
    admin_headers,
    manager_headers,
    manager_account,
    other_manager_account,
):
    for template in ("vehicle", "driver"):
        await client.post("/api/excel/create", headers=manager_headers, json={"template": template})

    res = await client.get("/api/directory/accounts", headers=admin_headers)

    assert res.status_code == 200
    counts = {entry["email"]: entry["document_count"] for entry in res.json()["accounts"]}
    assert counts == {
        "admin@fleet.test": 0,
        "manager@fleet.test": 2,
        "other@fleet.test": 0,
    }
    assert all("password_hash" not in entry for entry in res.json()["accounts"])


@pytest.mark.asyncio
async def test_summary(client: AsyncClient, admin_headers, manager_headers):
    res = await client.post(
        "/api/excel/create", headers=manager_headers, json={"headers": ["A"]}
    )
    document_id = res.json()["file"]["id"]
    await client.post(f"/api/excel/{document_id}/rows", headers=manager_headers)
    await client.post(f"/api/excel/{document_id}/rows", headers=manager_headers)

    res = await client.get("/api/directory/summary", headers=admin_headers)

    assert res.status_code == 200
    assert res.json() == {
        "total_accounts": 2,
        "total_admins": 1,
        "total_managers": 1,
        "total_documents": 1,
        "total_rows": 2,
        "orphaned_documents": 0,
    }


@pytest.mark.asyncio
async def test_directory_is_admin_only(client: AsyncClient, manager_headers):
    for path in ("/api/directory/accounts", "/api/directory/summary"):
        res = await client.get(path, headers=manager_headers)
        assert res.status_code == 403
        assert res.json()["message"] == "Admin access required"

        anonymous = await client.get(path)
        assert anonymous.status_code == 401
