"""Tests for reading activity endpoints and the progress they drive."""

from datetime import UTC, datetime

import pytest


async def _create_book(client, headers, total_pages=300):
    resp = await client.post("/userbooks", headers=headers, json={
        "title": "Dune",
        "author": "Frank Herbert",
        "total_pages": total_pages,
        "start_date": "2025-01-01",
    })
    assert resp.status_code == 201
    return resp.json()["data"]


async def _log(client, headers, book_id, start, end, date="2025-01-02", **extra):
    payload = {
        "user_book_id": book_id,
        "pages_read": end - start,
        "start_page": start,
        "end_page": end,
        "reading_date": date,
    }
    payload.update(extra)
    return await client.post("/reading-activities", headers=headers, json=payload)


async def _current_page(client, headers, book_id):
    resp = await client.get(f"/userbooks/{book_id}", headers=headers)
    return resp.json()["data"]["current_page"]


# --- log ---

@pytest.mark.asyncio
async def test_log_activity_sets_current_page(client, headers):
    book = await _create_book(client, headers)
    resp = await _log(client, headers, book["id"], 0, 20, notes="Opening chapters")
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["pages_read"] == 20
    assert data["notes"] == "Opening chapters"
    assert data["reading_date"] == "2025-01-02"
    assert await _current_page(client, headers, book["id"]) == 20


@pytest.mark.asyncio
async def test_current_page_follows_latest_end_page(client, headers):
    book = await _create_book(client, headers)
    await _log(client, headers, book["id"], 0, 30)
    await _log(client, headers, book["id"], 100, 110, date="2025-01-03")
    # taken from the last end_page, not the 40 pages summed
    assert await _current_page(client, headers, book["id"]) == 110


@pytest.mark.asyncio
async def test_out_of_order_activity_moves_progress_back(client, headers):
    book = await _create_book(client, headers)
    await _log(client, headers, book["id"], 50, 120)
    await _log(client, headers, book["id"], 0, 50, date="2025-01-01")
    assert await _current_page(client, headers, book["id"]) == 50


@pytest.mark.asyncio
async def test_end_page_equal_to_start_page_rejected(client, headers):
    book = await _create_book(client, headers)
    resp = await client.post("/reading-activities", headers=headers, json={
        "user_book_id": book["id"],
        "pages_read": 1,
        "start_page": 40,
        "end_page": 40,
        "reading_date": "2025-01-02",
    })
    assert resp.status_code == 400
    assert "end_page" in resp.json()["errors"]
    assert await _current_page(client, headers, book["id"]) == 0


@pytest.mark.asyncio
async def test_log_activity_field_rules(client, headers):
    book = await _create_book(client, headers)
    resp = await client.post("/reading-activities", headers=headers, json={
        "user_book_id": book["id"],
        "pages_read": 0,
        "start_page": -1,
        "end_page": 10,
    })
    assert resp.status_code == 400
    assert {"pages_read", "start_page", "reading_date"} <= set(resp.json()["errors"])


@pytest.mark.asyncio
async def test_log_activity_unknown_book(client, headers):
    resp = await _log(client, headers, 999999, 0, 10)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_log_activity_on_deleted_book(client, headers):
    book = await _create_book(client, headers)
    await client.delete(f"/userbooks/{book['id']}", headers=headers)
    resp = await _log(client, headers, book["id"], 0, 10)
    assert resp.status_code == 404


# --- read ---

@pytest.mark.asyncio
async def test_get_activity(client, headers):
    book = await _create_book(client, headers)
    created = (await _log(client, headers, book["id"], 0, 10)).json()["data"]
    resp = await client.get(f"/reading-activities/{created['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["user_book_id"] == book["id"]


@pytest.mark.asyncio
async def test_get_activity_not_found(client, headers):
    resp = await client.get("/reading-activities/999999", headers=headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_list_activities_ordering(client, headers):
    book = await _create_book(client, headers)
    first = (await _log(client, headers, book["id"], 0, 10, date="2025-01-01")).json()["data"]
    second = (await _log(client, headers, book["id"], 10, 20, date="2025-01-03")).json()["data"]
    third = (await _log(client, headers, book["id"], 20, 30, date="2025-01-03")).json()["data"]

    resp = await client.get(f"/userbooks/{book['id']}/activities", headers=headers)
    assert resp.status_code == 200
    ids = [a["id"] for a in resp.json()["data"]]
    assert ids == [third["id"], second["id"], first["id"]]


@pytest.mark.asyncio
async def test_list_activities_unknown_book(client, headers):
    resp = await client.get("/userbooks/999999/activities", headers=headers)
    assert resp.status_code == 404


# --- update ---

@pytest.mark.asyncio
async def test_update_notes_only(client, headers):
    book = await _create_book(client, headers)
    created = (await _log(client, headers, book["id"], 0, 20, notes="first pass")).json()["data"]

    resp = await client.put(f"/reading-activities/{created['id']}", headers=headers, json={"notes": "x"})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["notes"] == "x"
    for key in ("pages_read", "start_page", "end_page", "reading_date"):
        assert data[key] == created[key]


@pytest.mark.asyncio
async def test_update_with_empty_notes_keeps_notes(client, headers):
    book = await _create_book(client, headers)
    created = (await _log(client, headers, book["id"], 0, 20, notes="keep me")).json()["data"]
    resp = await client.put(f"/reading-activities/{created['id']}", headers=headers, json={"notes": ""})
    assert resp.json()["data"]["notes"] == "keep me"


@pytest.mark.asyncio
async def test_update_does_not_touch_current_page(client, headers):
    book = await _create_book(client, headers)
    created = (await _log(client, headers, book["id"], 0, 20)).json()["data"]

    resp = await client.put(
        f"/reading-activities/{created['id']}",
        headers=headers,
        json={"end_page": 80, "pages_read": 80},
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["end_page"] == 80
    assert await _current_page(client, headers, book["id"]) == 20


@pytest.mark.asyncio
async def test_update_rejects_inverted_range(client, headers):
    book = await _create_book(client, headers)
    created = (await _log(client, headers, book["id"], 10, 20)).json()["data"]
    resp = await client.put(f"/reading-activities/{created['id']}", headers=headers, json={"start_page": 20})
    assert resp.status_code == 400
    assert "end_page" in resp.json()["errors"]


@pytest.mark.asyncio
async def test_update_missing_activity(client, headers):
    resp = await client.put("/reading-activities/999999", headers=headers, json={"notes": "x"})
    assert resp.status_code == 404


# --- delete ---

@pytest.mark.asyncio
async def test_delete_activity_keeps_current_page(client, headers):
    book = await _create_book(client, headers)
    created = (await _log(client, headers, book["id"], 0, 20)).json()["data"]

    resp = await client.delete(f"/reading-activities/{created['id']}", headers=headers)
    assert resp.status_code == 200

    resp = await client.get(f"/reading-activities/{created['id']}", headers=headers)
    assert resp.status_code == 404
    assert await _current_page(client, headers, book["id"]) == 20


# --- scenario ---

@pytest.mark.asyncio
async def test_reading_a_book_end_to_end(client, headers):
    book = await _create_book(client, headers, total_pages=300)
    assert book["current_page"] == 0

    await _log(client, headers, book["id"], 0, 50, date="2025-01-02")
    assert await _current_page(client, headers, book["id"]) == 50

    await _log(client, headers, book["id"], 50, 120, date="2025-01-03")
    assert await _current_page(client, headers, book["id"]) == 120

    resp = await client.put(f"/userbooks/{book['id']}", headers=headers, json={"status": "finished"})
    data = resp.json()["data"]
    assert data["status"] == "finished"
    assert data["end_date"] == datetime.now(UTC).date().isoformat()
    assert data["current_page"] == 120
