"""
Travel API Backend — Agency and Tour Schedule Endpoint Tests
==============================================================
"""

import pytest

from conftest import JPEG_BYTES, create_place


async def _add_agency(client, user_id, name="Alpine Tours", files=None):
    return await client.post(
        "/add-agency",
        data={
            "name": name,
            "description": "Guided hikes",
            "contact": "+386 1 234 567",
            "userId": str(user_id),
        },
        files=files,
    )


@pytest.mark.asyncio
async def test_add_agency_without_image(test_client, admin_user):
    response = await _add_agency(test_client, admin_user.id)

    assert response.status_code == 200
    assert response.json() == {"message": "Agency added successfully"}

    agencies = (await test_client.get("/agencies")).json()
    assert len(agencies) == 1
    assert agencies[0]["name"] == "Alpine Tours"
    assert agencies[0]["image"] is None


@pytest.mark.asyncio
async def test_add_agency_with_image(test_client, admin_user):
    await _add_agency(
        test_client,
        admin_user.id,
        files={"image": ("logo.png", JPEG_BYTES, "image/png")},
    )

    agencies = (await test_client.get("/agencies")).json()
    assert agencies[0]["image"].startswith("uploads/")


@pytest.mark.asyncio
async def test_agencies_newest_first(test_client, admin_user):
    await _add_agency(test_client, admin_user.id, name="First")
    await _add_agency(test_client, admin_user.id, name="Second")

    agencies = (await test_client.get("/agencies")).json()
    assert [a["name"] for a in agencies] == ["Second", "First"]


@pytest.mark.asyncio
async def test_tour_schedules(test_client, db_session, admin_user):
    place = await create_place(db_session, admin_user, title="Triglav")
    await _add_agency(test_client, admin_user.id)
    agency_id = (await test_client.get("/agencies")).json()[0]["id"]

    for tour_date, price in [("2024-07-20", 150.0), ("2024-06-01", 99.5)]:
        response = await test_client.post(
            "/add-tour-schedule",
            json={
                "agencyId": agency_id,
                "placeId": place.id,
                "tourDate": tour_date,
                "price": price,
                "description": "Summit day",
                "userId": admin_user.id,
            },
        )
        assert response.status_code == 200
        assert response.json() == {"message": "Tour schedule added successfully"}

    schedules = (await test_client.get(f"/tour-schedules/{agency_id}")).json()

    assert [s["tour_date"] for s in schedules] == ["2024-06-01", "2024-07-20"]
    assert schedules[0]["price"] == 99.5
    assert all(s["place_title"] == "Triglav" for s in schedules)


@pytest.mark.asyncio
async def test_tour_schedule_unknown_agency(test_client, db_session, admin_user):
    place = await create_place(db_session, admin_user)

    response = await test_client.post(
        "/add-tour-schedule",
        json={
            "agencyId": 999,
            "placeId": place.id,
            "tourDate": "2024-06-01",
            "userId": admin_user.id,
        },
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Failed to add tour schedule"


@pytest.mark.asyncio
async def test_tour_schedules_empty(test_client):
    response = await test_client.get("/tour-schedules/1")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_add_agency_empty_image_rejected(test_client, admin_user):
    response = await _add_agency(
        test_client,
        admin_user.id,
        files={"image": ("logo.jpg", b"", "image/jpeg")},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Uploaded image is empty"
    assert (await test_client.get("/agencies")).json() == []
