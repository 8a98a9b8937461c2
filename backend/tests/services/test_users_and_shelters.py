"""Profiles and shelters — the caller's own profile and shelter administration."""

from uuid import uuid4


def _shelter_body(**overrides):
    data = {
        "name": "Patas Felizes",
        "street": "Rua Nova 1",
        "city": "Setubal",
        "postal_code": "2900-002",
        "phone": "265123456",
        "nif": "123456789",
        "opening_time": "09:00:00",
        "closing_time": "19:00:00",
    }
    data.update(overrides)
    return data


# --- Users -------------------------------------------------------------------

async def test_get_profile(client, auth, admin):
    res = await client.get("/api/v1/users/me", headers=auth(admin))

    assert res.status_code == 200
    assert res.json()["email"] == "ana@shelter.test"
    assert res.json()["is_shelter_admin"] is True


async def test_edit_profile(client, auth, user):
    res = await client.put(
        "/api/v1/users/me",
        json={"name": "Bruno Silva", "city": "Porto", "postal_code": "4000-123"},
        headers=auth(user),
    )

    assert res.status_code == 200
    assert res.json()["name"] == "Bruno Silva"
    assert res.json()["city"] == "Porto"
    assert res.json()["email"] == "bruno@example.test"


async def test_edit_profile_invalid_postal_code(client, auth, user):
    res = await client.put(
        "/api/v1/users/me", json={"name": "Bruno", "postal_code": "4000"}, headers=auth(user),
    )
    assert res.status_code == 400


async def test_unknown_user_is_401(client):
    res = await client.get("/api/v1/users/me", headers={"X-User-Id": str(uuid4())})
    assert res.status_code == 401


# --- Shelters -------------------------------------------------------------------

async def test_get_shelter(client, shelter):
    res = await client.get(f"/api/v1/shelters/{shelter.id}")

    assert res.status_code == 200
    assert res.json()["opening_time"] == "08:00:00"
    assert res.json()["images"] == []


async def test_get_unknown_shelter_is_404(client):
    res = await client.get(f"/api/v1/shelters/{uuid4()}")
    assert res.status_code == 404


async def test_admin_edits_own_shelter(client, auth, admin, shelter):
    res = await client.put(
        f"/api/v1/shelters/{shelter.id}", json=_shelter_body(), headers=auth(admin),
    )

    assert res.status_code == 200
    assert res.json()["closing_time"] == "19:00:00"
    assert res.json()["phone"] == "265123456"


async def test_admin_cannot_edit_other_shelter(client, auth, admin, other_shelter):
    res = await client.put(
        f"/api/v1/shelters/{other_shelter.id}", json=_shelter_body(), headers=auth(admin),
    )
    assert res.status_code == 403


async def test_shelter_hours_must_be_ordered(client, auth, admin, shelter):
    res = await client.put(
        f"/api/v1/shelters/{shelter.id}",
        json=_shelter_body(opening_time="20:00:00", closing_time="08:00:00"),
        headers=auth(admin),
    )
    assert res.status_code == 400
