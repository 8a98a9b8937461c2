"""Animal catalogue and lifecycle — public queries and shelter-admin commands.

Invariants:
    - Public list and details never show HasOwner / TotallyFostered / Inactive animals
    - Empty result sets are 404, not an empty page
    - Admin commands act only on animals of the admin's own shelter
    - Deactivation also deactivates favorites; deletion only for Available animals
"""

from datetime import date
from uuid import uuid4

import pytest

from seepaw.core.domain_types import AnimalState, Species
from seepaw.core.enforce_animals import age_in_years
from seepaw.db.types import utc_now
from seepaw.models import Favorite, User


def _payload(breed, **overrides):
    data = {
        "name": "Luna",
        "description": "Calm and friendly",
        "species": "Cat",
        "size": "Small",
        "sex": "Female",
        "colour": "Black",
        "birth_date": "2022-01-10",
        "sterilized": True,
        "cost": 35.5,
        "features": "Loves laps",
        "breed_id": str(breed.id),
    }
    data.update(overrides)
    return data


@pytest.fixture
async def foreign_admin(test_db, other_shelter):
    admin = User(name="Diogo", email="diogo@other.test", shelter_id=other_shelter.id)
    test_db.add(admin)
    await test_db.commit()
    return admin


# --- Listing -----------------------------------------------------------------

async def test_list_shows_only_visible_animals(client, make_animal):
    await make_animal("Rex")
    await make_animal("Bolt", state=AnimalState.PARTIALLY_FOSTERED)
    await make_animal("Max", state=AnimalState.TOTALLY_FOSTERED)
    await make_animal("Tobi", state=AnimalState.HAS_OWNER)
    await make_animal("Zed", state=AnimalState.INACTIVE)

    res = await client.get("/api/v1/animals")

    assert res.status_code == 200
    body = res.json()
    assert [a["name"] for a in body["items"]] == ["Bolt", "Rex"]
    assert body["total_count"] == 2
    assert body["total_pages"] == 1


async def test_list_empty_is_404(client, shelter, breed):
    res = await client.get("/api/v1/animals")
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "No animals found"


async def test_list_pagination(client, make_animal):
    for name in ("Alfa", "Beto", "Caco"):
        await make_animal(name)

    res = await client.get("/api/v1/animals", params={"page": 2, "size": 2})

    body = res.json()
    assert [a["name"] for a in body["items"]] == ["Caco"]
    assert body["current_page"] == 2
    assert body["total_pages"] == 2


async def test_list_page_size_above_limit_rejected(client, animal):
    res = await client.get("/api/v1/animals", params={"size": 51})
    assert res.status_code == 400


async def test_list_filters(client, make_animal):
    await make_animal("Rex")
    await make_animal("Mia", species=Species.CAT, birth_date=date(2024, 1, 1))

    by_species = await client.get("/api/v1/animals", params={"species": "Cat"})
    by_name = await client.get("/api/v1/animals", params={"name": "re"})
    by_shelter = await client.get("/api/v1/animals", params={"shelter_name": "patas"})

    assert [a["name"] for a in by_species.json()["items"]] == ["Mia"]
    assert [a["name"] for a in by_name.json()["items"]] == ["Rex"]
    assert by_shelter.json()["total_count"] == 2


async def test_list_age_filter(client, make_animal):
    await make_animal("Rex", birth_date=date(2020, 5, 17))
    await make_animal("Mia", birth_date=date(2024, 1, 1))
    age = age_in_years(date(2020, 5, 17), utc_now().date())

    res = await client.get("/api/v1/animals", params={"age": age})

    assert [a["name"] for a in res.json()["items"]] == ["Rex"]
    assert res.json()["items"][0]["age"] == age


async def test_list_summary_fields(client, animal):
    item = (await client.get("/api/v1/animals")).json()["items"][0]
    assert item["breed_name"] == "Labrador"
    assert item["shelter_name"] == "Patas Felizes"
    assert item["principal_image_url"] == "https://img.test/rex.jpg"


# --- Details -----------------------------------------------------------------

async def test_details(client, animal):
    res = await client.get(f"/api/v1/animals/{animal.id}")
    assert res.status_code == 200
    body = res.json()
    assert body["cost"] == 50.0
    assert len(body["images"]) == 1


async def test_details_of_hidden_animal_is_404(client, make_animal):
    hidden = await make_animal("Tobi", state=AnimalState.HAS_OWNER)
    res = await client.get(f"/api/v1/animals/{hidden.id}")
    assert res.status_code == 404


async def test_details_unknown_animal_is_404(client):
    res = await client.get(f"/api/v1/animals/{uuid4()}")
    assert res.status_code == 404


# --- Create / edit -------------------------------------------------------------

async def test_admin_creates_animal(client, auth, admin, breed, shelter):
    res = await client.post("/api/v1/animals", json=_payload(breed), headers=auth(admin))

    assert res.status_code == 201
    body = res.json()
    assert body["animal_state"] == "Available"
    assert body["shelter_id"] == str(shelter.id)
    assert body["cost"] == 35.5


async def test_regular_user_cannot_create(client, auth, user, breed):
    res = await client.post("/api/v1/animals", json=_payload(breed), headers=auth(user))
    assert res.status_code == 403


async def test_create_without_identity_is_401(client, breed):
    res = await client.post("/api/v1/animals", json=_payload(breed))
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHENTICATED"


async def test_create_with_malformed_identity_is_401(client, breed):
    res = await client.post(
        "/api/v1/animals", json=_payload(breed), headers={"X-User-Id": "not-a-uuid"},
    )
    assert res.status_code == 401


async def test_create_with_unknown_breed_is_404(client, auth, admin, breed):
    res = await client.post(
        "/api/v1/animals", json=_payload(breed, breed_id=str(uuid4())), headers=auth(admin),
    )
    assert res.status_code == 404


async def test_create_invalid_payload_is_400(client, auth, admin, breed):
    res = await client.post(
        "/api/v1/animals", json=_payload(breed, cost=2000), headers=auth(admin),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_admin_edits_animal(client, auth, admin, animal, breed):
    res = await client.put(
        f"/api/v1/animals/{animal.id}",
        json=_payload(breed, name="Rex II"),
        headers=auth(admin),
    )
    assert res.status_code == 200
    assert res.json()["name"] == "Rex II"


async def test_admin_of_other_shelter_cannot_edit(client, auth, foreign_admin, animal, breed):
    res = await client.put(
        f"/api/v1/animals/{animal.id}", json=_payload(breed), headers=auth(foreign_admin),
    )
    assert res.status_code == 404


# --- Deactivate / delete ---------------------------------------------------------

async def test_deactivate_hides_animal_and_its_favorites(
    client, auth, admin, user, animal, test_db,
):
    test_db.add(Favorite(user_id=user.id, animal_id=animal.id))
    await test_db.commit()

    res = await client.patch(f"/api/v1/animals/{animal.id}/deactivate", headers=auth(admin))

    assert res.status_code == 200
    assert res.json()["animal_state"] == "Inactive"
    assert (await client.get(f"/api/v1/animals/{animal.id}")).status_code == 404
    favorites = await client.get("/api/v1/favorites", headers=auth(user))
    assert favorites.json()["total_count"] == 0


async def test_deactivate_fostered_animal_rejected(client, auth, admin, make_animal):
    fostered = await make_animal("Bolt", state=AnimalState.PARTIALLY_FOSTERED)
    res = await client.patch(f"/api/v1/animals/{fostered.id}/deactivate", headers=auth(admin))
    assert res.status_code == 400


async def test_delete_available_animal(client, auth, admin, user, animal, test_db):
    test_db.add(Favorite(user_id=user.id, animal_id=animal.id))
    await test_db.commit()

    res = await client.delete(f"/api/v1/animals/{animal.id}", headers=auth(admin))

    assert res.status_code == 204
    assert (await client.get(f"/api/v1/animals/{animal.id}")).status_code == 404


async def test_delete_non_available_animal_rejected(client, auth, admin, make_animal):
    owned = await make_animal("Tobi", state=AnimalState.HAS_OWNER)
    res = await client.delete(f"/api/v1/animals/{owned.id}", headers=auth(admin))
    assert res.status_code == 400


async def test_regular_user_cannot_delete(client, auth, user, animal):
    res = await client.delete(f"/api/v1/animals/{animal.id}", headers=auth(user))
    assert res.status_code == 403


# --- Shelter listing ---------------------------------------------------------------

async def test_shelter_animals(client, make_animal, shelter, other_shelter):
    await make_animal("Rex")
    await make_animal("Zed", state=AnimalState.INACTIVE)
    await make_animal("Nemo", shelter_id=other_shelter.id)

    res = await client.get(f"/api/v1/shelters/{shelter.id}/animals")

    assert [a["name"] for a in res.json()["items"]] == ["Rex"]


async def test_shelter_without_visible_animals_is_404(client, shelter):
    res = await client.get(f"/api/v1/shelters/{shelter.id}/animals")
    assert res.status_code == 404


async def test_unknown_shelter_is_404(client):
    res = await client.get(f"/api/v1/shelters/{uuid4()}/animals")
    assert res.status_code == 404
