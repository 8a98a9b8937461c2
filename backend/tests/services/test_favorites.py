"""Favorites — bookmarking visible animals, soft-deactivation and reactivation."""

from seepaw.core.domain_types import AnimalState


async def test_add_and_list_favorite(client, auth, user, animal):
    res = await client.post(f"/api/v1/favorites/{animal.id}", headers=auth(user))

    assert res.status_code == 201
    assert res.json()["name"] == "Rex"
    listed = await client.get("/api/v1/favorites", headers=auth(user))
    assert [f["id"] for f in listed.json()["items"]] == [str(animal.id)]


async def test_add_twice_is_conflict(client, auth, user, animal):
    await client.post(f"/api/v1/favorites/{animal.id}", headers=auth(user))
    res = await client.post(f"/api/v1/favorites/{animal.id}", headers=auth(user))
    assert res.status_code == 409


async def test_hidden_animal_cannot_be_favorited(client, auth, user, make_animal):
    owned = await make_animal("Tobi", state=AnimalState.HAS_OWNER)
    res = await client.post(f"/api/v1/favorites/{owned.id}", headers=auth(user))
    assert res.status_code == 409


async def test_deactivate_and_reactivate(client, auth, user, animal):
    await client.post(f"/api/v1/favorites/{animal.id}", headers=auth(user))

    off = await client.patch(f"/api/v1/favorites/{animal.id}/deactivate", headers=auth(user))
    listed = await client.get("/api/v1/favorites", headers=auth(user))
    again = await client.post(f"/api/v1/favorites/{animal.id}", headers=auth(user))

    assert off.status_code == 200
    assert listed.json()["total_count"] == 0
    assert again.status_code == 201


async def test_deactivate_missing_favorite_is_404(client, auth, user, animal):
    res = await client.patch(f"/api/v1/favorites/{animal.id}/deactivate", headers=auth(user))
    assert res.status_code == 404


async def test_favorites_are_per_user(client, auth, user, other_user, animal):
    await client.post(f"/api/v1/favorites/{animal.id}", headers=auth(user))
    listed = await client.get("/api/v1/favorites", headers=auth(other_user))
    assert listed.json()["total_count"] == 0
