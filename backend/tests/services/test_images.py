"""Galleries — animal and shelter images with a single principal image.

Invariants:
    - A batch may mark at most one image principal; it replaces the current principal
    - A gallery without a principal promotes the first new image
    - The principal image cannot be deleted
"""

import pytest

from seepaw.models import User


def _images(*principal_flags):
    return {"images": [
        {"url": f"https://img.test/{i}.jpg", "public_id": f"animals/{i}", "is_principal": flag}
        for i, flag in enumerate(principal_flags)
    ]}


async def _gallery(client, animal):
    return (await client.get(f"/api/v1/animals/{animal.id}/images")).json()


@pytest.fixture
async def foreign_admin(test_db, other_shelter):
    admin = User(name="Diogo", email="diogo@other.test", shelter_id=other_shelter.id)
    test_db.add(admin)
    await test_db.commit()
    return admin


async def test_add_images_keeps_existing_principal(client, auth, admin, animal):
    res = await client.post(
        f"/api/v1/animals/{animal.id}/images", json=_images(False, False), headers=auth(admin),
    )

    assert res.status_code == 201
    assert len(res.json()) == 2
    gallery = await _gallery(client, animal)
    assert [img["is_principal"] for img in gallery] == [True, False, False]
    assert gallery[0]["url"] == "https://img.test/rex.jpg"


async def test_batch_principal_replaces_current(client, auth, admin, animal):
    await client.post(
        f"/api/v1/animals/{animal.id}/images", json=_images(False, True), headers=auth(admin),
    )
    gallery = await _gallery(client, animal)
    principals = [img["url"] for img in gallery if img["is_principal"]]
    assert principals == ["https://img.test/1.jpg"]


async def test_first_image_becomes_principal_of_empty_gallery(
    client, auth, admin, make_animal,
):
    bare = await make_animal("Nina", with_image=False)
    await client.post(
        f"/api/v1/animals/{bare.id}/images", json=_images(False, False), headers=auth(admin),
    )
    gallery = await _gallery(client, bare)
    assert [img["url"] for img in gallery if img["is_principal"]] == ["https://img.test/0.jpg"]


async def test_two_principals_in_batch_rejected(client, auth, admin, animal):
    res = await client.post(
        f"/api/v1/animals/{animal.id}/images", json=_images(True, True), headers=auth(admin),
    )
    assert res.status_code == 400


async def test_other_shelter_admin_cannot_add(client, auth, foreign_admin, animal):
    res = await client.post(
        f"/api/v1/animals/{animal.id}/images", json=_images(False), headers=auth(foreign_admin),
    )
    assert res.status_code == 404


async def test_set_principal_and_delete_old_one(client, auth, admin, animal):
    added = (await client.post(
        f"/api/v1/animals/{animal.id}/images", json=_images(False), headers=auth(admin),
    )).json()
    old_principal = (await _gallery(client, animal))[0]

    blocked = await client.delete(
        f"/api/v1/animals/{animal.id}/images/{old_principal['id']}", headers=auth(admin),
    )
    promoted = await client.patch(
        f"/api/v1/animals/{animal.id}/images/{added[0]['id']}/principal", headers=auth(admin),
    )
    deleted = await client.delete(
        f"/api/v1/animals/{animal.id}/images/{old_principal['id']}", headers=auth(admin),
    )

    assert blocked.status_code == 400
    assert promoted.json()["is_principal"] is True
    assert deleted.status_code == 204
    assert [img["id"] for img in await _gallery(client, animal)] == [added[0]["id"]]


async def test_set_current_principal_again_rejected(client, auth, admin, animal):
    principal = (await _gallery(client, animal))[0]
    res = await client.patch(
        f"/api/v1/animals/{animal.id}/images/{principal['id']}/principal", headers=auth(admin),
    )
    assert res.status_code == 400


async def test_image_of_other_animal_forbidden(client, auth, admin, animal, make_animal):
    other = await make_animal("Bolt")
    other_image = (await _gallery(client, other))[0]
    res = await client.delete(
        f"/api/v1/animals/{animal.id}/images/{other_image['id']}", headers=auth(admin),
    )
    assert res.status_code == 403


async def test_shelter_images(client, auth, admin, shelter):
    res = await client.post(
        f"/api/v1/shelters/{shelter.id}/images", json=_images(False, False), headers=auth(admin),
    )

    assert res.status_code == 201
    details = (await client.get(f"/api/v1/shelters/{shelter.id}")).json()
    assert sorted(img["is_principal"] for img in details["images"]) == [False, True]


async def test_shelter_images_require_own_shelter(client, auth, admin, other_shelter):
    res = await client.post(
        f"/api/v1/shelters/{other_shelter.id}/images", json=_images(False), headers=auth(admin),
    )
    assert res.status_code == 403
