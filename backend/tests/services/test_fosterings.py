"""Fosterings — monthly sponsorship and the animal state it drives.

Invariants:
    - Active total < cost → PartiallyFostered; == cost → TotallyFostered; 0 → Available
    - A new fostering that would push the total above the cost is 422
    - One active fostering per user and animal (409)
    - Cancelling recomputes the animal state
"""

from seepaw.core.domain_types import AnimalState


async def _foster(client, auth, user, animal, value):
    return await client.post(
        "/api/v1/fosterings",
        json={"animal_id": str(animal.id), "month_value": value},
        headers=auth(user),
    )


async def test_partial_then_total_fostering(client, auth, user, other_user, animal):
    first = await _foster(client, auth, user, animal, 20)
    second = await _foster(client, auth, other_user, animal, 30)

    assert first.status_code == 201
    assert first.json()["animal_state"] == "PartiallyFostered"
    assert second.json()["animal_state"] == "TotallyFostered"
    assert (await client.get(f"/api/v1/animals/{animal.id}")).status_code == 404


async def test_total_above_cost_is_unprocessable(client, auth, user, other_user, animal):
    await _foster(client, auth, user, animal, 40)
    res = await _foster(client, auth, other_user, animal, 20)
    assert res.status_code == 422
    assert res.json()["error"]["message"] == "Monthly value surpasses animal costs"


async def test_second_fostering_by_same_user_is_conflict(client, auth, user, animal):
    await _foster(client, auth, user, animal, 20)
    res = await _foster(client, auth, user, animal, 10)
    assert res.status_code == 409


async def test_value_below_minimum_rejected(client, auth, user, animal):
    res = await _foster(client, auth, user, animal, 5)
    assert res.status_code == 400


async def test_non_positive_value_fails_validation(client, auth, user, animal):
    res = await _foster(client, auth, user, animal, 0)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_inactive_animal_cannot_be_fostered(client, auth, user, make_animal):
    inactive = await make_animal("Zed", state=AnimalState.INACTIVE)
    res = await _foster(client, auth, user, inactive, 20)
    assert res.status_code == 409


async def test_cancel_restores_available(client, auth, user, animal):
    created = (await _foster(client, auth, user, animal, 20)).json()

    res = await client.patch(f"/api/v1/fosterings/{created['id']}/cancel", headers=auth(user))

    assert res.status_code == 200
    assert res.json()["status"] == "Cancelled"
    assert res.json()["end_date"] is not None
    details = await client.get(f"/api/v1/animals/{animal.id}")
    assert details.json()["animal_state"] == "Available"


async def test_cancel_drops_total_to_partial(client, auth, user, other_user, animal):
    mine = (await _foster(client, auth, user, animal, 20)).json()
    await _foster(client, auth, other_user, animal, 30)

    res = await client.patch(f"/api/v1/fosterings/{mine['id']}/cancel", headers=auth(user))

    assert res.json()["animal_state"] == "PartiallyFostered"


async def test_cancel_someone_elses_fostering_is_404(client, auth, user, other_user, animal):
    created = (await _foster(client, auth, user, animal, 20)).json()
    res = await client.patch(
        f"/api/v1/fosterings/{created['id']}/cancel", headers=auth(other_user),
    )
    assert res.status_code == 404


async def test_list_active_fosterings(client, auth, user, animal):
    await _foster(client, auth, user, animal, 20)

    res = await client.get("/api/v1/fosterings", headers=auth(user))

    assert res.status_code == 200
    assert [f["amount"] for f in res.json()] == [20.0]


async def test_no_active_fosterings_is_404(client, auth, user):
    res = await client.get("/api/v1/fosterings", headers=auth(user))
    assert res.status_code == 404
