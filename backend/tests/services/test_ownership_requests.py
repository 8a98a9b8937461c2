"""Ownership workflow — request, analysis, approval and rejection.

Invariants:
    - Pending → Analysing → Approved | Rejected; Rejected may be re-analysed or approved
    - Approval makes the requester the owner, cancels fosterings, auto-rejects
      competing open requests, and notifies everyone affected
    - Admins only act on requests for animals of their own shelter
    - Requesters see open requests and recent rejections, never approved ones
    - Open requests are listed before rejections; rejections older than 30 days drop out
"""

from datetime import datetime, time, timedelta
from uuid import UUID

import pytest
from sqlalchemy import select, update

from seepaw.core.domain_types import ActivityStatus, SlotStatus
from seepaw.core.enforce_ownership import AUTO_REJECT_MESSAGE
from seepaw.db.types import utc_now
from seepaw.models import Activity, ActivitySlot, OwnershipRequest, User


async def _request(client, auth, user, animal, info=None):
    res = await client.post(
        "/api/v1/ownership-requests",
        json={"animal_id": str(animal.id), "request_info": info},
        headers=auth(user),
    )
    assert res.status_code == 201, res.text
    return res.json()


async def _analyse(client, auth, admin, request_id):
    res = await client.put(
        f"/api/v1/ownership-requests/{request_id}/analysing", headers=auth(admin),
    )
    assert res.status_code == 200, res.text
    return res.json()


async def _notification_types(client, auth, user):
    res = await client.get("/api/v1/notifications", headers=auth(user))
    return [n["type"] for n in res.json()["items"]]


@pytest.fixture
async def foreign_admin(test_db, other_shelter):
    admin = User(name="Diogo", email="diogo@other.test", shelter_id=other_shelter.id)
    test_db.add(admin)
    await test_db.commit()
    return admin


# --- Creation ----------------------------------------------------------------

async def test_create_request_notifies_shelter_admins(client, auth, admin, user, animal):
    body = await _request(client, auth, user, animal, info="Big garden")

    assert body["status"] == "Pending"
    assert body["amount"] == 50.0
    assert body["user_name"] == "Bruno"
    assert await _notification_types(client, auth, admin) == ["NewOwnershipRequest"]


async def test_duplicate_request_rejected(client, auth, admin, user, animal):
    await _request(client, auth, user, animal)
    res = await client.post(
        "/api/v1/ownership-requests", json={"animal_id": str(animal.id)}, headers=auth(user),
    )
    assert res.status_code == 400


async def test_request_for_unknown_animal_is_404(client, auth, user):
    res = await client.post(
        "/api/v1/ownership-requests",
        json={"animal_id": "00000000-0000-0000-0000-000000000000"},
        headers=auth(user),
    )
    assert res.status_code == 404


# --- Analysing -----------------------------------------------------------------

async def test_analysing_notifies_requester(client, auth, admin, user, animal):
    created = await _request(client, auth, user, animal)

    body = await _analyse(client, auth, admin, created["id"])

    assert body["status"] == "Analysing"
    assert await _notification_types(client, auth, user) == ["OwnershipRequestAnalysing"]


async def test_analysing_twice_rejected(client, auth, admin, user, animal):
    created = await _request(client, auth, user, animal)
    await _analyse(client, auth, admin, created["id"])

    res = await client.put(
        f"/api/v1/ownership-requests/{created['id']}/analysing", headers=auth(admin),
    )
    assert res.status_code == 400


async def test_regular_user_cannot_analyse(client, auth, admin, user, animal):
    created = await _request(client, auth, user, animal)
    res = await client.put(
        f"/api/v1/ownership-requests/{created['id']}/analysing", headers=auth(user),
    )
    assert res.status_code == 403


async def test_admin_of_other_shelter_forbidden(
    client, auth, admin, foreign_admin, user, animal,
):
    created = await _request(client, auth, user, animal)
    res = await client.put(
        f"/api/v1/ownership-requests/{created['id']}/analysing", headers=auth(foreign_admin),
    )
    assert res.status_code == 403


# --- Approval --------------------------------------------------------------------

async def test_approve_pending_request_rejected(client, auth, admin, user, animal):
    created = await _request(client, auth, user, animal)
    res = await client.put(
        f"/api/v1/ownership-requests/{created['id']}/approve", headers=auth(admin),
    )
    assert res.status_code == 400


async def test_approval_transfers_ownership(client, auth, admin, user, animal):
    created = await _request(client, auth, user, animal)
    await _analyse(client, auth, admin, created["id"])

    res = await client.put(
        f"/api/v1/ownership-requests/{created['id']}/approve", headers=auth(admin),
    )

    assert res.status_code == 200
    assert res.json()["status"] == "Approved"
    assert res.json()["approved_at"] is not None
    owned = (await client.get("/api/v1/ownerships/owned-animals", headers=auth(user))).json()
    assert [a["id"] for a in owned] == [str(animal.id)]
    assert owned[0]["animal_state"] == "HasOwner"
    assert (await client.get(f"/api/v1/animals/{animal.id}")).status_code == 404
    requests = (await client.get("/api/v1/ownerships/requests", headers=auth(user))).json()
    assert requests == []


async def test_approval_rejects_competing_requests_and_ends_fosterings(
    client, auth, admin, user, other_user, animal,
):
    fostering = await client.post(
        "/api/v1/fosterings",
        json={"animal_id": str(animal.id), "month_value": 20},
        headers=auth(other_user),
    )
    assert fostering.status_code == 201
    winner = await _request(client, auth, user, animal)
    loser = await _request(client, auth, other_user, animal)
    await _analyse(client, auth, admin, winner["id"])

    res = await client.put(
        f"/api/v1/ownership-requests/{winner['id']}/approve", headers=auth(admin),
    )

    assert res.status_code == 200
    others = (await client.get("/api/v1/ownerships/requests", headers=auth(other_user))).json()
    assert [(r["id"], r["status"]) for r in others] == [(loser["id"], "Rejected")]
    assert others[0]["request_info"] == AUTO_REJECT_MESSAGE
    fosterings = await client.get("/api/v1/fosterings", headers=auth(other_user))
    assert fosterings.status_code == 404
    types = await _notification_types(client, auth, other_user)
    assert "FosteredAnimalAdopted" in types
    assert "OwnershipRequestRejected" in types
    assert "OwnershipRequestApproved" in await _notification_types(client, auth, user)


async def test_second_approval_rejected(client, auth, admin, user, other_user, animal):
    first = await _request(client, auth, user, animal)
    second = await _request(client, auth, other_user, animal)
    await _analyse(client, auth, admin, first["id"])
    await _analyse(client, auth, admin, second["id"])
    await client.put(f"/api/v1/ownership-requests/{first['id']}/approve", headers=auth(admin))

    res = await client.put(
        f"/api/v1/ownership-requests/{second['id']}/approve", headers=auth(admin),
    )
    assert res.status_code == 400


# --- Rejection ---------------------------------------------------------------------

async def test_reject_with_reason_and_reanalyse(client, auth, admin, user, animal):
    created = await _request(client, auth, user, animal)
    await _analyse(client, auth, admin, created["id"])

    res = await client.put(
        f"/api/v1/ownership-requests/{created['id']}/reject",
        json={"reason": "Not enough space"},
        headers=auth(admin),
    )

    assert res.status_code == 200
    assert res.json()["status"] == "Rejected"
    assert res.json()["request_info"] == "Not enough space"
    mine = (await client.get("/api/v1/ownerships/requests", headers=auth(user))).json()
    assert [r["status"] for r in mine] == ["Rejected"]
    again = await _analyse(client, auth, admin, created["id"])
    assert again["status"] == "Analysing"


async def test_reject_without_body(client, auth, admin, user, animal):
    created = await _request(client, auth, user, animal)
    await _analyse(client, auth, admin, created["id"])
    res = await client.put(
        f"/api/v1/ownership-requests/{created['id']}/reject", headers=auth(admin),
    )
    assert res.status_code == 200


async def test_reject_pending_request_rejected(client, auth, admin, user, animal):
    created = await _request(client, auth, user, animal)
    res = await client.put(
        f"/api/v1/ownership-requests/{created['id']}/reject", headers=auth(admin),
    )
    assert res.status_code == 400


# --- Listings and eligibility ------------------------------------------------------------

async def test_shelter_request_list(client, auth, admin, user, other_user, animal):
    await _request(client, auth, user, animal)
    await _request(client, auth, other_user, animal)

    res = await client.get("/api/v1/ownership-requests", headers=auth(admin))

    assert res.status_code == 200
    assert res.json()["total_count"] == 2


async def test_shelter_request_list_requires_admin(client, auth, user):
    res = await client.get("/api/v1/ownership-requests", headers=auth(user))
    assert res.status_code == 403


async def test_eligibility(client, auth, user, animal):
    res = await client.get(f"/api/v1/animals/{animal.id}/eligibility", headers=auth(user))
    assert res.status_code == 200
    assert res.json()["eligible"] is True


async def test_fostered_animal_not_eligible(client, auth, user, other_user, animal):
    await client.post(
        "/api/v1/fosterings",
        json={"animal_id": str(animal.id), "month_value": 20},
        headers=auth(other_user),
    )
    res = await client.get(f"/api/v1/animals/{animal.id}/eligibility", headers=auth(user))
    assert res.status_code == 400


async def _reject(client, auth, admin, request_id):
    res = await client.put(
        f"/api/v1/ownership-requests/{request_id}/reject", headers=auth(admin),
    )
    assert res.status_code == 200, res.text
    return res.json()


async def test_old_rejections_drop_out_of_user_list(
    client, auth, admin, user, make_animal, test_db,
):
    old = await _request(client, auth, user, await make_animal(name="Bolt"))
    recent = await _request(client, auth, user, await make_animal(name="Luna"))
    for created in (old, recent):
        await _analyse(client, auth, admin, created["id"])
        await _reject(client, auth, admin, created["id"])
    await test_db.execute(
        update(OwnershipRequest)
        .where(OwnershipRequest.id == UUID(old["id"]))
        .values(updated_at=utc_now() - timedelta(days=31)),
    )
    await test_db.commit()

    mine = (await client.get("/api/v1/ownerships/requests", headers=auth(user))).json()

    assert [r["id"] for r in mine] == [recent["id"]]


async def test_open_requests_listed_before_newer_rejections(
    client, auth, admin, user, make_animal,
):
    pending = await _request(client, auth, user, await make_animal(name="Bolt"))
    rejected = await _request(client, auth, user, await make_animal(name="Luna"))
    await _analyse(client, auth, admin, rejected["id"])
    await _reject(client, auth, admin, rejected["id"])

    mine = (await client.get("/api/v1/ownerships/requests", headers=auth(user))).json()

    assert [(r["id"], r["status"]) for r in mine] == [
        (pending["id"], "Pending"),
        (rejected["id"], "Rejected"),
    ]


async def test_approval_cancels_future_fostering_visits(
    client, auth, admin, user, other_user, animal, test_db,
):
    await client.post(
        "/api/v1/fosterings",
        json={"animal_id": str(animal.id), "month_value": 20},
        headers=auth(other_user),
    )
    visit_day = utc_now().date() + timedelta(days=3)
    visit = await client.post(
        "/api/v1/activities/fostering",
        json={
            "animal_id": str(animal.id),
            "start_date": datetime.combine(visit_day, time(10)).isoformat(),
            "end_date": datetime.combine(visit_day, time(11)).isoformat(),
        },
        headers=auth(other_user),
    )
    assert visit.status_code == 201
    created = await _request(client, auth, user, animal)
    await _analyse(client, auth, admin, created["id"])

    res = await client.put(
        f"/api/v1/ownership-requests/{created['id']}/approve", headers=auth(admin),
    )

    assert res.status_code == 200
    activity_id = UUID(visit.json()["id"])
    status = await test_db.scalar(select(Activity.status).where(Activity.id == activity_id))
    slot_status = await test_db.scalar(
        select(ActivitySlot.status).where(ActivitySlot.activity_id == activity_id),
    )
    assert status == ActivityStatus.CANCELLED
    assert slot_status == SlotStatus.AVAILABLE
