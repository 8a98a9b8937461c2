"""Activity completion sweep — finished Active activities become Completed.

Invariants:
    - Only Active activities whose end_date has passed are completed
    - Cancelled activities are never touched
    - The scheduler is disabled with a non-positive interval and survives failing sweeps
    - Reminders go once to the user and the shelter admins for activities starting
      or ending 24h from now; everything else is left alone
"""

import asyncio
from datetime import timedelta

from sqlalchemy import select

from seepaw.config import Settings
from seepaw.core.domain_types import ActivityStatus, ActivityType, NotificationType
from seepaw.db.types import utc_now
from seepaw.infrastructure.activity_completion import ActivityCompletionScheduler
from seepaw.models import Activity, Notification


def _activity(animal, user, start, status=ActivityStatus.ACTIVE):
    return Activity(
        animal_id=animal.id,
        user_id=user.id,
        type=ActivityType.OWNERSHIP,
        status=status,
        start_date=start,
        end_date=start + timedelta(hours=1),
    )


async def _status_of(db, activity_id):
    result = await db.execute(
        select(Activity.status).where(Activity.id == activity_id),
    )
    return result.scalar_one()


async def test_run_once_completes_only_finished_activities(
    test_db, test_session_factory, animal, user,
):
    now = utc_now()
    finished = _activity(animal, user, now - timedelta(hours=3))
    cancelled = _activity(animal, user, now - timedelta(hours=6), ActivityStatus.CANCELLED)
    upcoming = _activity(animal, user, now + timedelta(days=2))
    test_db.add_all([finished, cancelled, upcoming])
    await test_db.commit()

    scheduler = ActivityCompletionScheduler(test_session_factory, Settings(), interval_seconds=0)
    completed = await scheduler.run_once()

    assert completed == 1
    assert await _status_of(test_db, finished.id) == ActivityStatus.COMPLETED
    assert await _status_of(test_db, cancelled.id) == ActivityStatus.CANCELLED
    assert await _status_of(test_db, upcoming.id) == ActivityStatus.ACTIVE


async def test_run_once_with_nothing_to_do(test_session_factory):
    scheduler = ActivityCompletionScheduler(test_session_factory, Settings(), interval_seconds=0)
    assert await scheduler.run_once() == 0


async def test_disabled_scheduler_does_not_start(test_session_factory):
    scheduler = ActivityCompletionScheduler(test_session_factory, Settings(), interval_seconds=0)
    scheduler.start()
    assert not scheduler.running
    await scheduler.stop()


async def test_start_and_stop(test_session_factory):
    scheduler = ActivityCompletionScheduler(
        test_session_factory, Settings(), interval_seconds=3600,
    )
    scheduler.start()
    assert scheduler.running
    await scheduler.stop()
    assert not scheduler.running


async def test_failing_sweep_does_not_kill_the_loop():
    calls = []

    def broken_factory():
        calls.append(1)
        raise RuntimeError("database down")

    scheduler = ActivityCompletionScheduler(broken_factory, Settings(), interval_seconds=0.01)
    scheduler.start()
    await asyncio.sleep(0.1)

    assert scheduler.running
    assert len(calls) >= 2
    await scheduler.stop()


# ─── Reminders ───────────────────────────────────────────────────

async def _notifications_for(db, activity_id):
    result = await db.execute(
        select(Notification.user_id, Notification.type, Notification.message)
        .where(Notification.activity_id == activity_id),
    )
    return result.all()


async def test_reminder_for_start_goes_to_user_and_admins(
    test_db, test_session_factory, animal, user, admin,
):
    soon = _activity(animal, user, utc_now() + timedelta(hours=24, minutes=30))
    test_db.add(soon)
    await test_db.commit()

    scheduler = ActivityCompletionScheduler(test_session_factory, Settings(), interval_seconds=0)
    await scheduler.run_once()

    rows = await _notifications_for(test_db, soon.id)
    by_user = {user_id: (type_, message) for user_id, type_, message in rows}
    assert len(rows) == 2
    assert by_user[user.id][0] == NotificationType.ACTIVITY_START_REMINDER
    assert by_user[user.id][1].startswith("Reminder: your adoption pick-up with Rex starts at")
    assert by_user[admin.id][0] == NotificationType.SHELTER_ACTIVITY_START_REMINDER


async def test_reminder_for_end_inside_window(
    test_db, test_session_factory, animal, user, admin,
):
    ending = _activity(animal, user, utc_now() + timedelta(hours=23, minutes=20))
    test_db.add(ending)
    await test_db.commit()

    scheduler = ActivityCompletionScheduler(test_session_factory, Settings(), interval_seconds=0)
    await scheduler.run_once()

    types = {type_ for _, type_, _ in await _notifications_for(test_db, ending.id)}
    assert types == {
        NotificationType.ACTIVITY_END_REMINDER,
        NotificationType.SHELTER_ACTIVITY_END_REMINDER,
    }


async def test_reminders_are_sent_once(
    test_db, test_session_factory, animal, user, admin,
):
    soon = _activity(animal, user, utc_now() + timedelta(hours=24, minutes=30))
    test_db.add(soon)
    await test_db.commit()

    scheduler = ActivityCompletionScheduler(test_session_factory, Settings(), interval_seconds=0)
    await scheduler.run_once()
    await scheduler.run_once()

    assert len(await _notifications_for(test_db, soon.id)) == 2


async def test_no_reminder_outside_window_or_when_cancelled(
    test_db, test_session_factory, animal, user, admin,
):
    now = utc_now()
    later = _activity(animal, user, now + timedelta(days=3))
    cancelled = _activity(
        animal, user, now + timedelta(hours=24, minutes=30), ActivityStatus.CANCELLED,
    )
    test_db.add_all([later, cancelled])
    await test_db.commit()

    scheduler = ActivityCompletionScheduler(test_session_factory, Settings(), interval_seconds=0)
    await scheduler.run_once()

    result = await test_db.execute(select(Notification.id))
    assert result.all() == []
