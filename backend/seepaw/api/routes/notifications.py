"""Notification Routes — the caller's inbox."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from seepaw.api.deps import get_caller, get_mediator
from seepaw.api.result_mapping import unwrap, unwrap_page
from seepaw.core.domain_types import Caller
from seepaw.schemas.common import PagedResponse
from seepaw.schemas.notification import NotificationResponse
from seepaw.services import messages as m
from seepaw.services.mediator import Mediator

router = APIRouter(prefix="/api/v1/notifications", tags=["notifications"])


@router.get("", response_model=PagedResponse[NotificationResponse])
async def list_notifications(
    page: int = Query(1),
    size: int = Query(10),
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap_page(await mediator.send(
        m.ListNotifications(caller, page=page, size=size),
    ))


@router.get("/unread", response_model=list[NotificationResponse])
async def list_unread(
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.ListUnreadNotifications(caller)))


@router.put("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: UUID,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(m.MarkNotificationRead(caller, notification_id)))


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: UUID,
    caller: Caller = Depends(get_caller),
    mediator: Mediator = Depends(get_mediator),
):
    unwrap(await mediator.send(m.DeleteNotification(caller, notification_id)))
