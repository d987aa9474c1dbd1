### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Notifications Router -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Notification inbox of the signed-in user
"""

from fastapi import APIRouter, Depends, Query

from cmis_api.dependencies import get_notification_dispatcher
from cmis_api.middleware import CurrentUser, get_current_user
from cmis_api.schemas.notifications import NotificationResponse
from cmis_api.schemas.responses import APIResponse
from cmis_api.services import NotificationDispatcher

router = APIRouter()


@router.get(
    "",
    response_model=APIResponse[list[NotificationResponse]],
    summary="List notifications",
    description="Newest-first notifications for the signed-in user",
)
async def list_notifications(
    user: CurrentUser = Depends(get_current_user),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    unread_only: bool = Query(False, description="Only unread notifications"),
    limit: int = Query(50, ge=1, le=200),
) -> APIResponse[list[NotificationResponse]]:
    notifications = await dispatcher.list_notifications(user.id, unread_only=unread_only, limit=limit)
    return APIResponse(success=True, data=[NotificationResponse.model_validate(n) for n in notifications])


@router.post(
    "/{notification_id}/read",
    response_model=APIResponse[NotificationResponse],
    summary="Mark notification read",
)
async def mark_notification_read(
    notification_id: str,
    user: CurrentUser = Depends(get_current_user),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> APIResponse[NotificationResponse]:
    notification = await dispatcher.mark_read(notification_id, user.id)
    return APIResponse(success=True, data=NotificationResponse.model_validate(notification))
