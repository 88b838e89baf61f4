from typing import List

from fastapi import APIRouter, Depends

from kurstakip.dependencies import get_workspace
from kurstakip.schemas.notification import NotificationOut
from kurstakip.stores.workspace import Workspace

router = APIRouter(prefix="/inbox", tags=["Inbox"])


@router.get("/", response_model=List[NotificationOut])
def list_notifications(unread: bool = False, ws: Workspace = Depends(get_workspace)):
    """The caller's own notifications within their institution."""
    if unread:
        return ws.notifications.unread()
    return ws.notifications.notifications


@router.get("/unread-count")
def unread_count(ws: Workspace = Depends(get_workspace)):
    return {"count": ws.notifications.unread_count}


@router.post("/{notification_id}/read", response_model=NotificationOut)
def mark_as_read(notification_id: str, ws: Workspace = Depends(get_workspace)):
    ws.notifications.mark_as_read(notification_id)
    return ws.notifications.get(notification_id)


@router.post("/read-all")
def mark_all_as_read(ws: Workspace = Depends(get_workspace)):
    return {"success": True, "updated": ws.notifications.mark_all_as_read()}


@router.post("/check-expiring")
def check_expiring(ws: Workspace = Depends(get_workspace)):
    """Creates an expiry reminder for every enrollment ending within the threshold."""
    created = ws.notify_expiring(ws.user_id)
    return {"success": True, "created": created}
