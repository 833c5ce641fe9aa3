"""Notification router - Recipient inbox and realtime subscription"""

import asyncio
import logging

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session

from ...auth import get_current_profile, resolve_token
from ...database import get_db
from ...models import Profile
from ...realtime import hub
from .schemas import NotificationListResponse, NotificationResponse
from .service import NotificationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    """Dependency injection for NotificationService"""
    return NotificationService(db)


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    current_profile: Profile = Depends(get_current_profile),
    service: NotificationService = Depends(get_notification_service),
):
    """Latest notifications for the current user with the unread count"""
    return service.list_for_user(current_profile)


@router.post("/read-all")
async def mark_all_notifications_read(
    current_profile: Profile = Depends(get_current_profile),
    service: NotificationService = Depends(get_notification_service),
):
    return service.mark_all_read(current_profile)


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(
    notification_id: str,
    current_profile: Profile = Depends(get_current_profile),
    service: NotificationService = Depends(get_notification_service),
):
    """Mark one of the current user's notifications as read"""
    return service.mark_read(notification_id, current_profile)


@router.websocket("/ws")
async def notifications_websocket(
    websocket: WebSocket,
    token: str = Query(...),
    db: Session = Depends(get_db),
):
    """Push each new notification for the token's profile as JSON"""
    profile = resolve_token(token, db)
    if not profile:
        logger.warning("⚠️ Realtime subscription rejected: invalid token")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    user_id = profile.id
    # The subscription only needs the id; release the connection for its lifetime
    db.close()

    # Subscribe before accepting so nothing published after the handshake is missed
    queue = hub.subscribe(user_id)
    try:
        await websocket.accept()
    except Exception:
        hub.unsubscribe(user_id, queue)
        raise

    async def push():
        while True:
            payload = await queue.get()
            await websocket.send_json(payload)

    async def drain():
        # Client messages are ignored; this only notices the disconnect
        while True:
            await websocket.receive_text()

    tasks = [asyncio.create_task(push()), asyncio.create_task(drain())]
    try:
        done, _pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            error = task.exception()
            if error and not isinstance(error, WebSocketDisconnect):
                logger.error(f"❌ Realtime push failed for {user_id}: {error}")
    finally:
        for task in tasks:
            task.cancel()
        hub.unsubscribe(user_id, queue)
        logger.info(f"ℹ️ Realtime client disconnected for {user_id}")
