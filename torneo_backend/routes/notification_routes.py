# notification_routes.py
from fastapi import APIRouter, Depends

from torneo_backend.models.requests import NotificationCreate
from torneo_backend.models.user_model import User
from torneo_backend.routes.deps import get_current_user, get_state
from torneo_backend.routes.payloads import notification_payload
from torneo_backend.services.state_controller import TournamentState

router = APIRouter()


@router.get("/")
def my_notifications(user: User = Depends(get_current_user), state: TournamentState = Depends(get_state)):
    """Own and broadcast notifications, newest first."""
    notifications = state.notifications_for(user)
    return {
        "unread": sum(1 for n in notifications if not n.read),
        "notifications": [notification_payload(n) for n in notifications],
    }


@router.post("/")
def post_notification(
    data: NotificationCreate,
    user: User = Depends(get_current_user),
    state: TournamentState = Depends(get_state),
):
    notification = state.post_notification(user, data.user_id, data.title, data.message, data.type)
    return {"message": "Notification sent", "notification": notification_payload(notification)}


@router.post("/{notification_id}/read")
def mark_read(notification_id: str, user: User = Depends(get_current_user), state: TournamentState = Depends(get_state)):
    notification = state.mark_notification_read(user, notification_id)
    return notification_payload(notification)


@router.post("/permission")
def grant_popups(user: User = Depends(get_current_user), state: TournamentState = Depends(get_state)):
    """Records that this user allows system popups."""
    state.popups.grant(user.id)
    return {"granted": state.popups.is_granted(user.id)}
