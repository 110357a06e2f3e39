# notifications.py
# System-level popups shown on top of the persisted Notification rows.

from collections import deque
from typing import Deque, Optional, Set, Tuple

from torneo_backend.core.config import BROADCAST, NOTIFICATION_POPUPS, POPUP_HISTORY
from torneo_backend.models.notification_model import Notification


class PopupSink:
    """
    Tracks which users granted popup permission and collects the popups
    shown to them. Permission is asked once per user and never revoked.
    """

    def __init__(self, enabled: bool = NOTIFICATION_POPUPS, history: int = POPUP_HISTORY):
        self.enabled = enabled
        self._granted: Set[str] = set()
        # Most recent popups only: (viewer_id, notification)
        self.delivered: Deque[Tuple[str, Notification]] = deque(maxlen=history)

    def grant(self, user_id: str) -> None:
        self._granted.add(user_id)

    def is_granted(self, user_id: str) -> bool:
        return self.enabled and user_id in self._granted

    def maybe_show(self, notification: Notification, viewer_id: Optional[str]) -> bool:
        """
        Shows a popup to the viewer if the notification is addressed to them
        (or to everyone) and they granted permission. Returns True if shown.
        """
        if viewer_id is None or not self.is_granted(viewer_id):
            return False
        if notification.user_id not in (BROADCAST, viewer_id):
            return False

        self.delivered.append((viewer_id, notification))
        print(f"🔔 [{viewer_id}] {notification.title}: {notification.message}")
        return True
