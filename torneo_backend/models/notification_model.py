# notification_model.py
from datetime import datetime
from enum import Enum
from sqlmodel import SQLModel, Field

from torneo_backend.core.clock import utc_now
from torneo_backend.models.team_model import new_id


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"


class Notification(SQLModel, table=True):
    """
    Append-only message to one user or to everyone (user_id == "all").
    Only `read` changes after creation.
    """
    __tablename__ = "notifications"

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    title: str
    message: str
    date: datetime = Field(default_factory=utc_now)
    read: bool = False
    type: NotificationType = NotificationType.INFO
