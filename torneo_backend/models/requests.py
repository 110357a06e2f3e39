# requests.py
# Pydantic request schemas (API input) and the tagged user update requests.

from datetime import date as date_type, datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from torneo_backend.core.config import BROADCAST
from torneo_backend.core.roles import Role
from torneo_backend.models.match_model import MatchStats
from torneo_backend.models.notification_model import NotificationType
from torneo_backend.models.team_model import Category


class RegisterRequest(BaseModel):
    """Request model for registering a new user."""
    email: str
    password: str = Field(min_length=6)
    name: str


class LoginRequest(BaseModel):
    """Request model for logging in an existing user."""
    email: str
    password: str


class TeamCreate(BaseModel):
    name: str = Field(min_length=1)
    category: Category
    logo_color: str = "bg-blue-600"


class RoundCreate(BaseModel):
    name: str = Field(min_length=1)
    date: Optional[date_type] = None


class MatchCreate(BaseModel):
    round_id: str
    category: Category
    date: datetime
    home_team_id: str
    away_team_id: str


class MatchResultUpdate(MatchStats):
    """MatchStats as sent by the score editor; `summary` is accepted and discarded."""
    summary: Optional[str] = None

    def to_stats(self) -> MatchStats:
        return MatchStats.model_validate(self.model_dump(exclude={"summary"}))


class GoalAdjustment(BaseModel):
    """One step of live score entry: +1 adds a goal, -1 takes one back."""
    player_id: str
    delta: int = 1


class PlayerCreate(BaseModel):
    name: str = Field(min_length=1)
    number: int = Field(ge=0)
    team_id: str


class NotificationCreate(BaseModel):
    user_id: str = BROADCAST
    title: str
    message: str
    type: NotificationType = NotificationType.INFO


# -------------------------------
# Tagged user update requests
# -------------------------------
class ChangeRole(BaseModel):
    """Change only the role; the team assignment is left untouched."""
    kind: Literal["change_role"] = "change_role"
    role: Role


class AssignTeam(BaseModel):
    """Set the role together with the team it applies to (captains, players)."""
    kind: Literal["assign_team"] = "assign_team"
    role: Role
    team_id: Optional[str] = None


UserUpdateRequest = Annotated[Union[ChangeRole, AssignTeam], Field(discriminator="kind")]
