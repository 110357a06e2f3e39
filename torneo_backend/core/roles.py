# roles.py
# Role ordering and the single authorization check used by every mutation.

from enum import Enum
from typing import Optional, TYPE_CHECKING

from torneo_backend.core.errors import PermissionDeniedError

if TYPE_CHECKING:
    from torneo_backend.models.user_model import User


class Role(str, Enum):
    """
    Privilege levels, weakest first.
    Comparisons follow the declaration order: player < captain < manager < owner.
    """
    PLAYER = "player"
    CAPTAIN = "captain"
    MANAGER = "manager"
    OWNER = "owner"

    @property
    def rank(self) -> int:
        return _ROLE_ORDER.index(self)

    def __ge__(self, other):
        if not isinstance(other, Role):
            return NotImplemented
        return self.rank >= other.rank

    def __gt__(self, other):
        if not isinstance(other, Role):
            return NotImplemented
        return self.rank > other.rank

    def __le__(self, other):
        if not isinstance(other, Role):
            return NotImplemented
        return self.rank <= other.rank

    def __lt__(self, other):
        if not isinstance(other, Role):
            return NotImplemented
        return self.rank < other.rank


_ROLE_ORDER = [Role.PLAYER, Role.CAPTAIN, Role.MANAGER, Role.OWNER]


class Action(str, Enum):
    MANAGE_TEAMS = "manage_teams"
    MANAGE_ROUNDS = "manage_rounds"
    MANAGE_MATCHES = "manage_matches"
    RECORD_RESULT = "record_result"
    MANAGE_PLAYERS = "manage_players"
    MANAGE_USERS = "manage_users"
    SEND_NOTIFICATION = "send_notification"
    READ_NOTIFICATION = "read_notification"


# Minimum role required for each action
REQUIRED_ROLE = {
    Action.MANAGE_TEAMS: Role.MANAGER,
    Action.MANAGE_ROUNDS: Role.MANAGER,
    Action.MANAGE_MATCHES: Role.MANAGER,
    Action.RECORD_RESULT: Role.MANAGER,
    Action.MANAGE_PLAYERS: Role.CAPTAIN,
    Action.MANAGE_USERS: Role.OWNER,
    Action.SEND_NOTIFICATION: Role.MANAGER,
    Action.READ_NOTIFICATION: Role.PLAYER,
}


def can(user: Optional["User"], action: Action, team_id: Optional[str] = None) -> bool:
    """
    Returns True if the user may perform the action.
    Captains managing players are restricted to their own team; managers and
    owners may manage any roster.
    """
    if user is None:
        return False

    role = Role(user.role)
    if not role >= REQUIRED_ROLE[action]:
        return False

    if action == Action.MANAGE_PLAYERS and role == Role.CAPTAIN:
        return team_id is not None and user.team_id == team_id

    return True


def authorize(user: Optional["User"], action: Action, team_id: Optional[str] = None) -> None:
    """Raises PermissionDeniedError unless can() allows the action."""
    if not can(user, action, team_id):
        who = user.email if user is not None else "anonymous"
        raise PermissionDeniedError(f"{who} is not allowed to {action.value}")
