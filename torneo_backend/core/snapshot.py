# snapshot.py
# Read-only view of every collection at one point in time.

from dataclasses import dataclass
from typing import Optional, Tuple

from torneo_backend.models.match_model import Match
from torneo_backend.models.notification_model import Notification
from torneo_backend.models.player_model import Player
from torneo_backend.models.round_model import Round
from torneo_backend.models.team_model import Team
from torneo_backend.models.user_model import User

COLLECTIONS = ("teams", "rounds", "players", "matches", "users", "notifications")


def _find(items, item_id):
    if item_id is None:
        return None
    for item in items:
        if item.id == item_id:
            return item
    return None


@dataclass(frozen=True)
class TournamentSnapshot:
    """
    Latest pushed value of each collection.
    Lookups are find-or-None: collections are refreshed independently, so
    a reference may briefly point at something that is gone.
    """
    teams: Tuple[Team, ...] = ()
    rounds: Tuple[Round, ...] = ()
    players: Tuple[Player, ...] = ()
    matches: Tuple[Match, ...] = ()
    users: Tuple[User, ...] = ()
    notifications: Tuple[Notification, ...] = ()

    def team(self, team_id: Optional[str]) -> Optional[Team]:
        return _find(self.teams, team_id)

    def round(self, round_id: Optional[str]) -> Optional[Round]:
        return _find(self.rounds, round_id)

    def player(self, player_id: Optional[str]) -> Optional[Player]:
        return _find(self.players, player_id)

    def match(self, match_id: Optional[str]) -> Optional[Match]:
        return _find(self.matches, match_id)

    def user(self, user_id: Optional[str]) -> Optional[User]:
        return _find(self.users, user_id)
