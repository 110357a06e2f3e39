# player_model.py
from sqlmodel import SQLModel, Field

from torneo_backend.models.team_model import new_id


class Player(SQLModel, table=True):
    """
    Roster entry for a team.
    `goals` is a cumulative counter refreshed from match scorer tallies,
    never incremented in place.
    """
    __tablename__ = "players"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    number: int = Field(ge=0)          # jersey number
    team_id: str = Field(index=True)   # owning team (may dangle after team deletion)
    goals: int = 0
