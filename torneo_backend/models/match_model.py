# match_model.py
# Defines the Match model (fixtures and results) and the embedded MatchStats value.

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field as PydanticField, field_validator
from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field

from torneo_backend.models.team_model import Category, new_id


class ScorerTally(BaseModel):
    """Goals scored by one player in one match."""
    player_id: str
    count: int = PydanticField(gt=0)


class MatchStats(BaseModel):
    """
    Result data embedded in a Match.
    Scores are entered manually; they are not checked against the scorer list.
    """
    home_score: int = PydanticField(default=0, ge=0)
    away_score: int = PydanticField(default=0, ge=0)
    scorers: List[ScorerTally] = PydanticField(default_factory=list)
    mvp_player_id: Optional[str] = None
    is_played: bool = False

    @field_validator("scorers")
    @classmethod
    def merge_duplicate_scorers(cls, scorers: List[ScorerTally]) -> List[ScorerTally]:
        # One entry per player, first-seen order kept
        merged = {}
        for tally in scorers:
            if tally.player_id in merged:
                merged[tally.player_id] += tally.count
            else:
                merged[tally.player_id] = tally.count
        return [ScorerTally(player_id=pid, count=count) for pid, count in merged.items()]

    @field_validator("mvp_player_id")
    @classmethod
    def blank_mvp_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    def adjust_goal(self, player_id: str, home_side: bool, delta: int) -> "MatchStats":
        """
        One step of live score entry: the player's tally moves by `delta`
        (dropped once it reaches zero) and so does their side's score,
        floored at zero.
        """
        scorers = []
        found = False
        for tally in self.scorers:
            if tally.player_id != player_id:
                scorers.append(tally)
                continue
            found = True
            if tally.count + delta > 0:
                scorers.append(ScorerTally(player_id=player_id, count=tally.count + delta))
        if not found and delta > 0:
            scorers.append(ScorerTally(player_id=player_id, count=delta))

        update = {"scorers": scorers}
        if home_side:
            update["home_score"] = max(0, self.home_score + delta)
        else:
            update["away_score"] = max(0, self.away_score + delta)
        return self.model_copy(update=update)


class Match(SQLModel, table=True):
    """
    A scheduled match between two teams within a round.
    `category` is stored on the match itself for filtering.
    """
    __tablename__ = "matches"

    id: str = Field(default_factory=new_id, primary_key=True)
    round_id: str = Field(index=True)
    category: Category = Field(index=True)
    date: datetime                                  # scheduled kick-off, UTC
    home_team_id: str
    away_team_id: str

    # Embedded MatchStats, stored as a JSON document
    stats: dict = Field(default_factory=lambda: MatchStats().model_dump(), sa_column=Column(JSON))

    def get_stats(self) -> MatchStats:
        return MatchStats.model_validate(self.stats or {})

    def involves(self, team_id: str) -> bool:
        return self.home_team_id == team_id or self.away_team_id == team_id
