# round_model.py
# A named grouping of matches (match-day or knockout stage).

from datetime import date as date_type
from typing import Optional
from sqlmodel import SQLModel, Field

from torneo_backend.models.team_model import new_id


class Round(SQLModel, table=True):
    __tablename__ = "rounds"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    date: Optional[date_type] = None   # optional reference date
