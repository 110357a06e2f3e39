# team_model.py
# Defines the Team model and the tournament categories.

from enum import Enum
from uuid import uuid4
from sqlmodel import SQLModel, Field


class Category(str, Enum):
    """Fixed tournament divisions."""
    MASCULINO = "MASCULINO"
    FEMENINO_A = "FEMENINO_A"
    FEMENINO_B = "FEMENINO_B"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


def new_id() -> str:
    """Store-assigned document id."""
    return uuid4().hex


class Team(SQLModel, table=True):
    """A registered team playing in exactly one category."""
    __tablename__ = "teams"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    category: Category = Field(index=True)
    logo_color: str = "bg-blue-600"   # display color tag
