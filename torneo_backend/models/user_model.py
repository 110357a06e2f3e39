# user_model.py
# Defines the User profile, the Account credentials behind it and session tokens.

from datetime import datetime
from typing import Optional
from sqlmodel import SQLModel, Field

from torneo_backend.core.clock import utc_now
from torneo_backend.core.roles import Role


class User(SQLModel, table=True):
    """Profile document, keyed by the identity subject (Account.uid)."""
    __tablename__ = "users"

    id: str = Field(primary_key=True)
    email: str = Field(index=True)
    name: str
    role: Role = Role.PLAYER
    team_id: Optional[str] = None   # meaningful for captains and players


class Account(SQLModel, table=True):
    """Credential record owned by the identity side."""
    __tablename__ = "accounts"

    uid: str = Field(primary_key=True)
    email: str = Field(index=True, unique=True)
    password_hash: str


class AuthSession(SQLModel, table=True):
    """Durable session identity handed to the client as an opaque token."""
    __tablename__ = "auth_sessions"

    token: str = Field(primary_key=True)
    uid: str = Field(index=True)
    created_at: datetime = Field(default_factory=utc_now)
