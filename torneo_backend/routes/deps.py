# deps.py
# Shared FastAPI dependencies: app-wide services and the logged-in user.

from typing import Optional

from fastapi import Depends, Header, Request

from torneo_backend.core.config import SESSION_HEADER
from torneo_backend.models.user_model import User
from torneo_backend.services.identity import IdentityService
from torneo_backend.services.state_controller import TournamentState


def get_state(request: Request) -> TournamentState:
    return request.app.state.tournament


def get_identity(request: Request) -> IdentityService:
    return request.app.state.identity


def get_token(token: Optional[str] = Header(default=None, alias=SESSION_HEADER)) -> Optional[str]:
    return token


def get_current_user(
    token: Optional[str] = Depends(get_token),
    identity: IdentityService = Depends(get_identity),
) -> User:
    """Resolves the session header to a User (401 if missing or invalid)."""
    return identity.resolve(token)
