# user_routes.py
# Owner administration of user roles.

from fastapi import APIRouter, Depends

from torneo_backend.core.roles import Action, authorize
from torneo_backend.models.requests import UserUpdateRequest
from torneo_backend.models.user_model import User
from torneo_backend.routes.deps import get_current_user, get_state
from torneo_backend.routes.payloads import user_payload
from torneo_backend.services.state_controller import TournamentState

router = APIRouter()


@router.get("/")
def list_users(user: User = Depends(get_current_user), state: TournamentState = Depends(get_state)):
    authorize(user, Action.MANAGE_USERS)
    return [user_payload(u) for u in state.snapshot().users]


@router.patch("/{user_id}")
def update_user(
    user_id: str,
    data: UserUpdateRequest,
    user: User = Depends(get_current_user),
    state: TournamentState = Depends(get_state),
):
    """
    Body is tagged by `kind`:
    - {"kind": "change_role", "role": ...}
    - {"kind": "assign_team", "role": ..., "team_id": ...}
    """
    updated = state.update_user(user, user_id, data)
    return {"message": "User updated", "user": user_payload(updated)}
