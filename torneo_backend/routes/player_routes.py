# player_routes.py
from fastapi import APIRouter, Depends

from torneo_backend.models.requests import PlayerCreate
from torneo_backend.models.user_model import User
from torneo_backend.routes.deps import get_current_user, get_state
from torneo_backend.routes.payloads import player_payload
from torneo_backend.services.state_controller import TournamentState

router = APIRouter()


@router.post("/")
def add_player(data: PlayerCreate, user: User = Depends(get_current_user), state: TournamentState = Depends(get_state)):
    """Captains add to their own team; managers and owners to any team."""
    player = state.add_player(user, data.name, data.number, data.team_id)
    return {"message": "Player added", "player": player_payload(player)}


@router.delete("/{player_id}")
def remove_player(player_id: str, user: User = Depends(get_current_user), state: TournamentState = Depends(get_state)):
    state.remove_player(user, player_id)
    return {"message": "Player removed", "player_id": player_id}
