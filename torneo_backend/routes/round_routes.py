# round_routes.py
from fastapi import APIRouter, Depends

from torneo_backend.models.requests import RoundCreate
from torneo_backend.models.user_model import User
from torneo_backend.routes.deps import get_current_user, get_state
from torneo_backend.routes.payloads import match_payload, round_payload
from torneo_backend.services.state_controller import TournamentState

router = APIRouter()


@router.get("/")
def list_rounds(state: TournamentState = Depends(get_state)):
    return [round_payload(r) for r in state.snapshot().rounds]


@router.post("/")
def create_round(data: RoundCreate, user: User = Depends(get_current_user), state: TournamentState = Depends(get_state)):
    new_round = state.create_round(user, data.name, data.date)
    return {"message": "Round created", "round_id": new_round.id, "round": round_payload(new_round)}


@router.delete("/{round_id}")
def delete_round(round_id: str, user: User = Depends(get_current_user), state: TournamentState = Depends(get_state)):
    """Deletes the round and every match scheduled in it."""
    deleted = state.delete_round(user, round_id)
    return {"message": "Round deleted", "round_id": round_id, "deleted_matches": deleted}


@router.get("/{round_id}/matches")
def round_matches(round_id: str, state: TournamentState = Depends(get_state)):
    snapshot = state.snapshot()
    return [match_payload(m, snapshot) for m in state.matches_for_round(round_id)]
