# match_routes.py
# Fixtures per category and live score entry.

from fastapi import APIRouter, Depends, HTTPException

from torneo_backend.models.requests import GoalAdjustment, MatchCreate, MatchResultUpdate
from torneo_backend.models.team_model import Category
from torneo_backend.models.user_model import User
from torneo_backend.routes.deps import get_current_user, get_state
from torneo_backend.routes.payloads import match_payload, round_payload
from torneo_backend.services.state_controller import TournamentState

router = APIRouter()


# =========================================
# GET FIXTURES FOR A CATEGORY
# =========================================
@router.get("/")
def get_fixtures(category: Category = Category.MASCULINO, state: TournamentState = Depends(get_state)):
    """
    Matches of a category grouped by round.
    Each group carries the round (None if it was deleted meanwhile) and its matches by kick-off.
    """
    snapshot = state.snapshot()
    return {
        "category": category,
        "rounds": [
            {"round": round_payload(r), "matches": [match_payload(m, snapshot) for m in matches]}
            for r, matches in state.matches_by_round(category)
        ],
    }


@router.get("/{match_id}")
def get_match(match_id: str, state: TournamentState = Depends(get_state)):
    snapshot = state.snapshot()
    match = snapshot.match(match_id)
    if not match:
        raise HTTPException(status_code=404, detail="Match not found")
    return match_payload(match, snapshot)


@router.post("/")
def create_match(data: MatchCreate, user: User = Depends(get_current_user), state: TournamentState = Depends(get_state)):
    match = state.create_match(user, data.round_id, data.category, data.date, data.home_team_id, data.away_team_id)
    return {"message": "Match created", "match": match_payload(match, state.snapshot())}


@router.delete("/{match_id}")
def delete_match(match_id: str, user: User = Depends(get_current_user), state: TournamentState = Depends(get_state)):
    state.delete_match(user, match_id)
    return {"message": "Match deleted", "match_id": match_id}


@router.put("/{match_id}/result")
def update_result(
    match_id: str,
    data: MatchResultUpdate,
    user: User = Depends(get_current_user),
    state: TournamentState = Depends(get_state),
):
    """Overwrites the match stats (score, scorers, MVP, played flag)."""
    match = state.update_match_result(user, match_id, data.to_stats())
    return {"message": "Result saved", "match": match_payload(match, state.snapshot())}


@router.post("/{match_id}/goals")
def adjust_goal(
    match_id: str,
    data: GoalAdjustment,
    user: User = Depends(get_current_user),
    state: TournamentState = Depends(get_state),
):
    """Adds or takes back a goal of one player; the side's score follows."""
    match = state.adjust_goal(user, match_id, data.player_id, data.delta)
    return {"message": "Goal updated", "match": match_payload(match, state.snapshot())}


@router.post("/{match_id}/finish")
def finish_match(match_id: str, user: User = Depends(get_current_user), state: TournamentState = Depends(get_state)):
    """Saves the entered score as the final result."""
    match = state.finish_match(user, match_id)
    return {"message": "Result saved", "match": match_payload(match, state.snapshot())}
