# team_routes.py
# Team registration, roster and team detail.

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from torneo_backend.models.requests import TeamCreate
from torneo_backend.models.team_model import Category
from torneo_backend.models.user_model import User
from torneo_backend.routes.deps import get_current_user, get_state
from torneo_backend.routes.payloads import career_payload, player_payload, team_payload
from torneo_backend.services.state_controller import TournamentState

router = APIRouter()


@router.get("/")
def list_teams(category: Optional[Category] = None, state: TournamentState = Depends(get_state)):
    teams = state.snapshot().teams
    if category is not None:
        teams = [t for t in teams if t.category == category]
    return [team_payload(t) for t in teams]


@router.post("/")
def create_team(data: TeamCreate, user: User = Depends(get_current_user), state: TournamentState = Depends(get_state)):
    team = state.create_team(user, data.name, data.category, data.logo_color)
    return {"message": "Team created", "team": team_payload(team)}


@router.get("/{team_id}")
def get_team(team_id: str, state: TournamentState = Depends(get_state)):
    team = state.snapshot().team(team_id)
    if not team:
        raise HTTPException(status_code=404, detail="Team not found.")
    return team_payload(team)


@router.delete("/{team_id}")
def delete_team(team_id: str, user: User = Depends(get_current_user), state: TournamentState = Depends(get_state)):
    state.delete_team(user, team_id)
    return {"message": "Team deleted", "team_id": team_id}


@router.get("/{team_id}/roster")
def get_roster(team_id: str, state: TournamentState = Depends(get_state)):
    """Players currently assigned to the team, by jersey number."""
    return [player_payload(p) for p in state.roster(team_id)]


@router.get("/{team_id}/career")
def get_team_career(team_id: str, state: TournamentState = Depends(get_state)):
    """All-category record of the team plus goals per roster player."""
    return career_payload(state.team_career(team_id))
