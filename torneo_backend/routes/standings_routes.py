# standings_routes.py
from fastapi import APIRouter, Depends

from torneo_backend.models.team_model import Category
from torneo_backend.routes.payloads import ranking_payload, standing_payload
from torneo_backend.services.state_controller import TournamentState
from torneo_backend.routes.deps import get_state

router = APIRouter()


# =========================================
# GET STANDINGS
# =========================================
@router.get("/{category}")
def get_standings(category: Category, state: TournamentState = Depends(get_state)):
    """League table of a category, recomputed from the played matches."""
    return [standing_payload(i + 1, row) for i, row in enumerate(state.standings(category))]


@router.get("/{category}/scorers")
def get_scorers(category: Category, state: TournamentState = Depends(get_state)):
    return [ranking_payload(i + 1, row) for i, row in enumerate(state.scorer_ranking(category))]


@router.get("/{category}/mvp")
def get_mvp(category: Category, state: TournamentState = Depends(get_state)):
    return [ranking_payload(i + 1, row) for i, row in enumerate(state.mvp_ranking(category))]
