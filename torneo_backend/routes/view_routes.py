# view_routes.py
# Per-session navigation state.

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from torneo_backend.core.view_router import View
from torneo_backend.models.team_model import Category
from torneo_backend.models.user_model import User
from torneo_backend.routes.deps import get_current_user, get_identity, get_token
from torneo_backend.services.identity import IdentityService

router = APIRouter()


class NavigateRequest(BaseModel):
    view: View


class SelectTeamRequest(BaseModel):
    team_id: str


class SelectCategoryRequest(BaseModel):
    category: Category


@router.get("/")
def current_view(
    user: User = Depends(get_current_user),
    token: str = Depends(get_token),
    identity: IdentityService = Depends(get_identity),
):
    return identity.router_for(token).as_dict()


@router.post("/navigate")
def navigate(
    data: NavigateRequest,
    user: User = Depends(get_current_user),
    token: str = Depends(get_token),
    identity: IdentityService = Depends(get_identity),
):
    router_ = identity.router_for(token)
    router_.navigate(data.view)
    return router_.as_dict()


@router.post("/select-team")
def select_team(
    data: SelectTeamRequest,
    user: User = Depends(get_current_user),
    token: str = Depends(get_token),
    identity: IdentityService = Depends(get_identity),
):
    router_ = identity.router_for(token)
    router_.select_team(data.team_id)
    return router_.as_dict()


@router.post("/category")
def select_category(
    data: SelectCategoryRequest,
    user: User = Depends(get_current_user),
    token: str = Depends(get_token),
    identity: IdentityService = Depends(get_identity),
):
    router_ = identity.router_for(token)
    router_.select_category(data.category)
    return router_.as_dict()
