"""Tests for per-session navigation state."""

from torneo_backend.core.view_router import DEFAULT_VIEW, View, ViewRouter
from torneo_backend.models import Category


def test_starts_on_default_view():
    router = ViewRouter()
    assert router.current == DEFAULT_VIEW == View.MATCHES
    assert router.selected_category == Category.MASCULINO


def test_navigate_replaces_current_view():
    router = ViewRouter()
    router.navigate(View.STANDINGS)
    router.navigate("profile")
    assert router.current == View.PROFILE


def test_select_team_opens_team_detail():
    router = ViewRouter()
    router.navigate(View.STANDINGS)
    router.select_team("t1")
    assert router.current == View.TEAM_DETAIL
    assert router.selected_team_id == "t1"


def test_reset_clears_selection():
    router = ViewRouter()
    router.select_team("t1")
    router.reset()
    assert router.as_dict() == {"view": "matches", "selected_team_id": None, "selected_category": "MASCULINO"}
