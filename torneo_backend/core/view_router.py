# view_router.py
# Current-view state for one session. No history, no deep links.

from enum import Enum
from typing import Optional

from torneo_backend.models.team_model import Category


class View(str, Enum):
    HOME = "home"
    MATCHES = "matches"
    STANDINGS = "standings"
    TEAM_ROSTER = "team_roster"
    TEAM_DETAIL = "team_detail"
    PROFILE = "profile"
    NOTIFICATIONS = "notifications"
    ADMIN = "admin"


DEFAULT_VIEW = View.MATCHES
DEFAULT_CATEGORY = Category.MASCULINO


class ViewRouter:
    """Holds one current view, the selected team and the selected category."""

    def __init__(self):
        self.current = DEFAULT_VIEW
        self.selected_team_id: Optional[str] = None
        self.selected_category = DEFAULT_CATEGORY

    def navigate(self, view: View) -> View:
        self.current = View(view)
        return self.current

    def select_team(self, team_id: str) -> View:
        """Picks a team (e.g. from the standings table) and opens its detail view."""
        self.selected_team_id = team_id
        return self.navigate(View.TEAM_DETAIL)

    def select_category(self, category: Category) -> Category:
        self.selected_category = Category(category)
        return self.selected_category

    def reset(self) -> View:
        """Back to the default view; called on every session start and end."""
        self.selected_team_id = None
        return self.navigate(DEFAULT_VIEW)

    def as_dict(self) -> dict:
        return {
            "view": self.current.value,
            "selected_team_id": self.selected_team_id,
            "selected_category": self.selected_category.value,
        }
