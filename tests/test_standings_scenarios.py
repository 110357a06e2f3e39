"""BDD scenarios for standings and scorer rankings."""

import pytest
from pytest_bdd import scenarios, given, when, then, parsers

from torneo_backend.core.standings import compute_scorer_ranking, compute_standings
from torneo_backend.models import Category, ScorerTally

from conftest import make_match, make_player, make_team

# Load scenarios from feature file
scenarios("standings.feature")


@pytest.fixture
def context():
    """Shared context for test steps."""
    return {"teams": [], "players": [], "matches": [], "category": None}


@given(parsers.parse('the teams "{names}" in {category}'))
def teams_in_category(context, names, category):
    context["category"] = Category(category)
    context["teams"] = [make_team(name, category) for name in names.split(",")]


@given(parsers.parse('player "{player_id}" plays for "{team_id}"'))
def player_for_team(context, player_id, team_id):
    context["players"].append(make_player(player_id, team_id))


@given(parsers.parse('a played match "{home}" {home_score:d}-{away_score:d} "{away}"'))
def played_match(context, home, home_score, away_score, away):
    match_id = f"m{len(context['matches']) + 1}"
    context["matches"].append(
        make_match(match_id, home, away, home_score, away_score, category=context["category"].value)
    )


@given(parsers.parse('its scorers are "{scorers}"'))
def match_scorers(context, scorers):
    match = context["matches"][-1]
    stats = match.get_stats()
    for entry in scorers.split(","):
        player_id, count = entry.split(":")
        stats.scorers.append(ScorerTally(player_id=player_id, count=int(count)))
    match.stats = stats.model_dump()


@when("the standings are computed")
def standings_computed(context):
    context["standings"] = compute_standings(context["teams"], context["matches"], context["category"])


@when("the scorer ranking is computed")
def ranking_computed(context):
    context["ranking"] = compute_scorer_ranking(
        context["matches"], context["players"], context["teams"], context["category"]
    )


@then(parsers.parse('"{team_id}" ranks first'))
def ranks_first(context, team_id):
    assert context["standings"][0].team.id == team_id


@then(parsers.parse('the order is "{names}"'))
def order_is(context, names):
    assert [row.team.id for row in context["standings"]] == names.split(",")


@then(parsers.parse(
    '"{team_id}" has played {played:d}, won {won:d}, drawn {drawn:d}, lost {lost:d}, '
    'diff {diff:d} and {points:d} points'
))
def team_line(context, team_id, played, won, drawn, lost, diff, points):
    row = next(r for r in context["standings"] if r.team.id == team_id)
    assert (row.played, row.won, row.drawn, row.lost, row.diff, row.points) == (
        played, won, drawn, lost, diff, points
    )


@then(parsers.parse('the ranking is "{expected}"'))
def ranking_is(context, expected):
    actual = ",".join(f"{row.player.id}:{row.count}" for row in context["ranking"])
    assert actual == expected
