# standings.py
"""
Aggregation engine for the tournament.

Every function here is pure: it receives the current collections (lists of
Team / Match / Player rows) and recomputes its result from scratch. Missing
references (a match pointing at a deleted team, a scorer whose player was
removed) are skipped, never raised.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from torneo_backend.models.match_model import Match, MatchStats
from torneo_backend.models.player_model import Player
from torneo_backend.models.team_model import Category, Team

POINTS_FOR_WIN = 3
POINTS_FOR_DRAW = 1


@dataclass
class StandingRow:
    team: Team
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    diff: int = 0
    points: int = 0


@dataclass
class RankingRow:
    player: Player
    team: Optional[Team]
    count: int


@dataclass
class PlayerGoals:
    player: Player
    goals: int


@dataclass
class TeamCareer:
    team: Team
    record: StandingRow
    total_goals: int = 0
    player_goals: List[PlayerGoals] = field(default_factory=list)


# ---------------------------------------------
# Helpers
# ---------------------------------------------
def _played_in_category(matches: Iterable[Match], category: Category) -> List[tuple]:
    """(match, stats) pairs for played matches of one category."""
    result = []
    for match in matches:
        stats = match.get_stats()
        if stats.is_played and match.category == category:
            result.append((match, stats))
    return result


def _apply_result(row: StandingRow, my_score: int, opp_score: int) -> None:
    row.played += 1
    row.goals_for += my_score
    row.goals_against += opp_score
    if my_score > opp_score:
        row.won += 1
    elif my_score < opp_score:
        row.lost += 1
    else:
        row.drawn += 1


def _finish(row: StandingRow) -> StandingRow:
    row.points = row.won * POINTS_FOR_WIN + row.drawn * POINTS_FOR_DRAW
    row.diff = row.goals_for - row.goals_against
    return row


def _record_for(team: Team, played: Iterable[tuple]) -> StandingRow:
    row = StandingRow(team=team)
    for match, stats in played:
        if not match.involves(team.id):
            continue
        is_home = match.home_team_id == team.id
        my_score = stats.home_score if is_home else stats.away_score
        opp_score = stats.away_score if is_home else stats.home_score
        _apply_result(row, my_score, opp_score)
    return _finish(row)


def _rank(totals: Dict[str, int], players: Sequence[Player], teams: Sequence[Team]) -> List[RankingRow]:
    players_by_id = {p.id: p for p in players}
    teams_by_id = {t.id: t for t in teams}

    rows = []
    for player_id, count in totals.items():
        player = players_by_id.get(player_id)
        if player is None or count <= 0:
            continue
        rows.append(RankingRow(player=player, team=teams_by_id.get(player.team_id), count=count))

    # Stable: equal counts keep first-seen order
    return sorted(rows, key=lambda r: r.count, reverse=True)


# =========================================
# STANDINGS
# =========================================
def compute_standings(teams: Sequence[Team], matches: Sequence[Match], category: Category) -> List[StandingRow]:
    """
    League table for one category.
    Points are 3 per win and 1 per draw. Rows are ordered by points, then goal
    difference; teams level on both keep their input order.
    """
    played = _played_in_category(matches, category)
    rows = [_record_for(team, played) for team in teams if team.category == category]
    return sorted(rows, key=lambda r: (r.points, r.diff), reverse=True)


# =========================================
# SCORER / MVP RANKINGS
# =========================================
def compute_scorer_ranking(
    matches: Sequence[Match],
    players: Sequence[Player],
    teams: Sequence[Team],
    category: Category,
) -> List[RankingRow]:
    """Top scorers of a category, summed over every played match."""
    totals = tally_goals(stats for _, stats in _played_in_category(matches, category))
    return _rank(totals, players, teams)


def compute_mvp_ranking(
    matches: Sequence[Match],
    players: Sequence[Player],
    teams: Sequence[Team],
    category: Category,
) -> List[RankingRow]:
    """Number of played matches in which each player was named MVP."""
    totals: Dict[str, int] = {}
    for _, stats in _played_in_category(matches, category):
        if stats.mvp_player_id:
            totals[stats.mvp_player_id] = totals.get(stats.mvp_player_id, 0) + 1
    return _rank(totals, players, teams)


# =========================================
# TEAM CAREER (team detail view)
# =========================================
def compute_team_career(team: Team, matches: Sequence[Match], players: Sequence[Player]) -> TeamCareer:
    """
    Record of one team over all of its played matches, whatever their category,
    plus goals per current roster player counted from those matches only.
    """
    played = []
    for match in matches:
        stats = match.get_stats()
        if stats.is_played and match.involves(team.id):
            played.append((match, stats))

    record = _record_for(team, played)

    goals_by_player = tally_goals(stats for _, stats in played)
    roster = [p for p in players if p.team_id == team.id]

    return TeamCareer(
        team=team,
        record=record,
        total_goals=record.goals_for,
        player_goals=[PlayerGoals(player=p, goals=goals_by_player.get(p.id, 0)) for p in roster],
    )


def tally_goals(all_stats: Iterable[MatchStats]) -> Dict[str, int]:
    totals: Dict[str, int] = {}
    for stats in all_stats:
        for tally in stats.scorers:
            totals[tally.player_id] = totals.get(tally.player_id, 0) + tally.count
    return totals


def tally_player_goals(matches: Sequence[Match]) -> Dict[str, int]:
    """All-time goals per player id over played matches (feeds Player.goals)."""
    return tally_goals(s for s in (m.get_stats() for m in matches) if s.is_played)
