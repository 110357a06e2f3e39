# payloads.py
# Frontend-friendly dicts built from models and aggregation results.

from typing import Optional

from torneo_backend.core.snapshot import TournamentSnapshot
from torneo_backend.core.standings import RankingRow, StandingRow, TeamCareer
from torneo_backend.models.match_model import Match
from torneo_backend.models.notification_model import Notification
from torneo_backend.models.player_model import Player
from torneo_backend.models.round_model import Round
from torneo_backend.models.team_model import Team
from torneo_backend.models.user_model import User


def team_payload(team: Optional[Team]) -> Optional[dict]:
    if team is None:
        return None
    return {"id": team.id, "name": team.name, "category": team.category, "logo_color": team.logo_color}


def round_payload(round_: Optional[Round]) -> Optional[dict]:
    if round_ is None:
        return None
    return {"id": round_.id, "name": round_.name, "date": round_.date}


def player_payload(player: Player) -> dict:
    return {
        "id": player.id,
        "name": player.name,
        "number": player.number,
        "team_id": player.team_id,
        "goals": player.goals,
    }


def user_payload(user: User) -> dict:
    return {"id": user.id, "email": user.email, "name": user.name, "role": user.role, "team_id": user.team_id}


def notification_payload(notification: Notification) -> dict:
    return {
        "id": notification.id,
        "user_id": notification.user_id,
        "title": notification.title,
        "message": notification.message,
        "date": notification.date,
        "read": notification.read,
        "type": notification.type,
    }


def match_payload(match: Match, snapshot: TournamentSnapshot) -> dict:
    """
    Match with club names resolved; dangling references come back as None.
    Scorers are split by each player's current team; unknown players are left out.
    """
    home = snapshot.team(match.home_team_id)
    away = snapshot.team(match.away_team_id)
    stats = match.get_stats()

    home_scorers, away_scorers = [], []
    for tally in stats.scorers:
        player = snapshot.player(tally.player_id)
        if player is None:
            continue
        entry = {"player_id": player.id, "name": player.name, "count": tally.count}
        if player.team_id == match.home_team_id:
            home_scorers.append(entry)
        elif player.team_id == match.away_team_id:
            away_scorers.append(entry)

    return {
        "id": match.id,
        "round_id": match.round_id,
        "category": match.category,
        "date": match.date,
        "home_team_id": match.home_team_id,
        "home_team_name": home.name if home else None,
        "away_team_id": match.away_team_id,
        "away_team_name": away.name if away else None,
        "stats": stats.model_dump(),
        "home_scorers": home_scorers,
        "away_scorers": away_scorers,
    }


def standing_payload(position: int, row: StandingRow) -> dict:
    return {
        "position": position,
        "team": team_payload(row.team),
        "played": row.played,
        "won": row.won,
        "drawn": row.drawn,
        "lost": row.lost,
        "goals_for": row.goals_for,
        "goals_against": row.goals_against,
        "diff": row.diff,
        "points": row.points,
    }


def ranking_payload(position: int, row: RankingRow) -> dict:
    return {
        "position": position,
        "player": player_payload(row.player),
        "team": team_payload(row.team),
        "count": row.count,
    }


def career_payload(career: TeamCareer) -> dict:
    payload = standing_payload(0, career.record)
    payload.pop("position")
    payload["total_goals"] = career.total_goals
    payload["player_goals"] = [
        {"player": player_payload(entry.player), "goals": entry.goals} for entry in career.player_goals
    ]
    return payload
