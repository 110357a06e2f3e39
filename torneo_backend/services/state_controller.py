# state_controller.py
"""
Application state controller.

Mirrors the store's collections into an immutable TournamentSnapshot and
exposes the mutations of the tournament. Every mutation:
- checks the acting user with authorize(),
- performs its write(s) in a single session/commit,
- reloads the touched collections and publishes them on the SnapshotHub,
- optionally appends a Notification inside that same commit.
Writes and refreshes are serialized, so the snapshot never goes back in time.
"""

import threading
from contextlib import contextmanager
from dataclasses import replace
from datetime import date as date_type, datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from torneo_backend.core import standings as aggregation
from torneo_backend.core.clock import as_utc
from torneo_backend.core.config import BROADCAST
from torneo_backend.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from torneo_backend.core.events import SnapshotHub
from torneo_backend.core.roles import Action, authorize
from torneo_backend.core.snapshot import COLLECTIONS, TournamentSnapshot
from torneo_backend.models.match_model import Match, MatchStats
from torneo_backend.models.notification_model import Notification, NotificationType
from torneo_backend.models.player_model import Player
from torneo_backend.models.requests import AssignTeam, ChangeRole
from torneo_backend.models.round_model import Round
from torneo_backend.models.team_model import Category, Team
from torneo_backend.models.user_model import User
from torneo_backend.services.notifications import PopupSink

# Collection name -> (model, ordering)
_SOURCES = {
    "teams": (Team, None),
    "rounds": (Round, None),
    "players": (Player, None),
    "matches": (Match, None),
    "users": (User, None),
    "notifications": (Notification, Notification.date.desc()),
}


class TournamentState:

    def __init__(self, bind: Engine, hub: Optional[SnapshotHub] = None, popups: Optional[PopupSink] = None):
        self.engine = bind
        self.hub = hub or SnapshotHub()
        self.popups = popups or PopupSink()
        self._snapshot = TournamentSnapshot()
        self._lock = threading.RLock()
        self.refresh()

    # ---------------------------------------------
    # Snapshot access
    # ---------------------------------------------
    def snapshot(self) -> TournamentSnapshot:
        return self._snapshot

    def subscribe(self, collection: str, listener):
        """Listener receives (collection, rows) after every refresh of that collection."""
        return self.hub.subscribe(collection, listener)

    def refresh(self, *collections: str) -> TournamentSnapshot:
        """Reloads the given collections (all by default) and publishes them."""
        names = collections or COLLECTIONS
        with self._lock:
            loaded = {}
            with Session(self.engine, expire_on_commit=False) as session:
                for name in names:
                    model, ordering = _SOURCES[name]
                    statement = select(model)
                    if ordering is not None:
                        statement = statement.order_by(ordering)
                    loaded[name] = tuple(session.exec(statement).all())

            self._snapshot = replace(self._snapshot, **loaded)
            for name in names:
                self.hub.publish(name, loaded[name])
            return self._snapshot

    @contextmanager
    def writing(self, *collections: str):
        """
        One session, one commit; touched collections are re-published afterwards.
        Nothing is committed if the block raises.
        """
        with self._lock:
            with Session(self.engine, expire_on_commit=False) as session:
                yield session
                session.commit()
            self.refresh(*collections)

    @staticmethod
    def add_notification(
        session: Session,
        user_id: str,
        title: str,
        message: str,
        type: NotificationType = NotificationType.INFO,
    ) -> Notification:
        """Queues a notification on an open write session."""
        notification = Notification(user_id=user_id, title=title, message=message, type=NotificationType(type))
        session.add(notification)
        return notification

    @staticmethod
    def _get_or_404(session: Session, model, item_id: str, label: str):
        item = session.get(model, item_id)
        if item is None:
            raise NotFoundError(f"{label} not found: {item_id}")
        return item

    # =========================================
    # TEAMS
    # =========================================
    def create_team(self, actor: User, name: str, category: Category, logo_color: str = "bg-blue-600") -> Team:
        authorize(actor, Action.MANAGE_TEAMS)
        if not name or not name.strip():
            raise ValidationError("Team name is required")
        category = Category(category)

        team = Team(name=name.strip(), category=category, logo_color=logo_color)
        with self.writing("teams", "notifications") as session:
            session.add(team)
            notification = self.add_notification(
                session,
                BROADCAST,
                "Nuevo Equipo",
                f"Se ha inscrito el equipo {team.name} en {category.label}",
            )

        print(f"➕ Team registered: {team.name} ({category.value})")
        self.popups.maybe_show(notification, actor.id)
        return team

    def delete_team(self, actor: User, team_id: str) -> None:
        """Deletes only the team; its players and matches are left referencing it."""
        authorize(actor, Action.MANAGE_TEAMS)
        with self.writing("teams") as session:
            session.delete(self._get_or_404(session, Team, team_id, "Team"))

    # =========================================
    # ROUNDS
    # =========================================
    def create_round(self, actor: User, name: str, date: Optional[date_type] = None) -> Round:
        authorize(actor, Action.MANAGE_ROUNDS)
        if not name or not name.strip():
            raise ValidationError("Round name is required")

        new_round = Round(name=name.strip(), date=date)
        with self.writing("rounds") as session:
            session.add(new_round)
        return new_round

    def delete_round(self, actor: User, round_id: str) -> int:
        """
        Deletes every match of the round, then the round itself, in one
        transaction. Returns the number of matches removed.
        """
        authorize(actor, Action.MANAGE_ROUNDS)
        with self.writing("matches", "rounds") as session:
            old_round = self._get_or_404(session, Round, round_id, "Round")
            matches = session.exec(select(Match).where(Match.round_id == round_id)).all()
            for match in matches:
                session.delete(match)
            session.delete(old_round)

        print(f"🗑️  Round {old_round.name} deleted with {len(matches)} match(es)")
        return len(matches)

    # =========================================
    # MATCHES
    # =========================================
    def create_match(
        self,
        actor: User,
        round_id: str,
        category: Category,
        date: datetime,
        home_team_id: str,
        away_team_id: str,
    ) -> Match:
        authorize(actor, Action.MANAGE_MATCHES)
        category = Category(category)
        if home_team_id == away_team_id:
            raise ValidationError("A team cannot play against itself")

        match = Match(
            round_id=round_id,
            category=category,
            date=as_utc(date),
            home_team_id=home_team_id,
            away_team_id=away_team_id,
            stats=MatchStats().model_dump(),
        )
        with self.writing("matches") as session:
            self._get_or_404(session, Round, round_id, "Round")
            for team_id in (home_team_id, away_team_id):
                team = self._get_or_404(session, Team, team_id, "Team")
                if team.category != category:
                    raise ValidationError(
                        f"{team.name} plays in {Category(team.category).value}, not {category.value}"
                    )
            session.add(match)
        return match

    def delete_match(self, actor: User, match_id: str) -> None:
        authorize(actor, Action.MANAGE_MATCHES)
        with self.writing("matches") as session:
            session.delete(self._get_or_404(session, Match, match_id, "Match"))

    def update_match_result(self, actor: User, match_id: str, stats: MatchStats) -> Match:
        """
        Replaces the embedded stats of a match and refreshes every player's
        goal counter from the scorer tallies. A played result is broadcast.
        """
        authorize(actor, Action.RECORD_RESULT)
        stats = MatchStats.model_validate(stats.model_dump())

        with self.writing("matches", "players", "notifications") as session:
            match = self._get_or_404(session, Match, match_id, "Match")
            notification = self._store_stats(session, match, stats)

        if notification is not None:
            self.popups.maybe_show(notification, actor.id)
        return match

    def adjust_goal(self, actor: User, match_id: str, player_id: str, delta: int) -> Match:
        """
        Live score entry: adds (delta > 0) or takes back (delta < 0) goals of
        one player of either side. The played flag is left as it is.
        """
        authorize(actor, Action.RECORD_RESULT)
        if delta == 0:
            raise ValidationError("Goal delta must not be zero")

        with self.writing("matches", "players", "notifications") as session:
            match = self._get_or_404(session, Match, match_id, "Match")
            player = self._get_or_404(session, Player, player_id, "Player")
            if not match.involves(player.team_id):
                raise ValidationError(f"{player.name} does not play in this match")

            stats = match.get_stats().adjust_goal(player.id, player.team_id == match.home_team_id, delta)
            self._store_stats(session, match, stats)
        return match

    def finish_match(self, actor: User, match_id: str) -> Match:
        """Saves the entered score as final and broadcasts it."""
        authorize(actor, Action.RECORD_RESULT)
        with self.writing("matches", "players", "notifications") as session:
            match = self._get_or_404(session, Match, match_id, "Match")
            stats = match.get_stats().model_copy(update={"is_played": True})
            notification = self._store_stats(session, match, stats)

        if notification is not None:
            self.popups.maybe_show(notification, actor.id)
        return match

    def _store_stats(self, session: Session, match: Match, stats: MatchStats) -> Optional[Notification]:
        """
        Writes the stats, recounts every player's goals and queues the
        "Resultado Final" broadcast when the match is played and both teams exist.
        """
        match.stats = stats.model_dump()
        session.add(match)
        session.flush()

        goals = aggregation.tally_player_goals(session.exec(select(Match)).all())
        for player in session.exec(select(Player)).all():
            total = goals.get(player.id, 0)
            if player.goals != total:
                player.goals = total
                session.add(player)

        if not stats.is_played:
            return None
        home = session.get(Team, match.home_team_id)
        away = session.get(Team, match.away_team_id)
        if home is None or away is None:
            return None
        return self.add_notification(
            session,
            BROADCAST,
            "Resultado Final",
            f"{home.name} ({stats.home_score}) - ({stats.away_score}) {away.name}",
            NotificationType.SUCCESS,
        )

    # =========================================
    # PLAYERS
    # =========================================
    def add_player(self, actor: User, name: str, number: int, team_id: str) -> Player:
        authorize(actor, Action.MANAGE_PLAYERS, team_id=team_id)
        if not name or not name.strip():
            raise ValidationError("Player name is required")
        if number < 0:
            raise ValidationError("Jersey number must be non-negative")

        player = Player(name=name.strip(), number=number, team_id=team_id, goals=0)
        with self.writing("players") as session:
            self._get_or_404(session, Team, team_id, "Team")
            session.add(player)
        return player

    def remove_player(self, actor: User, player_id: str) -> None:
        with self.writing("players") as session:
            player = self._get_or_404(session, Player, player_id, "Player")
            authorize(actor, Action.MANAGE_PLAYERS, team_id=player.team_id)
            session.delete(player)

    # =========================================
    # USERS
    # =========================================
    def update_user(self, actor: User, user_id: str, request) -> User:
        """
        Applies a ChangeRole or AssignTeam request and tells the user about it.
        ChangeRole leaves team_id untouched; AssignTeam sets both.
        """
        authorize(actor, Action.MANAGE_USERS)
        if not isinstance(request, (ChangeRole, AssignTeam)):
            raise ValidationError(f"Unsupported user update: {type(request).__name__}")

        with self.writing("users", "notifications") as session:
            user = self._get_or_404(session, User, user_id, "User")
            user.role = request.role
            if isinstance(request, AssignTeam):
                if request.team_id is not None:
                    self._get_or_404(session, Team, request.team_id, "Team")
                user.team_id = request.team_id
            session.add(user)
            notification = self.add_notification(
                session,
                user_id,
                "Rol Actualizado",
                f"Tu rol ha sido actualizado a {request.role.value.upper()}.",
                NotificationType.WARNING,
            )

        self.popups.maybe_show(notification, actor.id)
        return user

    # =========================================
    # NOTIFICATIONS
    # =========================================
    def send_notification(
        self,
        user_id: str,
        title: str,
        message: str,
        type: NotificationType = NotificationType.INFO,
        viewer: Optional[User] = None,
    ) -> Notification:
        """
        Appends a notification for one user or for everyone ("all").
        The viewer gets a popup as well when it is addressed to them.
        """
        with self.writing("notifications") as session:
            notification = self.add_notification(session, user_id, title, message, type)

        self.popups.maybe_show(notification, viewer.id if viewer else None)
        return notification

    def post_notification(self, actor: User, user_id: str, title: str, message: str,
                          type: NotificationType = NotificationType.INFO) -> Notification:
        """Manual announcement written by staff."""
        authorize(actor, Action.SEND_NOTIFICATION)
        if user_id != BROADCAST and self._snapshot.user(user_id) is None:
            raise NotFoundError(f"User not found: {user_id}")
        return self.send_notification(user_id, title, message, type, viewer=actor)

    def mark_notification_read(self, actor: User, notification_id: str) -> Notification:
        """Flips the read flag of one notification addressed to the actor."""
        authorize(actor, Action.READ_NOTIFICATION)
        with self.writing("notifications") as session:
            notification = self._get_or_404(session, Notification, notification_id, "Notification")
            if notification.user_id not in (BROADCAST, actor.id):
                raise PermissionDeniedError("Notification is addressed to another user")
            notification.read = True
            session.add(notification)
        return notification

    # =========================================
    # QUERIES
    # =========================================
    def notifications_for(self, user: User) -> List[Notification]:
        """Own and broadcast notifications, newest first."""
        return [n for n in self._snapshot.notifications if n.user_id in (BROADCAST, user.id)]

    def matches_for_round(self, round_id: str) -> List[Match]:
        return [m for m in self._snapshot.matches if m.round_id == round_id]

    def roster(self, team_id: str) -> List[Player]:
        return sorted((p for p in self._snapshot.players if p.team_id == team_id), key=lambda p: p.number)

    def matches_by_round(self, category: Category) -> List[Tuple[Optional[Round], List[Match]]]:
        """
        Matches of a category grouped by round.
        Rounds are ordered by date (undated last) then name; matches by kick-off.
        Matches whose round no longer exists are grouped last under None.
        """
        groups: Dict[Optional[str], List[Match]] = {}
        for match in self._snapshot.matches:
            if match.category != category:
                continue
            key = match.round_id if self._snapshot.round(match.round_id) else None
            groups.setdefault(key, []).append(match)

        def round_key(item):
            found = self._snapshot.round(item[0])
            if found is None:
                return (2, date_type.max, "")
            return (0 if found.date else 1, found.date or date_type.max, found.name)

        ordered = sorted(groups.items(), key=round_key)
        return [(self._snapshot.round(rid), sorted(ms, key=lambda m: m.date)) for rid, ms in ordered]

    # ---------------------------------------------
    # Aggregations over the current snapshot
    # ---------------------------------------------
    def standings(self, category: Category):
        snap = self._snapshot
        return aggregation.compute_standings(snap.teams, snap.matches, Category(category))

    def scorer_ranking(self, category: Category):
        snap = self._snapshot
        return aggregation.compute_scorer_ranking(snap.matches, snap.players, snap.teams, Category(category))

    def mvp_ranking(self, category: Category):
        snap = self._snapshot
        return aggregation.compute_mvp_ranking(snap.matches, snap.players, snap.teams, Category(category))

    def team_career(self, team_id: str):
        snap = self._snapshot
        team = snap.team(team_id)
        if team is None:
            raise NotFoundError(f"Team not found: {team_id}")
        return aggregation.compute_team_career(team, snap.matches, snap.players)
