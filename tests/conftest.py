"""Pytest configuration and fixtures for the tournament backend tests."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from torneo_backend.core.database import init_db
from torneo_backend.core.roles import Role
from torneo_backend.models import Account, Match, MatchStats, Player, Round, ScorerTally, Team, User
from torneo_backend.services.identity import IdentityService, pwd_context
from torneo_backend.services.state_controller import TournamentState

TEST_PASSWORD = "secret123"


# ---------------------------------------------
# Plain builders (no database needed)
# ---------------------------------------------
def make_team(team_id, category="MASCULINO", name=None):
    return Team(id=team_id, name=name or team_id, category=category, logo_color="bg-blue-600")


def make_player(player_id, team_id, number=1, name=None):
    return Player(id=player_id, name=name or player_id, number=number, team_id=team_id, goals=0)


def make_match(match_id, home, away, home_score=0, away_score=0, played=True,
               category="MASCULINO", scorers=None, mvp=None, round_id="r1"):
    stats = MatchStats(
        home_score=home_score,
        away_score=away_score,
        scorers=[ScorerTally(player_id=pid, count=count) for pid, count in (scorers or [])],
        mvp_player_id=mvp,
        is_played=played,
    )
    return Match(
        id=match_id,
        round_id=round_id,
        category=category,
        date=datetime(2023, 11, 10, 18, 0, tzinfo=timezone.utc),
        home_team_id=home,
        away_team_id=away,
        stats=stats.model_dump(),
    )


# ---------------------------------------------
# Database-backed fixtures
# ---------------------------------------------
@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test."""
    bind = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind)
    yield bind
    bind.dispose()


@pytest.fixture
def state(engine):
    return TournamentState(engine)


@pytest.fixture
def identity(state):
    return IdentityService(state, owner_email="boss@torneo.com")


@pytest.fixture
def add_user(engine, state):
    """Inserts a user (with an account) directly and returns it."""

    def _add_user(user_id, role=Role.PLAYER, team_id=None, email=None):
        email = email or f"{user_id}@torneo.com"
        user = User(id=user_id, email=email, name=user_id, role=role, team_id=team_id)
        with Session(engine, expire_on_commit=False) as session:
            session.add(Account(uid=user_id, email=email, password_hash=pwd_context.hash(TEST_PASSWORD)))
            session.add(user)
            session.commit()
        state.refresh("users")
        return user

    return _add_user


@pytest.fixture
def owner(add_user):
    return add_user("owner", Role.OWNER)


@pytest.fixture
def manager(add_user):
    return add_user("manager", Role.MANAGER)


@pytest.fixture
def tournament(engine, state):
    """Two MASCULINO teams, one FEMENINO_A team, one round and two players."""
    with Session(engine) as session:
        session.add(make_team("t1", "MASCULINO", "Los Rayos"))
        session.add(make_team("t2", "MASCULINO", "Halcones"))
        session.add(make_team("t3", "FEMENINO_A", "Guerreras"))
        session.add(Round(id="r1", name="Fecha 1"))
        session.add(make_player("p1", "t1", 10, "Juan Perez"))
        session.add(make_player("p2", "t2", 9, "Luis Diaz"))
        session.commit()
    state.refresh()
    return state


@pytest.fixture
def app(engine):
    from torneo_backend.main import create_app

    return create_app(bind=engine, auto_seed=False)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client, app, add_user):
    """Creates a user with the given role and returns its session headers."""

    def _login(user_id, role=Role.PLAYER, team_id=None):
        user = add_user(user_id, role, team_id)
        app.state.tournament.refresh("users")
        response = client.post("/auth/login", json={"email": user.email, "password": TEST_PASSWORD})
        assert response.status_code == 200, response.text
        return {"X-Session-Token": response.json()["token"]}

    return _login


@pytest.fixture
def seeded_client(client, app, engine):
    """Client whose store holds the same data as the `tournament` fixture."""
    with Session(engine) as session:
        session.add(make_team("t1", "MASCULINO", "Los Rayos"))
        session.add(make_team("t2", "MASCULINO", "Halcones"))
        session.add(make_team("t3", "FEMENINO_A", "Guerreras"))
        session.add(Round(id="r1", name="Fecha 1"))
        session.add(make_player("p1", "t1", 10, "Juan Perez"))
        session.add(make_player("p2", "t2", 9, "Luis Diaz"))
        session.commit()
    app.state.tournament.refresh()
    return client
