# seed_all.py
# Populates an empty database with the demo tournament, with detailed logging.

from datetime import date, datetime, timezone

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from torneo_backend.core.database import engine as default_engine
from torneo_backend.core.roles import Role
from torneo_backend.models.match_model import MatchStats, ScorerTally
from torneo_backend.models import Account, Match, Player, Round, Team, User
from torneo_backend.services.identity import pwd_context

# Demo accounts share this password
SEED_PASSWORD = "lamasia2023"

TEAMS = [
    ("t1", "Los Rayos", "MASCULINO", "bg-blue-600"),
    ("t2", "Halcones", "MASCULINO", "bg-red-600"),
    ("t3", "Guerreras", "FEMENINO_A", "bg-purple-600"),
    ("t4", "Amazonas", "FEMENINO_A", "bg-green-600"),
    ("t5", "Estrellas", "FEMENINO_B", "bg-yellow-500"),
    ("t6", "Cometas", "FEMENINO_B", "bg-pink-500"),
]

USERS = [
    ("u1", "admin@torneo.com", "Admin", Role.OWNER, None),
    ("u2", "encargado@torneo.com", "Mesa", Role.MANAGER, None),
    ("u3", "capitan@rayos.com", "Capitán", Role.CAPTAIN, "t1"),
]

PLAYERS = [
    ("p1", "Juan Perez", 10, "t1"),
    ("p2", "Pedro Gomez", 9, "t1"),
    ("p3", "Luis Diaz", 7, "t2"),
]


def seed_all(bind: Engine = default_engine) -> bool:
    """Seeds the demo data unless teams already exist. Returns True if seeded."""
    with Session(bind) as session:
        if session.exec(select(Team)).first():
            print("✅ Database already seeded. Skipping auto-seed.")
            return False

        print("\n🌱 Starting demo tournament seeding...\n")

        print("➡️  Step 1: Seeding teams...")
        for team_id, name, category, color in TEAMS:
            session.add(Team(id=team_id, name=name, category=category, logo_color=color))

        print("➡️  Step 2: Seeding rounds...")
        session.add(Round(id="r1", name="Fecha 1", date=date(2023, 11, 10)))

        print("➡️  Step 3: Seeding matches...")
        played = MatchStats(
            home_score=2,
            away_score=1,
            scorers=[ScorerTally(player_id="p1", count=2), ScorerTally(player_id="p3", count=1)],
            mvp_player_id="p1",
            is_played=True,
        )
        fixtures = [
            ("m1", "MASCULINO", datetime(2023, 11, 10, 18, 0, tzinfo=timezone.utc), "t1", "t2", played),
            ("m2", "FEMENINO_A", datetime(2023, 11, 10, 19, 30, tzinfo=timezone.utc), "t3", "t4", MatchStats()),
            ("m3", "FEMENINO_B", datetime(2023, 11, 11, 16, 0, tzinfo=timezone.utc), "t5", "t6", MatchStats()),
        ]
        for match_id, category, kickoff, home_id, away_id, stats in fixtures:
            session.add(Match(id=match_id, round_id="r1", category=category, date=kickoff,
                              home_team_id=home_id, away_team_id=away_id, stats=stats.model_dump()))

        print("➡️  Step 4: Seeding players...")
        goals = {tally.player_id: tally.count for tally in played.scorers}
        for player_id, name, number, team_id in PLAYERS:
            session.add(Player(id=player_id, name=name, number=number, team_id=team_id, goals=goals.get(player_id, 0)))

        print("➡️  Step 5: Seeding users...")
        password_hash = pwd_context.hash(SEED_PASSWORD)
        for user_id, email, name, role, team_id in USERS:
            session.add(Account(uid=user_id, email=email, password_hash=password_hash))
            session.add(User(id=user_id, email=email, name=name, role=role, team_id=team_id))

        session.commit()

    print("\n✅ Demo tournament seeding complete.\n")
    return True


if __name__ == "__main__":
    from torneo_backend.core.database import init_db

    init_db()
    seed_all()
