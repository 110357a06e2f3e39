from sqlmodel import SQLModel, create_engine
from sqlalchemy.engine import Engine

from torneo_backend.core.config import DATABASE_URL, DB_ECHO

# --- Engine ---
engine = create_engine(
    DATABASE_URL,
    echo=DB_ECHO,
    connect_args={"check_same_thread": False},
)


# --- Initialize DB tables ---
def init_db(bind: Engine = engine) -> None:
    """Create tables if they don't exist."""
    # Make sure every table is registered on the metadata
    from torneo_backend import models  # noqa: F401

    SQLModel.metadata.create_all(bind)
