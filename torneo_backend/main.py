from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from torneo_backend.core.config import AUTO_SEED
from torneo_backend.core.database import engine, init_db
from torneo_backend.core.errors import (
    AuthenticationError,
    NotFoundError,
    PermissionDeniedError,
    TournamentError,
    ValidationError,
)
from torneo_backend.seed.seed_all import seed_all
from torneo_backend.services.identity import IdentityService
from torneo_backend.services.state_controller import TournamentState

# --- Routers ---
from torneo_backend.routes.auth_routes import router as auth_router
from torneo_backend.routes.team_routes import router as team_router
from torneo_backend.routes.round_routes import router as round_router
from torneo_backend.routes.match_routes import router as match_router
from torneo_backend.routes.player_routes import router as player_router
from torneo_backend.routes.user_routes import router as user_router
from torneo_backend.routes.notification_routes import router as notification_router
from torneo_backend.routes.standings_routes import router as standings_router
from torneo_backend.routes.view_routes import router as view_router

# Domain error -> HTTP status
STATUS_CODES = {
    AuthenticationError: 401,
    PermissionDeniedError: 403,
    NotFoundError: 404,
    ValidationError: 400,
}


def create_app(bind: Engine = engine, auto_seed: bool = AUTO_SEED) -> FastAPI:
    app = FastAPI(title="La Masía F&C")

    # 1️⃣ Init DB tables
    init_db(bind)

    # 2️⃣ Shared services
    app.state.tournament = TournamentState(bind)
    app.state.identity = IdentityService(app.state.tournament)

    @app.on_event("startup")
    def on_startup():
        # 3️⃣ Auto-seed an empty DB
        if auto_seed and seed_all(bind):
            app.state.tournament.refresh()
        print("✅ Tournament state loaded.")

    @app.exception_handler(TournamentError)
    async def tournament_error_handler(request: Request, exc: TournamentError):
        status_code = next((code for cls, code in STATUS_CODES.items() if isinstance(exc, cls)), 400)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    # Routers
    app.include_router(auth_router, prefix="/auth", tags=["Auth"])
    app.include_router(team_router, prefix="/teams", tags=["Teams"])
    app.include_router(round_router, prefix="/rounds", tags=["Rounds"])
    app.include_router(match_router, prefix="/matches", tags=["Matches"])
    app.include_router(player_router, prefix="/players", tags=["Players"])
    app.include_router(user_router, prefix="/users", tags=["Users"])
    app.include_router(notification_router, prefix="/notifications", tags=["Notifications"])
    app.include_router(standings_router, prefix="/standings", tags=["Standings"])
    app.include_router(view_router, prefix="/views", tags=["Views"])

    return app


def __getattr__(name: str):
    # `uvicorn torneo_backend.main:app`: built on first access, not at import
    if name == "app":
        app = create_app()
        globals()["app"] = app
        return app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
