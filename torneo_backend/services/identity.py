# identity.py
# Email/password accounts, session tokens and the User profile bound to each session.

import secrets
from typing import Dict, Optional

from passlib.context import CryptContext
from sqlmodel import Session, select

from torneo_backend.core.config import OWNER_BOOTSTRAP_EMAIL
from torneo_backend.core.errors import AuthenticationError
from torneo_backend.core.roles import Role
from torneo_backend.core.view_router import ViewRouter
from torneo_backend.models.team_model import new_id
from torneo_backend.models.user_model import Account, AuthSession, User
from torneo_backend.services.state_controller import TournamentState

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class IdentityService:
    """
    Registers and authenticates accounts, hands out session tokens and
    resolves a token to its User profile.
    Each open session keeps its own ViewRouter.
    """

    def __init__(self, state: TournamentState, owner_email: Optional[str] = OWNER_BOOTSTRAP_EMAIL):
        self.state = state
        self.engine = state.engine
        self.owner_email = normalize_email(owner_email) if owner_email else None
        self._routers: Dict[str, ViewRouter] = {}

    # === REGISTER ===
    def register(self, email: str, password: str, name: str) -> str:
        """Creates the account, its player profile and a session. Returns the token."""
        email = normalize_email(email)
        with self.state.writing("users", "notifications") as session:
            existing = session.exec(select(Account).where(Account.email == email)).first()
            if existing:
                raise AuthenticationError("Email already registered")

            uid = new_id()
            session.add(Account(uid=uid, email=email, password_hash=pwd_context.hash(password)))
            session.add(User(id=uid, email=email, name=name or "Usuario", role=Role.PLAYER))
            self.state.add_notification(session, uid, "Registro Exitoso", "Gracias por registrarte en La Masía F&C.")
            token = self._open_session(session, uid)
        self.router_for(token).reset()
        return token

    # === LOGIN ===
    def login(self, email: str, password: str) -> str:
        email = normalize_email(email)
        with Session(self.engine, expire_on_commit=False) as session:
            account = session.exec(select(Account).where(Account.email == email)).first()
            if not account or not pwd_context.verify(password, account.password_hash):
                raise AuthenticationError("Invalid credentials")

            token = self._open_session(session, account.uid)
            session.commit()
        self.router_for(token).reset()
        return token

    # === LOGOUT ===
    def logout(self, token: str) -> None:
        with Session(self.engine) as session:
            auth_session = session.get(AuthSession, token)
            if auth_session is None:
                raise AuthenticationError("Invalid session")
            session.delete(auth_session)
            session.commit()

        router = self._routers.pop(token, None)
        if router:
            router.reset()

    # === SESSION -> PROFILE ===
    def resolve(self, token: Optional[str]) -> User:
        """
        Returns the User bound to a session token.
        A missing profile is recreated with the "player" role; the bootstrap
        owner email is promoted to "owner" on every call.
        """
        if not token:
            raise AuthenticationError("Not logged in")

        changed = False
        with Session(self.engine, expire_on_commit=False) as session:
            auth_session = session.get(AuthSession, token)
            if auth_session is None:
                self._routers.pop(token, None)
                raise AuthenticationError("Invalid session")

            user = session.get(User, auth_session.uid)
            if user is None:
                account = session.get(Account, auth_session.uid)
                if account is None:
                    self._routers.pop(token, None)
                    raise AuthenticationError("Account no longer exists")
                user = User(
                    id=account.uid,
                    email=account.email,
                    name=account.email.split("@")[0] or "Usuario",
                    role=Role.PLAYER,
                )
                session.add(user)
                changed = True
                print(f"🩹 Recovered missing user profile for {account.email}")

            if self.owner_email and normalize_email(user.email) == self.owner_email and Role(user.role) != Role.OWNER:
                user.role = Role.OWNER
                session.add(user)
                changed = True

            if changed:
                session.commit()

        if changed:
            self.state.refresh("users")
        return user

    def router_for(self, token: str) -> ViewRouter:
        """The session's view router (created on first use)."""
        if token not in self._routers:
            self._routers[token] = ViewRouter()
        return self._routers[token]

    # ---------------------------------------------
    # Helpers
    # ---------------------------------------------
    def _open_session(self, session: Session, uid: str) -> str:
        token = secrets.token_urlsafe(32)
        session.add(AuthSession(token=token, uid=uid))
        return token
