# auth_routes.py
# Registration, login and logout against the local identity store.

from fastapi import APIRouter, Depends

from torneo_backend.models.requests import LoginRequest, RegisterRequest
from torneo_backend.models.user_model import User
from torneo_backend.routes.deps import get_current_user, get_identity, get_token
from torneo_backend.routes.payloads import user_payload
from torneo_backend.services.identity import IdentityService

router = APIRouter()


# === REGISTER ===
@router.post("/register")
def register(data: RegisterRequest, identity: IdentityService = Depends(get_identity)):
    token = identity.register(data.email, data.password, data.name)
    user = identity.resolve(token)
    return {"message": "User registered", "token": token, "user": user_payload(user)}


# === LOGIN ===
@router.post("/login")
def login(data: LoginRequest, identity: IdentityService = Depends(get_identity)):
    token = identity.login(data.email, data.password)
    user = identity.resolve(token)
    return {"message": "Login successful", "token": token, "user": user_payload(user)}


# === LOGOUT ===
@router.post("/logout")
def logout(token: str = Depends(get_token), identity: IdentityService = Depends(get_identity)):
    identity.logout(token)
    return {"message": "Logged out"}


@router.get("/me")
def me(
    user: User = Depends(get_current_user),
    token: str = Depends(get_token),
    identity: IdentityService = Depends(get_identity),
):
    return {"user": user_payload(user), "view": identity.router_for(token).as_dict()}
