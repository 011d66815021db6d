import logging

from fastapi import APIRouter, Depends, Request

from ..config import settings
from ..deps import get_storage
from ..errors import Conflict, Unauthorized
from ..limiter import limiter
from ..models import User, UserRole
from ..schemas import AuthOut, LoginIn, SignupIn, UserOut, UserUpdateIn, PasswordChangeIn, MessageOut
from ..security import hash_password, verify_password, issue_token, require_user
from ..storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


# ==== Auth ====

@router.post("/auth/login", response_model=AuthOut)
@limiter.limit(settings.RATE_LIMIT_AUTH_API)
def api_login(request: Request, payload: LoginIn, storage: Storage = Depends(get_storage)):
    user = storage.get_user_by_username(payload.username)
    if not user or not verify_password(payload.password, user.hashed_password):
        logger.info("Failed login for %s", payload.username)
        raise Unauthorized("Invalid credentials")
    return {"user": user, "token": issue_token(user.id)}

@router.post("/auth/signup", response_model=AuthOut, status_code=201)
@limiter.limit(settings.RATE_LIMIT_AUTH_API)
def api_signup(request: Request, payload: SignupIn, storage: Storage = Depends(get_storage)):
    if storage.get_user_by_username(payload.username):
        raise Conflict("Username already exists")
    if storage.get_user_by_email(payload.email):
        raise Conflict("Email already exists")
    user = storage.create_user(
        username=payload.username,
        email=payload.email,
        hashed_password=hash_password(payload.password),
        role=(payload.role or UserRole.MANAGER).value,
    )
    logger.info("User %s signed up as %s", user.username, user.role)
    return {"user": user, "token": issue_token(user.id)}

@router.get("/auth/me", response_model=UserOut)
def api_me(user: User = Depends(require_user)):
    return user


# ==== Users ====

def _require_self_or_admin(user: User, user_id: int):
    if user.id != user_id and user.role != UserRole.ADMIN.value:
        raise Unauthorized("Not allowed to modify this user")

@router.patch("/users/{user_id}", response_model=UserOut)
def api_update_user(user_id: int, payload: UserUpdateIn, user: User = Depends(require_user), storage: Storage = Depends(get_storage)):
    _require_self_or_admin(user, user_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "username" in changes:
        other = storage.get_user_by_username(changes["username"])
        if other and other.id != user_id:
            raise Conflict("Username already exists")
    if "email" in changes:
        other = storage.get_user_by_email(changes["email"])
        if other and other.id != user_id:
            raise Conflict("Email already exists")
    updated = storage.update_user(user_id, **changes)
    if updated is None:
        raise Unauthorized("Not allowed to modify this user")
    return updated

@router.patch("/users/{user_id}/password", response_model=MessageOut)
def api_change_password(user_id: int, payload: PasswordChangeIn, user: User = Depends(require_user), storage: Storage = Depends(get_storage)):
    _require_self_or_admin(user, user_id)
    target = storage.get_user(user_id)
    if target is None or not verify_password(payload.current_password, target.hashed_password):
        raise Unauthorized("Current password is incorrect")
    storage.update_user(user_id, hashed_password=hash_password(payload.new_password))
    return {"message": "Password changed successfully"}
