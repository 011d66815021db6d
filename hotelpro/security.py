from typing import Optional
from passlib.context import CryptContext
from itsdangerous import URLSafeSerializer, BadSignature
from fastapi import Request, Depends

from .config import settings
from .deps import get_storage
from .errors import Unauthorized
from .models import User
from .storage import Storage

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
serializer = URLSafeSerializer(settings.SECRET_KEY, salt="hotelpro-auth")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


def issue_token(user_id: int) -> str:
    return serializer.dumps({"uid": user_id})


def read_token(token: str) -> Optional[int]:
    try:
        data = serializer.loads(token)
        return int(data.get("uid"))
    except (BadSignature, ValueError, TypeError):
        return None


def get_current_user_id(request: Request) -> Optional[int]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return read_token(token.strip())


def require_user(request: Request, storage: Storage = Depends(get_storage)) -> User:
    """
    Dependency for endpoints that need a logged-in user.
    Raises Unauthorized when the bearer token is missing, forged or stale.
    """
    user_id = get_current_user_id(request)
    if not user_id:
        raise Unauthorized("Not authenticated")

    user = storage.get_user(user_id)
    if not user:
        # The user was deleted but the token is still around.
        raise Unauthorized("Not authenticated")

    return user
