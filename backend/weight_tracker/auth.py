"""
Password hashing and cookie-based sessions.

A session is a JWT signed with ``SECRET_KEY`` carrying ``{id, username, name}``
with a fixed expiry. Nothing is stored server side: there is no rotation, no
refresh on access and no revocation list, so a leaked token stays valid until
it expires. Logging out only removes the cookie from the client.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request, Response
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from . import models, schemas
from .config import Settings
from .exceptions import AuthError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unrecognised or corrupt hash in the database
        logger.warning("Stored password hash could not be verified")
        return False


def authenticate_user(db: Session, username: str, password: str) -> Optional[models.User]:
    """Return the user if the credentials match, otherwise None."""
    user = db.query(models.User).filter(models.User.username == username).first()
    if not user:
        return None
    if not verify_password(password, user.password):
        return None
    return user


class SessionManager:
    """Issues, reads and clears the session cookie."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def cookie_name(self) -> str:
        return self.settings.session_cookie_name

    def encode(self, user: schemas.SessionUser, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(user.id),
            "username": user.username,
            "name": user.name,
            "iat": issued_at,
            "exp": issued_at + timedelta(days=self.settings.session_expire_days),
        }
        return jwt.encode(claims, self.settings.secret_key, algorithm=self.settings.algorithm)

    def decode(self, token: str) -> Optional[schemas.SessionUser]:
        """Identity carried by the token, or None if it is expired, tampered or malformed."""
        try:
            payload = jwt.decode(token, self.settings.secret_key, algorithms=[self.settings.algorithm])
            return schemas.SessionUser(
                id=int(payload["sub"]),
                username=payload["username"],
                name=payload["name"],
            )
        except (JWTError, KeyError, TypeError, ValueError):
            return None

    def create(self, response: Response, user: schemas.SessionUser) -> str:
        token = self.encode(user)
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=self.settings.session_max_age,
            path="/",
            httponly=True,
            secure=self.settings.cookie_secure,
            samesite="lax",
        )
        return token

    def read(self, request: Request) -> Optional[schemas.SessionUser]:
        token = request.cookies.get(self.cookie_name)
        if not token:
            return None
        return self.decode(token)

    def destroy(self, response: Response) -> None:
        response.delete_cookie(
            key=self.cookie_name,
            path="/",
            httponly=True,
            secure=self.settings.cookie_secure,
            samesite="lax",
        )


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def get_optional_user(
    request: Request,
    sessions: SessionManager = Depends(get_session_manager),
) -> Optional[schemas.SessionUser]:
    return sessions.read(request)


def get_current_user(
    user: Optional[schemas.SessionUser] = Depends(get_optional_user),
) -> schemas.SessionUser:
    """
    FastAPI dependency - the user identified by the session cookie.
    Raises AuthError (401) if the cookie is missing or invalid.
    """
    if user is None:
        raise AuthError("Not authenticated")
    return user
