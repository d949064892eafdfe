"""
Authentication routes: register, login, logout and the current session.
"""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
import logging

from ..database import get_db
from .. import schemas
from ..auth import (
    SessionManager,
    authenticate_user,
    get_current_user,
    get_session_manager,
)
from ..exceptions import AuthError, ValidationError
from ..services import register_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/register", response_model=schemas.UserResponse)
def register(
    payload: schemas.RegisterRequest,
    response: Response,
    db: Session = Depends(get_db),
    sessions: SessionManager = Depends(get_session_manager),
):
    """
    Register a new user and start a session for them.

    - **username**: unique login name
    - **password**: stored as a bcrypt hash
    - **name**: display name
    """
    if not payload.username or not payload.password or not payload.name:
        raise ValidationError("Username, password and name are required")

    db_user = register_user(db, payload.username, payload.password, payload.name)
    user = schemas.SessionUser.model_validate(db_user)
    sessions.create(response, user)
    return {"user": user}


@router.post("/login", response_model=schemas.UserResponse)
def login(
    payload: schemas.LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    sessions: SessionManager = Depends(get_session_manager),
):
    """
    Log in with username and password. The session is returned as an
    HTTP-only cookie.
    """
    if not payload.username or not payload.password:
        raise ValidationError("Username and password are required")

    db_user = authenticate_user(db, payload.username, payload.password)
    if not db_user:
        logger.info("Failed login for %s", payload.username)
        raise AuthError("Invalid username or password")

    user = schemas.SessionUser.model_validate(db_user)
    sessions.create(response, user)
    return {"user": user}


@router.post("/logout", response_model=schemas.SuccessResponse)
def logout(
    response: Response,
    sessions: SessionManager = Depends(get_session_manager),
):
    """
    Clear the session cookie. The token itself stays valid until it expires.
    """
    sessions.destroy(response)
    return {"success": True}


@router.get("/me", response_model=schemas.UserResponse)
def get_current_user_info(current_user: schemas.SessionUser = Depends(get_current_user)):
    """
    Get the user identified by the session cookie.
    """
    return {"user": current_user}
