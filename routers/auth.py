# routers/auth.py

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from db import get_db
from models.base import utcnow
from models.user import User
from schemas.base import MessageResponse
from schemas.user import (
    DemoLoginRequest, LoginResponse,
    Preferences, PreferencesUpdate,
    UserProfile, UserResponse,
)
from utils.jwt_utils import IdentityGate, get_current_user, get_identity_gate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

DEMO_EMAIL = "demo@algodeck.com"
DEMO_NAME  = "Demo User"


def user_profile(user: User) -> UserProfile:
    return UserProfile(
        id=user.id,
        email=user.email,
        name=user.name,
        avatar=user.avatar,
        preferences=Preferences(theme=user.theme, default_view=user.default_view),
        created_at=user.created_at,
    )


@router.post("/demo-login", response_model=LoginResponse)
def demo_login(
    req: DemoLoginRequest,
    db: Session = Depends(get_db),
    gate: IdentityGate = Depends(get_identity_gate)
):
    """Development login: find or create the user by email and issue a token."""
    email = (req.email or DEMO_EMAIL).strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if not user:
        user = User(email=email, name=(req.name or DEMO_NAME).strip() or DEMO_NAME)
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("Created user %s via demo login", user.id)

    return LoginResponse(token=gate.create_access_token(user.id), user=user_profile(user))


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    return UserResponse(user=user_profile(user))


@router.patch("/preferences", response_model=UserResponse)
def update_preferences(
    req: PreferencesUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    if req.theme is not None:
        user.theme = req.theme
    if req.default_view is not None:
        user.default_view = req.default_view
    user.updated_at = utcnow()
    db.commit()
    db.refresh(user)
    return UserResponse(user=user_profile(user))


@router.post("/logout", response_model=MessageResponse)
def logout():
    # tokens are stateless; the client drops its copy
    return MessageResponse(message="Logged out successfully")
