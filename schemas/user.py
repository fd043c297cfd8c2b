# schemas/user.py

from datetime import datetime
from typing import Literal, Optional

from schemas.base import CamelModel


class DemoLoginRequest(CamelModel):
    email: Optional[str] = None
    name: Optional[str] = None


class Preferences(CamelModel):
    theme: Literal["light", "dark", "auto"] = "auto"
    default_view: Literal["dashboard", "notes", "questions"] = "dashboard"


class PreferencesUpdate(CamelModel):
    theme: Optional[Literal["light", "dark", "auto"]] = None
    default_view: Optional[Literal["dashboard", "notes", "questions"]] = None


class UserProfile(CamelModel):
    id: int
    email: str
    name: str
    avatar: Optional[str] = None
    preferences: Preferences
    created_at: datetime


class UserResponse(CamelModel):
    success: bool = True
    user: UserProfile


class LoginResponse(CamelModel):
    success: bool = True
    token: str
    user: UserProfile
