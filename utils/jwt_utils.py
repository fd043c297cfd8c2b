# utils/jwt_utils.py

import os
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from fastapi import HTTPException, Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from models.user import User
from db import get_db

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/demo-login", auto_error=False)


@dataclass(frozen=True)
class IdentityGate:
    """
    Issues and verifies bearer tokens carrying the owner id.

    Built once at process start by :func:`init_identity_gate` and kept on
    ``app.state``; request handlers only read it.
    """
    secret_key: str
    expire_minutes: int
    algorithm: str = ALGORITHM

    def create_access_token(self, user_id: int, expires_delta: timedelta | None = None) -> str:
        """Encode the user id as `sub`; falls back to expire_minutes."""
        if expires_delta is None:
            expires_delta = timedelta(minutes=self.expire_minutes)
        expire = datetime.now(timezone.utc) + expires_delta
        payload = {
            "sub": str(user_id),
            "exp": expire
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def owner_id_from_token(self, token: str) -> int | None:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None
        sub = payload.get("sub")
        if not sub or not str(sub).isdigit():
            return None
        return int(sub)


def init_identity_gate(secret_key: str | None = None, expire_minutes: int | None = None) -> IdentityGate:
    if secret_key is None:
        secret_key = os.getenv("SECRET_KEY", "change_this_in_production")
    if expire_minutes is None:
        # 7 days unless configured
        expire_minutes = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "10080"))
    if secret_key == "change_this_in_production":
        logger.warning("SECRET_KEY is not set; using the development default")
    logger.info("Identity gate ready (token lifetime %d minutes)", expire_minutes)
    return IdentityGate(secret_key=secret_key, expire_minutes=expire_minutes)


def get_identity_gate(request: Request) -> IdentityGate:
    return request.app.state.identity_gate


async def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    gate: IdentityGate = Depends(get_identity_gate),
    db: Session = Depends(get_db)
) -> User:
    """
    Authorization: Bearer <token>
    """
    credentials_exception = HTTPException(
        status_code=401,
        detail="Access token required" if not token else "Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not token:
        raise credentials_exception

    user_id = gate.owner_id_from_token(token)
    if user_id is None:
        raise credentials_exception

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise credentials_exception
    return user
