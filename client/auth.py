"""Client-side session state on top of the identity gate."""
import enum
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from client.api import ApiClient, ApiUnavailableError

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@algodeck.com"
DEMO_NAME = "Demo User"


class SessionStatus(enum.Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"
    # backend unreachable at login; the user is fabricated locally and
    # nothing may be synced against the store
    DEGRADED = "degraded"


class AuthSession:
    def __init__(self, api: ApiClient):
        self.api = api
        self.user: Optional[Dict[str, Any]] = None
        self.status = SessionStatus.ANONYMOUS

    @property
    def is_authenticated(self) -> bool:
        return self.status is not SessionStatus.ANONYMOUS

    @property
    def is_backed(self) -> bool:
        """True only when the session is backed by the real store."""
        return self.status is SessionStatus.AUTHENTICATED

    @property
    def token(self) -> Optional[str]:
        return self.api.token

    def _authenticated(self, token: str, user: Dict[str, Any]) -> Dict[str, Any]:
        self.api.token = token
        self.user = user
        self.status = SessionStatus.AUTHENTICATED
        return user

    def _reset(self):
        self.api.token = None
        self.user = None
        self.status = SessionStatus.ANONYMOUS

    async def login(self, email: Optional[str] = None, name: Optional[str] = None) -> Dict[str, Any]:
        try:
            data = await self.api.demo_login(email or DEMO_EMAIL, name or DEMO_NAME)
        except ApiUnavailableError:
            logger.warning("Backend unreachable, continuing with a degraded local session")
            self.api.token = None
            self.user = {
                "id": f"local_user_{int(time.time() * 1000)}",
                "name": name or DEMO_NAME,
                "email": email or DEMO_EMAIL,
                "avatar": None,
                "createdAt": datetime.now(timezone.utc).isoformat(),
            }
            self.status = SessionStatus.DEGRADED
            return self.user
        return self._authenticated(data["token"], data["user"])

    async def login_with_token(self, token: str) -> Dict[str, Any]:
        """Adopt a token issued elsewhere (e.g. an OAuth callback)."""
        self.api.token = token
        try:
            data = await self.api.get_me()
        except Exception:
            logger.warning("Token login failed")
            self._reset()
            raise
        return self._authenticated(token, data["user"])

    async def logout(self):
        if self.is_backed:
            try:
                await self.api.logout()
            except Exception as exc:
                # the local session ends regardless
                logger.warning("Logout request failed: %s", exc)
        self._reset()

    async def update_preferences(self, **preferences) -> Dict[str, Any]:
        data = await self.api.update_preferences(**preferences)
        self.user = data["user"]
        return self.user
