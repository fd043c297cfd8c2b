from .api import ApiClient, ApiError, ApiUnavailableError
from .auth import AuthSession, SessionStatus
from .data import DataCache, DegradedSessionError

__all__ = [
    "ApiClient", "ApiError", "ApiUnavailableError",
    "AuthSession", "SessionStatus",
    "DataCache", "DegradedSessionError",
]
