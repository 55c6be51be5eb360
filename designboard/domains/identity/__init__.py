from designboard.domains.identity.entities import User
from designboard.domains.identity.schemas import (
    UserPreferences, UserPreferencesUpdate, UserCreate, UserUpdate,
    UserResponse, SignInRequest, SessionUser, SessionResponse
)
from designboard.domains.identity.services import IdentityService

__all__ = [
    "User",
    "UserPreferences", "UserPreferencesUpdate", "UserCreate", "UserUpdate",
    "UserResponse", "SignInRequest", "SessionUser", "SessionResponse",
    "IdentityService"
]
