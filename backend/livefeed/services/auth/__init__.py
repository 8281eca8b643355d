from .guard import Anonymous, AuthContext, Authenticated, authenticate, require_authenticated
from .service import AuthService

__all__ = [
    "Anonymous",
    "AuthContext",
    "AuthService",
    "Authenticated",
    "authenticate",
    "require_authenticated",
]
