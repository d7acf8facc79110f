"""JWT verification for tokens issued by the sign-in provider."""

from typing import Dict, Any
from jose import JWTError, jwt

from src.core.config import settings


def verify_token(token: str) -> Dict[str, Any]:
    """Verify and decode a JWT. Raises JWTError when invalid or expired."""
    return jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.ALGORITHM]
    )


def get_token_user_id(token: str) -> int:
    """Lab user ID carried in the token subject."""
    payload = verify_token(token)
    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        raise JWTError("Token subject is not a lab user ID")
