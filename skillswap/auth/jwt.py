"""Bearer tokens for SkillSwap sessions.

A token names the acting user in `sub` and is only accepted when it was issued
by this service (`iss`). Admin rights are not carried in the token: they are
read from the user record on every request, so a ban or demotion applies
immediately.
"""

import os
import jwt
from datetime import datetime, timedelta
from typing import Optional, Dict
from dotenv import load_dotenv

load_dotenv()

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "24"))
JWT_ISSUER = os.getenv("JWT_ISSUER", "skillswap")


def create_access_token(user_id: str, expires_in: Optional[timedelta] = None) -> str:
    """Issue a session token for `user_id`."""
    issued_at = datetime.utcnow()
    lifetime = expires_in if expires_in is not None else timedelta(hours=JWT_EXPIRATION_HOURS)
    claims = {
        "sub": user_id,
        "iss": JWT_ISSUER,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict]:
    """Return the verified claims, or None for a bad, expired or foreign token."""
    try:
        return jwt.decode(
            token,
            JWT_SECRET_KEY,
            algorithms=[JWT_ALGORITHM],
            issuer=JWT_ISSUER,
            options={"require": ["sub", "exp", "iss"]},
        )
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def get_user_id_from_token(token: str) -> Optional[str]:
    """The session's user id, or None if the token is not accepted."""
    claims = decode_access_token(token)
    if not claims:
        return None
    return claims.get("sub") or None
