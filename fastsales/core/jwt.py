# fastsales/core/jwt.py

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from fastsales.core.config import settings

TOKEN_TYPE = "access"


def create_staff_token(staff_id: uuid.UUID, expires_delta: Optional[timedelta] = None) -> str:
    """Bearer token for one staff member.

    Production tokens come from the staff login service. This is the same
    format, used by tooling and tests.
    """
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    claims = {
        "sub": str(staff_id),
        "type": TOKEN_TYPE,
        "exp": datetime.now(timezone.utc) + lifetime,
    }

    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_staff_token(token: str) -> Optional[dict]:
    # Bad signature, expiry and wrong token type all read as "no identity"
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

    if claims.get("type") != TOKEN_TYPE:
        return None

    return claims
