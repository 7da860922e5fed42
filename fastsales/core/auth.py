# fastsales/core/auth.py

import uuid
from dataclasses import dataclass

from fastapi import Depends, HTTPException, status

from fastsales.core.jwt import decode_staff_token
from fastsales.core.oauth2 import oauth2_scheme


@dataclass(frozen=True)
class StaffIdentity:
    staff_id: uuid.UUID


def get_current_staff(
    token: str = Depends(oauth2_scheme),
) -> StaffIdentity:
    payload = decode_staff_token(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    staff_id = payload.get("sub")

    if staff_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    # The auth layer is trusted, only the shape of the id is checked
    try:
        return StaffIdentity(staff_id=uuid.UUID(str(staff_id)))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )
