import logging
from datetime import UTC, datetime, timedelta
from typing import Annotated

import jwt
from fastapi import Cookie, Depends, Header, HTTPException, status

from court_admin.config import JWT_ALGORITHM, JWT_EXPIRY_DAYS, JWT_SECRET
from court_admin.models import AdminInfo

logger = logging.getLogger(__name__)


# ── JWT ────────────────────────────────────────────────────────────────────


def create_jwt(admin_id: int, admin_name: str) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": str(admin_id),
        "name": admin_name,
        "iat": now,
        "exp": now + timedelta(days=JWT_EXPIRY_DAYS),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


async def get_current_admin(
    authorization: Annotated[str | None, Header()] = None,
    session: Annotated[str | None, Cookie()] = None,
) -> AdminInfo:
    token = _bearer_token(authorization) or session
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required.",
        )

    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired. Please log in again.",
        ) from None
    except jwt.PyJWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid session. Please log in again.",
        ) from None

    sub = payload.get("sub")
    name = payload.get("name")
    try:
        admin_id = int(sub)
    except (TypeError, ValueError):
        admin_id = None
    if admin_id is None or not name:
        logger.warning("Rejected token with malformed claims: sub=%r", sub)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload.",
        )

    return AdminInfo(admin_id=admin_id, admin_name=name)


CurrentAdmin = Annotated[AdminInfo, Depends(get_current_admin)]
