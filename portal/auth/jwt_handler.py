from datetime import datetime, timedelta, timezone

import jwt

from portal.core import config

def create_session_token(session_id: str, expires_minutes: int | None = None) -> str:
    expire_minutes = expires_minutes or config.SESSION_EXPIRES_MINUTES
    expire = datetime.now(timezone.utc) + timedelta(minutes=expire_minutes)
    payload = {"sub": session_id, "exp": expire, "iat": datetime.now(timezone.utc)}
    return jwt.encode(payload, config.SESSION_SECRET_KEY, algorithm=config.SESSION_ALGORITHM)


def decode_session_token(token: str) -> str | None:
    try:
        payload = jwt.decode(token, config.SESSION_SECRET_KEY, algorithms=[config.SESSION_ALGORITHM])
    except jwt.PyJWTError:
        return None
    session_id = payload.get("sub")
    return session_id if isinstance(session_id, str) and session_id else None
