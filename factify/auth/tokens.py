from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from flask import current_app

ALGORITHM = "HS256"


def generate_jwt_token(user) -> str:
    """Mint a signed, short-lived bearer token carrying the user's identity claims."""
    if user is None or user.id is None:
        raise ValueError("A persisted user is required to generate a JWT token")

    cfg = current_app.config
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user.id),
        "nameid": user.id,
        "unique_name": user.username,
        "email": user.email,
        "iss": cfg["JWT_ISSUER"],
        "aud": cfg["JWT_AUDIENCE"],
        "iat": now,
        "exp": now + timedelta(minutes=cfg["JWT_EXPIRES_MINUTES"]),
    }
    return jwt.encode(payload, cfg["JWT_SECRET_KEY"], algorithm=ALGORITHM)


def decode_jwt_token(token: str) -> Optional[dict]:
    """Decode and validate a bearer token. Returns None when it is invalid or expired."""
    cfg = current_app.config
    try:
        return jwt.decode(
            token,
            cfg["JWT_SECRET_KEY"],
            algorithms=[ALGORITHM],
            audience=cfg["JWT_AUDIENCE"],
            issuer=cfg["JWT_ISSUER"],
            leeway=cfg["JWT_LEEWAY_SECONDS"],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        current_app.logger.info("Rejected expired token")
        return None
    except jwt.InvalidTokenError as e:
        current_app.logger.info(f"Rejected invalid token: {e}")
        return None
