"""
Credentials for the posts API: bcrypt password hashes and signed access
tokens whose subject is the author id stamped on new posts.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import bcrypt
import jwt

from src.core.config import settings

TOKEN_TYPE = "access"


class AuthSecurityError(RuntimeError):
    """A credential could not be hashed, issued or verified."""

    pass


def hash_password(plain_password: str) -> str:
    if not plain_password:
        raise AuthSecurityError("Cannot hash an empty password.")
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(plain_password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    """True only when the password matches a well-formed stored hash."""
    if not plain_password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def build_access_token(*, user_id: int, username: str) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "username": username,
        "type": TOKEN_TYPE,
        "iat": now,
        "exp": now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    if not token or not token.strip():
        raise AuthSecurityError("Access token is empty.")

    try:
        claims = jwt.decode(
            token.strip(), settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthSecurityError("Access token has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    if claims.get("type") != TOKEN_TYPE:
        raise AuthSecurityError("Token is not an access token.")
    return claims


def principal_id_from_token(token: str) -> int:
    """Author id carried by a valid access token."""
    subject = str(decode_access_token(token).get("sub") or "")
    if not subject.isdigit():
        raise AuthSecurityError("Access token has no user id.")
    return int(subject)
