"""
Mots de passe et jetons / Passwords and tokens.
bcrypt pour les mots de passe, JWT signe (python-jose) pour les sessions.
bcrypt for passwords, signed JWTs (python-jose) for sessions.
"""

from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from fleetledger.config import settings

ACCESS = "access"
REFRESH = "refresh"

# bcrypt ignore ou refuse au-dela de 72 octets / bcrypt ignores or rejects past 72 bytes
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        # Hash illisible / Unreadable hash
        return False


def _issue(user_id: int, token_type: str, lifetime: timedelta) -> str:
    now = datetime.now(timezone.utc)
    claims = {"sub": str(user_id), "type": token_type, "iat": now, "exp": now + lifetime}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_access_token(user_id: int) -> str:
    return _issue(user_id, ACCESS, timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))


def create_refresh_token(user_id: int) -> str:
    return _issue(user_id, REFRESH, timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))


def decode_token(token: str, expected_type: str | None = None) -> int | None:
    """Identifiant utilisateur d'un jeton valide, sinon None / User id of a valid token, else None.

    ``expected_type`` rejette un refresh token presente comme access token, et inversement.
    ``expected_type`` rejects a refresh token presented as an access token, and vice versa.
    """
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
    if expected_type is not None and claims.get("type") != expected_type:
        return None
    try:
        return int(claims["sub"])
    except (KeyError, TypeError, ValueError):
        return None
