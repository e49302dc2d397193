"""JWT issuance and verification using python-jose."""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from agrousers.domain.identity.exceptions import InvalidToken

ALGORITHM = "HS256"
TOKEN_LIFETIME = timedelta(hours=1)


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def issue_token(
    claims: dict[str, Any],
    secret: str,
    issuer: str,
    audience: str,
    now: datetime | None = None,
    lifetime: timedelta = TOKEN_LIFETIME,
    algorithm: str = ALGORITHM,
) -> IssuedToken:
    """Sign ``claims`` into a JWT valid from ``now`` for ``lifetime``.

    No random claims are added, so identical inputs produce identical tokens.
    """
    issued_at = now or _utcnow()
    expires_at = issued_at + lifetime

    payload: dict[str, Any] = {
        **claims,
        "iss": issuer,
        "aud": audience,
        "iat": issued_at,
        "exp": expires_at,
    }
    token = jwt.encode(payload, secret, algorithm=algorithm)
    return IssuedToken(token=token, expires_at=expires_at)


def decode_token(
    token: str,
    secret: str,
    issuer: str,
    audience: str,
    algorithm: str = ALGORITHM,
) -> dict[str, Any]:
    """Verify signature, issuer, audience and expiry. Raises InvalidToken on failure."""
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            issuer=issuer,
            audience=audience,
        )
    except JWTError as exc:
        raise InvalidToken() from exc
