from datetime import datetime, timezone

import jwt
from jwt.exceptions import DecodeError


def decode_jwt_token(token: str) -> dict:
    """
    Read the claims of a portal token.

    The signing secret belongs to the portal; the client only needs the
    ``id``/``role``/``exp`` claims, so the signature is not verified here.
    """
    payload = jwt.decode(
        token,
        options={"verify_signature": False, "verify_exp": False},
        algorithms=["HS256"],
    )
    if not isinstance(payload, dict):
        raise DecodeError("Token payload is not an object")
    return payload


def is_token_expired(payload: dict, now: datetime | None = None) -> bool:
    exp = payload.get("exp")
    if exp is None:
        return False
    now = now or datetime.now(timezone.utc)
    try:
        return now.timestamp() >= float(exp)
    except (TypeError, ValueError):
        return True
