import jwt
from typing import Optional
from group_ledger.config import get_settings


def decode_access_token(token: str) -> Optional[dict]:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def get_viewer_id(token: str) -> Optional[str]:
    """Extract the viewing member's id from the user_id claim of a JWT"""
    payload = decode_access_token(token)
    if not payload:
        return None
    return payload.get("user_id")
