import secrets
from typing import Optional

from fastapi import Header, Request

from cms_api.core.errors import UnauthorizedError


def extract_bearer_token(authorization: Optional[str]) -> str:
    # "Bearer <token>" uniquement
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError("Bearer token required in Authorization header")
    return authorization[len("Bearer "):]


def verify_bearer_token(token: str, expected: str) -> bool:
    """Comparaison exacte du token avec le secret configuré"""
    if not expected:
        return False
    return secrets.compare_digest(token.encode(), expected.encode())


def require_bearer_token(request: Request, authorization: Optional[str] = Header(None)) -> str:
    token = extract_bearer_token(authorization)
    if not verify_bearer_token(token, request.app.state.settings.API_BEARER_TOKEN):
        raise UnauthorizedError("Invalid bearer token")
    return token
