"""
Explicit authentication context.

Services never look up the access token themselves; the HTTP layer builds an
``AuthSession`` (or ``ANONYMOUS``) from the verified request token and
threads it through every call that needs it.
"""
from dataclasses import dataclass
from typing import Optional

from flask import request
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from agency_cms.domain.errors import Unauthenticated


@dataclass(frozen=True)
class AuthSession:
    user_id: Optional[str]
    role: Optional[str] = None
    access_token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


ANONYMOUS = AuthSession(user_id=None)


def require_session(session: Optional[AuthSession], action: str = "this action") -> AuthSession:
    if session is None or not session.is_authenticated:
        raise Unauthenticated(f"User not authenticated for {action}.")
    return session


def current_session() -> AuthSession:
    """
    Build the session for the current request.

    A missing token yields ``ANONYMOUS``; a malformed or expired token is
    rejected by Flask-JWT-Extended before we get here.
    """
    if verify_jwt_in_request(optional=True) is None:
        return ANONYMOUS

    claims = get_jwt()
    return AuthSession(
        user_id=get_jwt_identity(),
        role=claims.get("role"),
        access_token=_bearer_token(),
    )


def _bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header[len("Bearer "):]
    return None
