"""
Authentication router — email/password sign-up and sign-in + JWT cookie.

Endpoints:
    POST /auth/signup   → create an account
    POST /auth/signin   → verify credentials, set the auth cookie
    POST /auth/signout  → clear the auth cookie
    GET  /auth/me       → the signed-in user
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.errors import AuthRequired
from app.models.user import User
from app.schemas.user import Credentials, UserEnvelope, UserOut
from app.services.accounts import authenticate, register_user
from app.services.security import create_access_token, decode_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

COOKIE_KEY = "auth-token"


# ═══════════════════════════════════════════════════════════════
#  Helpers
# ═══════════════════════════════════════════════════════════════

def _set_auth_cookie(response: Response, user_id: str) -> Response:
    """Attach the JWT cookie to a response."""
    token = create_access_token(user_id)
    response.set_cookie(
        key=COOKIE_KEY,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="strict",
        path="/",
    )
    return response


def _read_token(request: Request) -> Optional[str]:
    """Token from the auth cookie, else from an ``Authorization: Bearer`` header."""
    token = request.cookies.get(COOKIE_KEY)
    if token:
        return token
    scheme, _, credentials = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """
    Decode the JWT from the cookie (or bearer header) and return the User.
    Returns None when no valid token is present.
    """
    token = _read_token(request)
    if not token:
        return None
    try:
        user_id = decode_access_token(token)
    except AuthRequired:
        return None
    return await db.get(User, user_id)


async def require_user(
    request: Request,
    current_user: Optional[User] = Depends(get_current_user),
) -> User:
    """Like get_current_user, but anonymous callers and bad tokens get a 401."""
    if current_user is None:
        if _read_token(request):
            raise AuthRequired("Invalid authentication token")
        raise AuthRequired()
    return current_user


# ═══════════════════════════════════════════════════════════════
#  Routes
# ═══════════════════════════════════════════════════════════════

@router.post("/signup", response_model=UserEnvelope)
async def signup(data: Credentials, db: AsyncSession = Depends(get_db)):
    """Create a new account. Does not sign the user in."""
    user = await register_user(db, data.email, data.password)
    return {"user": UserOut.model_validate(user)}


@router.post("/signin", response_model=UserEnvelope)
async def signin(
    data: Credentials,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Verify credentials and set the auth cookie."""
    user = await authenticate(db, data.email, data.password)
    _set_auth_cookie(response, user.id)
    logger.info("User %s signed in", user.id)
    return {"user": UserOut.model_validate(user)}


@router.post("/signout")
async def signout(response: Response):
    """Clear the auth cookie."""
    response.delete_cookie(key=COOKIE_KEY, path="/")
    return {"message": "Signed out successfully"}


@router.get("/me", response_model=UserOut)
async def read_me(current_user: User = Depends(require_user)):
    """Return the authenticated user."""
    return current_user
