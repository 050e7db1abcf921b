"""Who is shopping: a signed-in customer or a guest holding a cookie token.

The identity gateway in front of this service authenticates customers and
forwards their id in ``X-User-Id``. Anyone else is a guest, recognised by an
opaque token kept in a long-lived cookie that is minted on first contact.
"""

import secrets

from fastapi import Request, Response

from carts import settings
from carts.errors import InvalidOwner
from carts.owner import CartOwner
from carts.utils.logging import get_logger

logger = get_logger(__name__)

USER_HEADER = "X-User-Id"


def mint_guest_token() -> str:
    return secrets.token_urlsafe(24)


def guest_token(request: Request) -> str | None:
    """The guest cookie's token, or None when it is missing or not one we could have minted."""
    token = request.cookies.get(settings.guest_cookie_name()) or None
    if token is None:
        return None
    try:
        CartOwner.guest(token)
    except InvalidOwner:
        logger.warning("Guest cookie rejected", cookie=settings.guest_cookie_name())
        return None
    return token


def user_id(request: Request) -> str | None:
    return request.headers.get(USER_HEADER)


def resolve_actor(request: Request, response: Response) -> CartOwner:
    """FastAPI dependency returning the cart owner for this request."""
    uid = user_id(request)
    if uid is not None:
        return CartOwner.user(uid)

    token = guest_token(request)
    if token is not None:
        return CartOwner.guest(token)

    token = mint_guest_token()
    response.set_cookie(
        key=settings.guest_cookie_name(),
        value=token,
        max_age=settings.guest_cookie_max_age(),
        httponly=True,
        samesite="lax",
    )
    return CartOwner.guest(token)


def require_user(request: Request) -> CartOwner:
    uid = user_id(request)
    if uid is None:
        raise InvalidOwner(f"Signing in requires the {USER_HEADER} header")
    return CartOwner.user(uid)
