"""Caller identity, as asserted by the upstream auth gateway.

The gateway authenticates the request and forwards who the caller is in
``X-User-*`` headers. A request without ``X-User-Id`` never reached the
gateway's authenticated path and is rejected with 401.
"""

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException

from storefront.errors import PermissionDeniedError

DEFAULT_ROLE = "Customer"
SELLER_ROLES = frozenset({"Admin", "Seller"})


@dataclass(frozen=True)
class Principal:
    user_id: str
    email: str | None = None
    role: str = DEFAULT_ROLE


def get_principal(
    x_user_id: str = Header(default=""),
    x_user_email: str = Header(default=""),
    x_user_role: str = Header(default=DEFAULT_ROLE),
) -> Principal:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return Principal(
        user_id=x_user_id,
        email=x_user_email or None,
        role=x_user_role or DEFAULT_ROLE,
    )


def require_seller(principal: Principal = Depends(get_principal)) -> Principal:
    if principal.role not in SELLER_ROLES:
        raise PermissionDeniedError({"role": ["Only sellers and admins may manage products"]})
    return principal
