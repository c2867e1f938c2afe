"""Request-scoped identity context and role checks.

The context is built once per request from the bearer token (see
``marketplace.api.deps.get_security_context``) and passed explicitly into
the services that need it. Nothing here mutates it.
"""

from dataclasses import dataclass, field

from marketplace.errors import AppError, ErrorCode

ROLE_PREFIX = "ROLE_"
ANONYMOUS_USERNAME = "anonymousUser"


@dataclass(frozen=True)
class Identity:
    name: str
    authorities: frozenset[str] = field(default_factory=frozenset)
    authenticated: bool = True
    anonymous: bool = False


ANONYMOUS = Identity(
    name=ANONYMOUS_USERNAME,
    authorities=frozenset({f"{ROLE_PREFIX}ANONYMOUS"}),
    authenticated=True,
    anonymous=True,
)


@dataclass(frozen=True)
class SecurityContext:
    identity: Identity | None = None


def get_authentication(ctx: SecurityContext) -> Identity:
    """Return the caller's identity, or raise UNAUTHORIZED if there is none."""
    identity = ctx.identity
    if identity is None or not identity.authenticated or identity.anonymous:
        raise AppError(ErrorCode.UNAUTHORIZED)
    return identity


def get_current_username(ctx: SecurityContext) -> str:
    return get_authentication(ctx).name


def has_role(ctx: SecurityContext, role: str) -> bool:
    identity = get_authentication(ctx)
    return f"{ROLE_PREFIX}{role}" in identity.authorities


def require_admin(ctx: SecurityContext) -> None:
    if not has_role(ctx, "ADMIN"):
        raise AppError(ErrorCode.UNAUTHORIZED)
