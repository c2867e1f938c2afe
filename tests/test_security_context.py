import pytest

from marketplace.core.security_context import (
    ANONYMOUS,
    Identity,
    SecurityContext,
    get_authentication,
    get_current_username,
    has_role,
    require_admin,
)
from marketplace.errors import AppError, ErrorCode


def _ctx(*authorities: str, name: str = "alice") -> SecurityContext:
    return SecurityContext(identity=Identity(name=name, authorities=frozenset(authorities)))


@pytest.mark.parametrize(
    "ctx",
    [
        SecurityContext(),
        SecurityContext(identity=Identity(name="bob", authenticated=False)),
        SecurityContext(identity=ANONYMOUS),
    ],
    ids=["no-identity", "unauthenticated", "anonymous"],
)
def test_get_authentication_rejects(ctx):
    with pytest.raises(AppError) as exc_info:
        get_authentication(ctx)
    assert exc_info.value.error_code == ErrorCode.UNAUTHORIZED


def test_get_authentication_returns_identity():
    ctx = _ctx("ROLE_USER")
    assert get_authentication(ctx) is ctx.identity
    assert get_current_username(ctx) == "alice"


def test_has_role_uses_prefix():
    ctx = _ctx("ROLE_USER")
    assert has_role(ctx, "USER")
    assert not has_role(ctx, "ADMIN")
    # The raw authority name without the prefix does not count
    assert not has_role(_ctx("USER"), "USER")


def test_require_admin():
    require_admin(_ctx("ROLE_ADMIN", "ROLE_USER"))

    for ctx in (_ctx("ROLE_USER"), _ctx("ADMIN"), _ctx("ROLE_ADMINISTRATOR")):
        with pytest.raises(AppError) as exc_info:
            require_admin(ctx)
        assert exc_info.value.error_code == ErrorCode.UNAUTHORIZED


def test_require_admin_anonymous():
    with pytest.raises(AppError):
        require_admin(SecurityContext(identity=ANONYMOUS))
