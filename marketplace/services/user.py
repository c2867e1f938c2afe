import logging
import re

from sqlalchemy.orm import Session

import marketplace.repositories.location as location_repo
import marketplace.repositories.role as role_repo
import marketplace.repositories.user as user_repo
from marketplace.core.config import settings
from marketplace.core.security import get_password_hash
from marketplace.core.security_context import (
    SecurityContext,
    get_current_username,
    has_role,
    require_admin,
)
from marketplace.db.models.address import Address as AddressModel
from marketplace.db.models.role import USER_ROLE
from marketplace.db.models.user import User as UserModel
from marketplace.errors import AppError, ErrorCode
from marketplace.schemas.address import AddressIn
from marketplace.schemas.user import UserCreate, UserUpdate
from marketplace.services.cart import drop_product_from_carts

logger = logging.getLogger(__name__)


def build_address(db: Session, address_data: AddressIn) -> AddressModel:
    """Turn an address payload into an unsaved address. Unknown ward -> WARD_NOT_FOUND."""
    ward = location_repo.get_ward_by_code(db, address_data.ward_code)
    if ward is None:
        raise AppError(ErrorCode.WARD_NOT_FOUND)
    return location_repo.build_address(
        name=address_data.name,
        phone=address_data.phone,
        address_detail=address_data.address_detail,
        ward=ward,
    )


def _check_email(db: Session, email: str, user_id: str | None = None) -> None:
    if not re.match(settings.allowed_email_pattern, email):
        raise AppError(ErrorCode.INVALID_EMAIL)
    existing = user_repo.get_user_by_email(db, email)
    if existing is not None and existing.id != user_id:
        raise AppError(ErrorCode.EMAIL_EXISTED)


def create_user(db: Session, user_data: UserCreate) -> UserModel:
    """
    Register a new user.

    - Username must be unique
    - Email must match the allowed pattern and be unique
    - Optional address must reference an existing ward
    - New users get the USER role
    """
    if user_repo.get_user_by_username(db, user_data.username):
        raise AppError(ErrorCode.USERNAME_EXISTED)

    _check_email(db, user_data.email)

    address = build_address(db, user_data.address) if user_data.address else None
    roles = role_repo.get_roles_by_names(db, [USER_ROLE])

    user = user_repo.create_user(
        db,
        username=user_data.username,
        password_hash=get_password_hash(user_data.password),
        email=user_data.email,
        roles=roles,
        fullname=user_data.fullname,
        address=address,
    )
    logger.info("Registered user %s", user.username)
    return user


def get_all_users(db: Session, ctx: SecurityContext) -> list[UserModel]:
    require_admin(ctx)
    return user_repo.get_all_users(db)


def get_user(db: Session, user_id: str, ctx: SecurityContext) -> UserModel:
    require_admin(ctx)
    user = user_repo.get_user_by_id(db, user_id)
    if user is None:
        raise AppError(ErrorCode.USER_NOT_EXIST)
    return user


def update_user(
    db: Session, user_id: str, user_data: UserUpdate, ctx: SecurityContext
) -> UserModel:
    """
    Update a user.

    - Users can update themselves, admins can update anyone
    - Only admins may change roles
    - A blank password keeps the current one
    """
    user = user_repo.get_user_by_id(db, user_id)
    if user is None:
        raise AppError(ErrorCode.USER_NOT_EXIST)

    is_admin = has_role(ctx, "ADMIN")
    if user.username != get_current_username(ctx) and not is_admin:
        raise AppError(ErrorCode.UNAUTHORIZED)

    roles = None
    if user_data.roles is not None:
        if not is_admin:
            raise AppError(ErrorCode.UNAUTHORIZED)
        roles = role_repo.get_roles_by_names(db, user_data.roles)

    if user_data.email is not None:
        _check_email(db, user_data.email, user_id=user.id)

    password_hash = None
    if user_data.password is not None and user_data.password.strip():
        password_hash = get_password_hash(user_data.password)

    address = build_address(db, user_data.address) if user_data.address else None

    return user_repo.update_user(
        db,
        user,
        fullname=user_data.fullname,
        email=user_data.email,
        password_hash=password_hash,
        roles=roles,
        address=address,
    )


def get_my_info(db: Session, ctx: SecurityContext) -> UserModel:
    user = user_repo.get_user_by_username(db, get_current_username(ctx))
    if user is None:
        raise AppError(ErrorCode.USER_NOT_EXIST)
    return user


def get_current_user(db: Session, ctx: SecurityContext) -> UserModel:
    """The persisted user behind the security context."""
    return get_my_info(db, ctx)


def delete_user(db: Session, user_id: str, ctx: SecurityContext) -> None:
    require_admin(ctx)
    user = user_repo.get_user_by_id(db, user_id)
    if user is None:
        raise AppError(ErrorCode.USER_NOT_EXIST)

    # the user's shops and products go with them
    for shop in user.shops:
        for product in shop.products:
            drop_product_from_carts(product)
    user_repo.delete_user(db, user_id)
    logger.info("Deleted user %s", user_id)
