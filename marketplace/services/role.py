from sqlalchemy.orm import Session

import marketplace.repositories.role as role_repo
from marketplace.core.security_context import SecurityContext, require_admin
from marketplace.db.models.role import Role as RoleModel
from marketplace.errors import AppError, ErrorCode
from marketplace.schemas.role import RoleCreate


def create_role(db: Session, role_data: RoleCreate, ctx: SecurityContext) -> RoleModel:
    require_admin(ctx)
    name = role_data.name.strip().upper()
    if not name:
        raise AppError(ErrorCode.INVALID_VALUE)
    if role_repo.get_role_by_name(db, name) is not None:
        raise AppError(ErrorCode.INVALID_VALUE, "Role already exists")
    return role_repo.create_role(db, name=name, description=role_data.description)


def get_all_roles(db: Session, ctx: SecurityContext) -> list[RoleModel]:
    require_admin(ctx)
    return role_repo.get_all_roles(db)


def delete_role(db: Session, name: str, ctx: SecurityContext) -> None:
    require_admin(ctx)
    role_repo.delete_role(db, name)
