from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from marketplace.api.deps import get_db, require_authenticated
from marketplace.core.security_context import SecurityContext
from marketplace.schemas.response import ApiResponse
from marketplace.schemas.role import Role, RoleCreate
from marketplace.services import role as role_service

router = APIRouter(prefix="/roles", tags=["roles"])


@router.post(
    "",
    response_model=ApiResponse[Role],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_role(
    request: Request,
    role_data: RoleCreate,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    role = role_service.create_role(db, role_data, ctx)
    return ApiResponse.ok(request, Role.model_validate(role))


@router.get("", response_model=ApiResponse[list[Role]], response_model_exclude_none=True)
def get_roles(
    request: Request,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    """Get all roles. Admin only."""
    roles = role_service.get_all_roles(db, ctx)
    return ApiResponse.ok(request, [Role.model_validate(role) for role in roles])


@router.delete("/{name}", response_model=ApiResponse[str], response_model_exclude_none=True)
def delete_role(
    request: Request,
    name: str,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    role_service.delete_role(db, name, ctx)
    return ApiResponse.ok(request, "Role has been deleted")
