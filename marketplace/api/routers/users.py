from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from marketplace.api.deps import get_db, require_authenticated
from marketplace.core.security_context import SecurityContext
from marketplace.schemas.response import ApiResponse
from marketplace.schemas.user import User, UserCreate, UserUpdate
from marketplace.services import user as user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=ApiResponse[User],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_user(request: Request, user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Register a new account. Open to everyone.

    The new user gets the USER role.
    """
    user = user_service.create_user(db, user_data)
    return ApiResponse.ok(request, User.model_validate(user))


@router.get("", response_model=ApiResponse[list[User]], response_model_exclude_none=True)
def get_all_users(
    request: Request,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    """List all users. Admin only."""
    users = user_service.get_all_users(db, ctx)
    return ApiResponse.ok(request, [User.model_validate(user) for user in users])


@router.get("/my-info", response_model=ApiResponse[User], response_model_exclude_none=True)
def get_my_info(
    request: Request,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    user = user_service.get_my_info(db, ctx)
    return ApiResponse.ok(request, User.model_validate(user))


@router.get("/{user_id}", response_model=ApiResponse[User], response_model_exclude_none=True)
def get_user(
    request: Request,
    user_id: str,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    """Get a user by ID. Admin only."""
    user = user_service.get_user(db, user_id, ctx)
    return ApiResponse.ok(request, User.model_validate(user))


@router.put("/{user_id}", response_model=ApiResponse[User], response_model_exclude_none=True)
def update_user(
    request: Request,
    user_id: str,
    user_data: UserUpdate,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    """
    Update a user.

    - Users can update themselves, admins can update anyone
    - Only admins can change roles
    """
    user = user_service.update_user(db, user_id, user_data, ctx)
    return ApiResponse.ok(request, User.model_validate(user))


@router.delete("/{user_id}", response_model=ApiResponse[str], response_model_exclude_none=True)
def delete_user(
    request: Request,
    user_id: str,
    db: Session = Depends(get_db),
    ctx: SecurityContext = Depends(require_authenticated),
):
    """Delete a user. Admin only."""
    user_service.delete_user(db, user_id, ctx)
    return ApiResponse.ok(request, "User has been deleted")
