from sqlalchemy.orm import Session

from marketplace.db.models.address import Address as AddressModel
from marketplace.db.models.role import Role as RoleModel
from marketplace.db.models.user import User as UserModel


def get_user_by_username(db: Session, username: str) -> UserModel | None:
    """Get a user by username."""
    return db.query(UserModel).filter(UserModel.username == username).first()


def get_user_by_email(db: Session, email: str) -> UserModel | None:
    """Get a user by email."""
    return db.query(UserModel).filter(UserModel.email == email).first()


def get_user_by_id(db: Session, user_id: str) -> UserModel | None:
    """Get a user by ID."""
    return db.query(UserModel).filter(UserModel.id == user_id).first()


def get_all_users(db: Session) -> list[UserModel]:
    return db.query(UserModel).order_by(UserModel.created_date).all()


def create_user(
    db: Session,
    username: str,
    password_hash: str,
    email: str,
    roles: list[RoleModel],
    fullname: str | None = None,
    address: AddressModel | None = None,
) -> UserModel:
    """Create a new user in the database. Pure data access - no business logic."""
    db_user = UserModel(
        username=username,
        password_hash=password_hash,
        fullname=fullname,
        email=email,
        roles=roles,
        address=address,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def update_user(
    db: Session,
    user: UserModel,
    fullname: str | None = None,
    email: str | None = None,
    password_hash: str | None = None,
    roles: list[RoleModel] | None = None,
    address: AddressModel | None = None,
) -> UserModel:
    """Update user fields. Only provided fields will be updated."""
    if fullname is not None:
        user.fullname = fullname
    if email is not None:
        user.email = email
    if password_hash is not None:
        user.password_hash = password_hash
    if roles is not None:
        user.roles = roles
    if address is not None:
        user.address = address

    db.commit()
    db.refresh(user)
    return user


def update_user_password(db: Session, user: UserModel, password_hash: str) -> UserModel:
    user.password_hash = password_hash
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: str) -> None:
    user = get_user_by_id(db, user_id)
    if user is not None:
        db.delete(user)
        db.commit()
