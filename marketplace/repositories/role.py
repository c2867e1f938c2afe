from sqlalchemy.orm import Session

from marketplace.db.models.role import Role as RoleModel


def get_all_roles(db: Session) -> list[RoleModel]:
    return db.query(RoleModel).order_by(RoleModel.name).all()


def get_role_by_name(db: Session, name: str) -> RoleModel | None:
    return db.query(RoleModel).filter(RoleModel.name == name).first()


def get_roles_by_names(db: Session, names: list[str]) -> list[RoleModel]:
    """Return the existing roles among ``names``; unknown names are skipped."""
    if not names:
        return []
    return db.query(RoleModel).filter(RoleModel.name.in_(names)).all()


def create_role(db: Session, name: str, description: str | None = None) -> RoleModel:
    role = RoleModel(name=name, description=description)
    db.add(role)
    db.commit()
    db.refresh(role)
    return role


def delete_role(db: Session, name: str) -> None:
    role = get_role_by_name(db, name)
    if role is not None:
        db.delete(role)
        db.commit()
