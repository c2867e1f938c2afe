from sqlalchemy.orm import Session

from marketplace.db.models.category import Category as CategoryModel


def get_category_by_id(db: Session, category_id: str) -> CategoryModel | None:
    return db.query(CategoryModel).filter(CategoryModel.id == category_id).first()


def get_category_by_name(db: Session, name: str) -> CategoryModel | None:
    return db.query(CategoryModel).filter(CategoryModel.name == name).first()


def get_all_categories(db: Session) -> list[CategoryModel]:
    return db.query(CategoryModel).order_by(CategoryModel.name).all()


def search_categories(db: Session, keyword: str) -> list[CategoryModel]:
    """Case-insensitive partial match on the category name."""
    return (
        db.query(CategoryModel)
        .filter(CategoryModel.name.ilike(f"%{keyword}%"))
        .order_by(CategoryModel.name)
        .all()
    )


def create_category(db: Session, name: str) -> CategoryModel:
    category = CategoryModel(name=name)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def get_or_create_category(db: Session, name: str) -> CategoryModel:
    category = get_category_by_name(db, name)
    if category is None:
        category = CategoryModel(name=name)
        db.add(category)
        db.flush()
    return category


def delete_category(db: Session, category: CategoryModel) -> None:
    db.delete(category)
    db.commit()
