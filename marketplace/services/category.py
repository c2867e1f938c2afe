import re

from sqlalchemy.orm import Session

import marketplace.repositories.category as category_repo
from marketplace.core.security_context import SecurityContext, require_admin
from marketplace.db.models.category import Category as CategoryModel
from marketplace.errors import AppError, ErrorCode


def normalize_name(name: str) -> str:
    """Trim, lower-case and collapse inner whitespace: '  Home   Decor ' -> 'home decor'."""
    return re.sub(r"\s+", " ", name.strip().lower())


def create_category(db: Session, name: str, ctx: SecurityContext) -> CategoryModel:
    require_admin(ctx)
    normalized = normalize_name(name)
    if not normalized:
        raise AppError(ErrorCode.INVALID_VALUE)
    if category_repo.get_category_by_name(db, normalized) is not None:
        raise AppError(ErrorCode.CATEGORY_EXISTED)
    return category_repo.create_category(db, normalized)


def get_all_categories(db: Session) -> list[CategoryModel]:
    return category_repo.get_all_categories(db)


def get_category(db: Session, category_id: str) -> CategoryModel:
    category = category_repo.get_category_by_id(db, category_id)
    if category is None:
        raise AppError(ErrorCode.CATEGORY_NOT_EXIST)
    return category


def search_categories(db: Session, keyword: str) -> list[CategoryModel]:
    return category_repo.search_categories(db, normalize_name(keyword))


def delete_category(db: Session, name: str, ctx: SecurityContext) -> None:
    """Delete a category by name. Categories still attached to products are kept."""
    require_admin(ctx)
    category = category_repo.get_category_by_name(db, normalize_name(name))
    if category is None:
        raise AppError(ErrorCode.CATEGORY_NOT_EXIST)
    if category.products:
        raise AppError(ErrorCode.CATEGORY_USED_BY_PRODUCT)
    category_repo.delete_category(db, category)


def resolve_categories(db: Session, names: list[str]) -> list[CategoryModel]:
    """Map raw names to categories, creating missing ones. Duplicates collapse."""
    categories: dict[str, CategoryModel] = {}
    for raw_name in names:
        normalized = normalize_name(raw_name)
        if normalized and normalized not in categories:
            categories[normalized] = category_repo.get_or_create_category(db, normalized)
    return list(categories.values())
