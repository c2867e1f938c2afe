from sqlalchemy import func
from sqlalchemy.orm import Session

from marketplace.db.models.category import Category as CategoryModel
from marketplace.db.models.product import Product as ProductModel
from marketplace.db.models.product import ProductImage as ProductImageModel


def get_product_by_id(db: Session, product_id: str) -> ProductModel | None:
    """Get a product by ID."""
    return db.query(ProductModel).filter(ProductModel.id == product_id).first()


def get_products_by_shop_id(db: Session, shop_id: str) -> list[ProductModel]:
    return (
        db.query(ProductModel)
        .filter(ProductModel.shop_id == shop_id)
        .order_by(ProductModel.name)
        .all()
    )


def get_products_by_category_name(db: Session, category_name: str) -> list[ProductModel]:
    return (
        db.query(ProductModel)
        .join(ProductModel.categories)
        .filter(CategoryModel.name == category_name)
        .order_by(ProductModel.name)
        .all()
    )


def get_products_by_brand(db: Session, brand: str) -> list[ProductModel]:
    """Case-insensitive exact match on brand."""
    return (
        db.query(ProductModel)
        .filter(func.lower(ProductModel.brand) == brand.lower())
        .order_by(ProductModel.name)
        .all()
    )


def search_products(db: Session, keyword: str) -> list[ProductModel]:
    """Case-insensitive partial match on product name."""
    return (
        db.query(ProductModel)
        .filter(ProductModel.name.ilike(f"%{keyword}%"))
        .order_by(ProductModel.name)
        .all()
    )


def create_product(
    db: Session,
    shop_id: str,
    name: str,
    price: float,
    weight: float,
    categories: list[CategoryModel],
    brand: str | None = None,
    description: str | None = None,
) -> ProductModel:
    """Create a new product in the database. Pure data access - no business logic."""
    db_product = ProductModel(
        shop_id=shop_id,
        name=name,
        price=price,
        weight=weight,
        brand=brand,
        description=description,
        categories=categories,
    )
    db.add(db_product)
    db.commit()
    db.refresh(db_product)
    return db_product


def update_product(
    db: Session,
    product: ProductModel,
    name: str | None = None,
    price: float | None = None,
    weight: float | None = None,
    brand: str | None = None,
    description: str | None = None,
    categories: list[CategoryModel] | None = None,
) -> ProductModel:
    """Update product fields. Only provided fields will be updated."""
    if name is not None:
        product.name = name
    if price is not None:
        product.price = price
    if weight is not None:
        product.weight = weight
    if brand is not None:
        product.brand = brand
    if description is not None:
        product.description = description
    if categories is not None:
        product.categories = categories

    db.commit()
    db.refresh(product)
    return product


def add_product_images(
    db: Session, product: ProductModel, images: list[dict], replace: bool = False
) -> list[ProductImageModel]:
    """Attach image metadata to a product, optionally dropping the existing images."""
    if replace:
        product.images.clear()
    added = [ProductImageModel(**image) for image in images]
    product.images.extend(added)
    db.commit()
    db.refresh(product)
    return added


def delete_product(db: Session, product: ProductModel) -> None:
    db.delete(product)
    db.commit()
