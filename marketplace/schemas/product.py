from pydantic import BaseModel, ConfigDict, Field

from marketplace.schemas.category import Category


class ProductImage(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    image_type: str | None = None
    image_url: str
    description: str | None = None


class ProductImageCreate(BaseModel):
    image_url: str = Field(..., min_length=1, max_length=1000)
    image_type: str | None = Field(None, max_length=50)
    description: str | None = Field(None, max_length=500)


class Product(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    price: float
    brand: str | None = None
    description: str | None = None
    weight: float = 0
    shop_id: str
    categories: list[Category] = []
    images: list[ProductImage] = []


class ProductCreate(BaseModel):
    shop_id: str
    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    weight: float = Field(0, ge=0)
    brand: str | None = Field(None, max_length=255)
    description: str | None = None
    category_names: list[str] = []


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    price: float | None = Field(None, ge=0)
    weight: float | None = Field(None, ge=0)
    brand: str | None = Field(None, max_length=255)
    description: str | None = None
    category_names: list[str] | None = None
