from pydantic import BaseModel, ConfigDict, Field

from marketplace.schemas.address import Address, AddressIn


class Shop(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    owner_id: str
    owner_username: str | None = None
    address: Address | None = None


class ShopCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: AddressIn | None = None
