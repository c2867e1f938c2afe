from pydantic import BaseModel, ConfigDict, Field


class AddressIn(BaseModel):
    name: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=20)
    address_detail: str | None = Field(None, max_length=500)
    ward_code: str | None = None


class Address(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str | None = None
    phone: str | None = None
    address_detail: str | None = None
    ward_code: str | None = None
    district_code: str | None = None
    province_code: str | None = None
