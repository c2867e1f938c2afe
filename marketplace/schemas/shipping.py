from pydantic import BaseModel, Field


class ShippingFeeRequest(BaseModel):
    from_district_code: str
    to_district_code: str
    to_ward_code: str
    weight_gram: int = Field(..., ge=0)


class ShippingFee(BaseModel):
    fee: float
    estimated_days: int
    provider: str
