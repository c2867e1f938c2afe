from fastapi import APIRouter, Depends, Request

from marketplace.api.deps import require_authenticated
from marketplace.schemas.response import ApiResponse
from marketplace.schemas.shipping import ShippingFee, ShippingFeeRequest
from marketplace.services.shipping import calculate_shipping_fee

router = APIRouter(
    prefix="/shipping",
    tags=["shipping"],
    dependencies=[Depends(require_authenticated)],
)


@router.post("/fee", response_model=ApiResponse[ShippingFee], response_model_exclude_none=True)
async def get_shipping_fee(request: Request, fee_request: ShippingFeeRequest):
    """Quote a delivery fee. Falls back to a flat fee when the carrier is unavailable."""
    fee = await calculate_shipping_fee(
        from_district_code=fee_request.from_district_code,
        to_district_code=fee_request.to_district_code,
        to_ward_code=fee_request.to_ward_code,
        weight_gram=fee_request.weight_gram,
    )
    return ApiResponse.ok(request, fee)
