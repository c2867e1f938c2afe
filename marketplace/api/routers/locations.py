from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from marketplace.api.deps import get_db
from marketplace.schemas.location import Location
from marketplace.schemas.response import ApiResponse
from marketplace.services import location as location_service

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get(
    "/provinces", response_model=ApiResponse[list[Location]], response_model_exclude_none=True
)
def get_provinces(request: Request, db: Session = Depends(get_db)):
    provinces = location_service.get_provinces(db)
    return ApiResponse.ok(request, [Location.model_validate(p) for p in provinces])


@router.get(
    "/districts/{province_code}",
    response_model=ApiResponse[list[Location]],
    response_model_exclude_none=True,
)
def get_districts(request: Request, province_code: str, db: Session = Depends(get_db)):
    districts = location_service.get_districts(db, province_code)
    return ApiResponse.ok(request, [Location.model_validate(d) for d in districts])


@router.get(
    "/wards/{district_code}",
    response_model=ApiResponse[list[Location]],
    response_model_exclude_none=True,
)
def get_wards(request: Request, district_code: str, db: Session = Depends(get_db)):
    wards = location_service.get_wards(db, district_code)
    return ApiResponse.ok(request, [Location.model_validate(w) for w in wards])
