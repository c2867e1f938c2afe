"""Uniform response envelope."""

from datetime import datetime
from typing import Generic, TypeVar

from fastapi import Request
from pydantic import BaseModel, Field

T = TypeVar("T")

SUCCESS_CODE = 1000


class ApiResponse(BaseModel, Generic[T]):
    """Wraps every payload and every error. ``None`` fields are left out of the JSON."""

    code: int = Field(default=SUCCESS_CODE, description="Application status code")
    message: str | None = None
    result: T | None = None
    timestamp: datetime | None = None
    path: str | None = None

    @classmethod
    def ok(
        cls, request: Request, result: T | None = None, message: str | None = None
    ) -> "ApiResponse[T]":
        return cls(
            result=result,
            message=message,
            timestamp=datetime.now(),
            path=request.url.path,
        )
