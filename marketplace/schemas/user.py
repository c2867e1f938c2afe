from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from marketplace.errors import ErrorCode
from marketplace.schemas.address import Address, AddressIn
from marketplace.schemas.role import Role

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 8


def _check_password(password: str) -> str:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise PydanticCustomError("password_invalid", ErrorCode.PASSWORD_INVALID.message)
    return password


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    fullname: str | None = None
    email: str | None = None
    roles: list[Role] = []
    created_date: datetime | None = None
    address: Address | None = None


class UserCreate(BaseModel):
    username: str
    password: str
    fullname: str | None = Field(None, max_length=255)
    email: str
    address: AddressIn | None = None

    @field_validator("username")
    @classmethod
    def username_length(cls, v: str) -> str:
        if len(v.strip()) < MIN_USERNAME_LENGTH:
            raise PydanticCustomError("username_invalid", ErrorCode.USERNAME_INVALID.message)
        return v.strip()

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        return _check_password(v)


class UserUpdate(BaseModel):
    password: str | None = None
    fullname: str | None = Field(None, max_length=255)
    email: str | None = None
    roles: list[str] | None = None
    address: AddressIn | None = None

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str | None) -> str | None:
        # blank means "keep the current password"
        if v is None or not v.strip():
            return v
        return _check_password(v)
