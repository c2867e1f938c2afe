from pydantic import BaseModel, ConfigDict


class Location(BaseModel):
    """Province, district or ward."""

    model_config = ConfigDict(from_attributes=True)

    code: str
    full_name: str
