from pydantic import BaseModel


class AuthenticationRequest(BaseModel):
    username: str
    password: str


class AuthenticationResponse(BaseModel):
    token: str
    authenticated: bool


class TokenRequest(BaseModel):
    """Body of introspect, refresh and logout calls."""

    token: str


class IntrospectResponse(BaseModel):
    valid: bool
