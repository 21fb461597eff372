"""
API Data Transfer Objects

Shapes exchanged with the authentication API. Unknown fields are ignored
so newer API versions do not break older clients.
"""

from pydantic import BaseModel, ConfigDict, Field


class _DTO(BaseModel):
    model_config = ConfigDict(extra="ignore")


class PasswordConfig(_DTO):
    enabled: bool = False


class Config(_DTO):
    """Frontend configuration served at /.well-known/config."""
    password: PasswordConfig = Field(default_factory=PasswordConfig)


class WebauthnFinalized(_DTO):
    credential_id: str
    user_id: str


class Credential(_DTO):
    id: str


class UserInfo(_DTO):
    """Pre-authentication user lookup, used to pick a login method."""
    id: str
    verified: bool = False
    has_webauthn_credential: bool = False


class Me(_DTO):
    id: str


class User(_DTO):
    id: str
    email: str
    webauthn_credentials: list[Credential] = Field(default_factory=list)


class Passcode(_DTO):
    id: str
    ttl: int  # seconds
