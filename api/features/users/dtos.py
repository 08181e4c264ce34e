"""DTOs for the Users feature."""
from pydantic import Field

from api.shared.dtos import BaseDTO


class CreateUserRequest(BaseDTO):
    """Request to create an account."""

    username: str = Field(description="Username, 1 to 10 characters")
    password: str = Field(description="Password")


class CreateUserResponse(BaseDTO):
    """Created account."""

    id: int = Field(description="Account identifier")
    username: str = Field(description="Username")


class UserExistsResponse(BaseDTO):
    username: str = Field(description="Username probed")
    exists: bool = Field(description="Whether an account with that name exists")


class LoginRequest(BaseDTO):
    """Password check request."""

    username: str = Field(description="Username")
    password: str = Field(description="Password attempt")


class LoginResponse(BaseDTO):
    username: str = Field(description="Username")
    authenticated: bool = Field(description="Whether the password matched")
