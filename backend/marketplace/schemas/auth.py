"""
Authentication request/response schemas.
"""
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Registration request body for a plain user account."""
    first_name: str = Field(..., min_length=1, description="First name")
    second_name: Optional[str] = Field(None, description="Second name")
    last_name: Optional[str] = Field(None, description="Last name")
    phone: Optional[str] = Field(None, description="Phone number")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(
        ...,
        min_length=8,
        description="User password (min 8 characters)"
    )
    password_confirm: str = Field(..., description="Password confirmation")
    address: Optional[str] = None
    location: Optional[str] = None

    def passwords_match(self) -> bool:
        """Check if password and confirmation match."""
        return self.password == self.password_confirm


class SocialLinksIn(BaseModel):
    facebook: str = ""
    instagram: str = ""
    twitter: str = ""
    linkedin: str = ""


class ClientRegisterRequest(RegisterRequest):
    """Registration request body for a business (client) account."""
    business_name: Optional[str] = Field(None, description="Business name")
    cover_image: str = ""
    bio: str = ""
    website: str = ""
    social_links: SocialLinksIn = Field(default_factory=SocialLinksIn)


class RegisterResponse(BaseModel):
    """Registration response."""
    user_id: str = Field(..., description="Created user ID")
    email: str = Field(..., description="Registered email")
    kind: str = Field(..., description="Account kind (User or Client)")
    message: str = Field(
        default="Registration successful",
        description="Success message"
    )


class LoginRequest(BaseModel):
    """Login request body."""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class LoginResponse(BaseModel):
    """Login response; the session cookie carries the identity."""
    user_id: str = Field(..., description="Authenticated user ID")
    role: str = Field(..., description="User role")
    redirect_to: str = Field(..., description="Where the client should go next")


class NoticesResponse(BaseModel):
    """Pending flash notices, cleared once returned."""
    notices: list[dict[str, str]] = Field(default_factory=list)
