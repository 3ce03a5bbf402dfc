"""
User request/response schemas.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from marketplace.models.user import ClientStatus, ListingCondition


class ListingCreate(BaseModel):
    """New listing."""
    url: str = Field(..., min_length=1, description="Image URL")
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    description: str = Field(..., min_length=1)
    location: Optional[str] = None
    category: str = "Uncategorized"
    type: Optional[str] = None
    brand: Optional[str] = None
    material: Optional[str] = None
    condition: Optional[ListingCondition] = None
    color: Optional[str] = None
    features: Optional[str] = None


class ListingResponse(ListingCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str


class PublicListingResponse(BaseModel):
    """A listing in public browse, with its owner."""
    owner_id: str
    owner_name: str
    listing: ListingResponse


class BanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    active: bool
    days: int
    banned_at: Optional[datetime] = None


class SocialLinksResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    facebook: str = ""
    instagram: str = ""
    twitter: str = ""
    linkedin: str = ""


class UserResponse(BaseModel):
    """User information response (excludes the password hash)."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    kind: str
    first_name: str
    second_name: Optional[str] = None
    last_name: Optional[str] = None
    business_name: Optional[str] = None
    phone: Optional[str] = None
    email: EmailStr
    address: Optional[str] = None
    profile_image: Optional[str] = None
    location: Optional[str] = None
    role: str
    approved: bool
    suspended: bool
    ban: BanResponse
    listings: list[ListingResponse] = Field(default_factory=list)
    created_at: datetime
    # Client-only fields
    cover_image: Optional[str] = None
    bio: Optional[str] = None
    website: Optional[str] = None
    social_links: Optional[SocialLinksResponse] = None
    status: Optional[ClientStatus] = None


class UserUpdate(BaseModel):
    """Profile update request (limited fields)."""
    first_name: Optional[str] = Field(None, min_length=1)
    second_name: Optional[str] = None
    last_name: Optional[str] = None
    business_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    profile_image: Optional[str] = None
    location: Optional[str] = None
    # Ignored for plain users
    cover_image: Optional[str] = None
    bio: Optional[str] = None
    website: Optional[str] = None


class PasswordChangeRequest(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=8)


class BookmarkCreate(BaseModel):
    product_id: str


class BookmarkResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    product_id: Optional[str] = None
    saved_at: datetime


class CartItemCreate(BaseModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)


class CartItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    product_id: Optional[str] = None
    quantity: int
    added_at: datetime


class MessageCreate(BaseModel):
    recipient_id: str
    body: str = Field(..., min_length=1, max_length=5000)


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    sender: Optional[str] = None
    recipient: Optional[str] = None
    body: Optional[str] = None
    sent_at: datetime


class DashboardResponse(BaseModel):
    user: UserResponse
    notices: list[dict[str, str]] = Field(default_factory=list)
