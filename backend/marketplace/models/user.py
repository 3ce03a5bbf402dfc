"""
User account documents for the `users` collection.

Plain users and business clients live in the same collection and share the
same id space. They are one tagged union discriminated by `kind`.
"""
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Mapping, Optional, Union

from pydantic import EmailStr, Field, TypeAdapter, ValidationError

from marketplace.core.errors import DocumentValidationError
from marketplace.core.security import verify_password
from marketplace.models.common import (
    DocumentModel,
    ObjectIdStr,
    new_object_id,
    utcnow,
)


class UserRole(str, Enum):
    """Role tag stored on every account."""
    USER = "user"
    CLIENT = "client"
    ADMIN = "admin"


class ClientStatus(str, Enum):
    """Client lifecycle status, drives public visibility."""
    PENDING = "pending"
    APPROVED = "approved"
    SUSPENDED = "suspended"


class ListingCondition(str, Enum):
    USED = "Used"
    BRAND_NEW = "Brand New"
    REFURBISHED = "Refurbished"


class UserKind(str, Enum):
    USER = "User"
    CLIENT = "Client"


class Listing(DocumentModel):
    """A product listing embedded in its owner's document (`businessImages`)."""
    id: ObjectIdStr = Field(default_factory=new_object_id, alias="_id")
    url: str
    name: str
    price: float
    description: str
    location: Optional[str] = None
    category: str = "Uncategorized"
    type: Optional[str] = None
    brand: Optional[str] = None
    material: Optional[str] = None
    condition: Optional[ListingCondition] = None
    color: Optional[str] = None
    features: Optional[str] = None


class Bookmark(DocumentModel):
    id: ObjectIdStr = Field(default_factory=new_object_id, alias="_id")
    product_id: Optional[ObjectIdStr] = None
    saved_at: datetime = Field(default_factory=utcnow)


class CartItem(DocumentModel):
    id: ObjectIdStr = Field(default_factory=new_object_id, alias="_id")
    product_id: Optional[ObjectIdStr] = None
    quantity: int = 1
    added_at: datetime = Field(default_factory=utcnow)


class Message(DocumentModel):
    id: ObjectIdStr = Field(default_factory=new_object_id, alias="_id")
    sender: Optional[ObjectIdStr] = Field(None, alias="from")
    recipient: Optional[ObjectIdStr] = Field(None, alias="to")
    body: Optional[str] = Field(None, alias="message")
    sent_at: datetime = Field(default_factory=utcnow)


class Ban(DocumentModel):
    active: bool = Field(False, alias="status")
    days: int = 0
    banned_at: Optional[datetime] = None


class UserBase(DocumentModel):
    """Fields every account carries, whatever its kind."""
    id: Optional[ObjectIdStr] = Field(None, alias="_id")
    first_name: str
    second_name: Optional[str] = None
    last_name: Optional[str] = None
    business_name: Optional[str] = None
    phone: Optional[str] = None
    email: EmailStr
    password: str = Field(..., description="Bcrypt hash once persisted")
    address: Optional[str] = None
    profile_image: Optional[str] = None
    listings: list[Listing] = Field(default_factory=list, alias="businessImages")
    location: Optional[str] = None
    bookmarks: list[Bookmark] = Field(default_factory=list)
    cart: list[CartItem] = Field(default_factory=list)
    messages: list[Message] = Field(default_factory=list)
    role: UserRole = UserRole.USER
    approved: bool = False
    suspended: bool = False
    ban: Ban = Field(default_factory=Ban)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def verify_password(self, candidate: str) -> bool:
        """Check a candidate secret against the stored hash."""
        return verify_password(candidate, self.password)


class User(UserBase):
    kind: Literal["User"] = "User"


class SocialLinks(DocumentModel):
    facebook: str = ""
    instagram: str = ""
    twitter: str = ""
    linkedin: str = ""


class Client(UserBase):
    """Business account: a user document with a profile page and a review status."""
    kind: Literal["Client"] = "Client"
    cover_image: str = ""
    bio: str = ""
    website: str = ""
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    status: ClientStatus = ClientStatus.PENDING


UserDocument = Annotated[Union[User, Client], Field(discriminator="kind")]

_user_adapter: TypeAdapter[Union[User, Client]] = TypeAdapter(UserDocument)


def parse_user_document(doc: Mapping[str, Any]) -> Union[User, Client]:
    """
    Validate a stored or pending user document into its variant.

    Documents written without a `kind` are plain users.

    Raises:
        DocumentValidationError: if a required field is missing or a value
            falls outside its enumerated set
    """
    data = dict(doc)
    data.setdefault("kind", UserKind.USER.value)
    try:
        return _user_adapter.validate_python(data)
    except ValidationError as e:
        raise DocumentValidationError(
            f"Invalid user document: {e.error_count()} error(s)",
            errors=e.errors(include_url=False),
        ) from e
