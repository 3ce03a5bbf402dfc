"""
Routes for the logged-in account: dashboard, profile, listings, bookmarks,
cart and messages.
"""
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Request, Response, status

from marketplace.core.flash import get_flashed_messages
from marketplace.dependencies.auth import CurrentUser, CurrentUserId
from marketplace.dependencies.services import get_account_service
from marketplace.routers.errors import to_http_exception
from marketplace.schemas.user import (
    BookmarkCreate,
    BookmarkResponse,
    CartItemCreate,
    CartItemResponse,
    DashboardResponse,
    ListingCreate,
    ListingResponse,
    MessageCreate,
    MessageResponse,
    PasswordChangeRequest,
    PublicListingResponse,
    UserResponse,
    UserUpdate,
)
from marketplace.services.account_service import AccountService

router = APIRouter(tags=["Account"])

Accounts = Annotated[AccountService, Depends(get_account_service)]


@router.get("/dashboard", response_model=DashboardResponse, summary="Dashboard")
async def dashboard(request: Request, user: CurrentUser):
    """The logged-in account plus any pending notices (cleared once read)."""
    return DashboardResponse(
        user=UserResponse.model_validate(user),
        notices=get_flashed_messages(request.session),
    )


@router.get("/listings", response_model=list[PublicListingResponse], summary="Browse listings")
async def browse_listings(accounts: Accounts, category: Optional[str] = None):
    """
    Public listings. Suspended or banned accounts and clients that are not
    approved are left out.
    """
    results = await accounts.list_public_listings(category=category)
    return [
        PublicListingResponse(
            owner_id=owner.id,
            owner_name=owner.business_name or owner.first_name,
            listing=ListingResponse.model_validate(listing),
        )
        for owner, listing in results
    ]


# ----------------------------------------------------------------------
# Profile
# ----------------------------------------------------------------------

@router.get("/me", response_model=UserResponse, summary="Get my profile")
async def get_profile(user: CurrentUser):
    return UserResponse.model_validate(user)


@router.patch("/me", response_model=UserResponse, summary="Update my profile")
async def update_profile(body: UserUpdate, user_id: CurrentUserId, accounts: Accounts):
    try:
        user = await accounts.update_profile(user_id, body)
    except ValueError as e:
        raise to_http_exception(e)
    return UserResponse.model_validate(user)


@router.post("/me/password", summary="Change my password")
async def change_password(body: PasswordChangeRequest, user_id: CurrentUserId, accounts: Accounts):
    try:
        await accounts.change_password(user_id, body.current_password, body.new_password)
    except ValueError as e:
        raise to_http_exception(e)
    return {"message": "Password changed successfully"}


# ----------------------------------------------------------------------
# Listings
# ----------------------------------------------------------------------

@router.get("/me/listings", response_model=list[ListingResponse], summary="My listings")
async def get_listings(user: CurrentUser):
    return [ListingResponse.model_validate(item) for item in user.listings]


@router.post(
    "/me/listings",
    response_model=ListingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a listing",
)
async def create_listing(body: ListingCreate, user_id: CurrentUserId, accounts: Accounts):
    try:
        listing = await accounts.add_listing(user_id, body)
    except ValueError as e:
        raise to_http_exception(e)
    return ListingResponse.model_validate(listing)


@router.delete(
    "/me/listings/{listing_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a listing",
)
async def delete_listing(listing_id: str, user_id: CurrentUserId, accounts: Accounts):
    try:
        await accounts.remove_listing(user_id, listing_id)
    except ValueError as e:
        raise to_http_exception(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ----------------------------------------------------------------------
# Bookmarks
# ----------------------------------------------------------------------

@router.get("/me/bookmarks", response_model=list[BookmarkResponse], summary="My bookmarks")
async def get_bookmarks(user: CurrentUser):
    return [BookmarkResponse.model_validate(item) for item in user.bookmarks]


@router.post(
    "/me/bookmarks",
    response_model=BookmarkResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Bookmark a product",
)
async def add_bookmark(body: BookmarkCreate, user_id: CurrentUserId, accounts: Accounts):
    try:
        bookmark = await accounts.add_bookmark(user_id, body.product_id)
    except ValueError as e:
        raise to_http_exception(e)
    return BookmarkResponse.model_validate(bookmark)


@router.delete(
    "/me/bookmarks/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a bookmark",
)
async def remove_bookmark(product_id: str, user_id: CurrentUserId, accounts: Accounts):
    try:
        await accounts.remove_bookmark(user_id, product_id)
    except ValueError as e:
        raise to_http_exception(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ----------------------------------------------------------------------
# Cart
# ----------------------------------------------------------------------

@router.get("/me/cart", response_model=list[CartItemResponse], summary="My cart")
async def get_cart(user: CurrentUser):
    return [CartItemResponse.model_validate(item) for item in user.cart]


@router.post(
    "/me/cart",
    response_model=CartItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a product to my cart",
)
async def add_to_cart(body: CartItemCreate, user_id: CurrentUserId, accounts: Accounts):
    try:
        item = await accounts.add_to_cart(user_id, body.product_id, body.quantity)
    except ValueError as e:
        raise to_http_exception(e)
    return CartItemResponse.model_validate(item)


@router.delete(
    "/me/cart/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a product from my cart",
)
async def remove_from_cart(product_id: str, user_id: CurrentUserId, accounts: Accounts):
    try:
        await accounts.remove_from_cart(user_id, product_id)
    except ValueError as e:
        raise to_http_exception(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ----------------------------------------------------------------------
# Messages
# ----------------------------------------------------------------------

@router.get("/me/messages", response_model=list[MessageResponse], summary="My messages")
async def get_messages(user_id: CurrentUserId, accounts: Accounts):
    try:
        messages = await accounts.get_messages(user_id)
    except ValueError as e:
        raise to_http_exception(e)
    return [MessageResponse.model_validate(m) for m in messages]


@router.post(
    "/me/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a message",
)
async def send_message(body: MessageCreate, user_id: CurrentUserId, accounts: Accounts):
    try:
        message = await accounts.send_message(user_id, body.recipient_id, body.body)
    except ValueError as e:
        raise to_http_exception(e)
    return MessageResponse.model_validate(message)
