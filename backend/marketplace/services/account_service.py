"""
Account service: registration, login and every write to a user document.

Whole-document writes go through `_insert` or `_save_fields`, which run the
pre-write pipeline (password hashing) before anything reaches MongoDB.
Embedded arrays (listings, bookmarks, cart, messages) change through atomic
`$push`, `$pull` and `$inc` updates so concurrent requests do not overwrite
each other.
"""
import logging
from datetime import datetime
from typing import Any, Optional, Union

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from marketplace.core.errors import (
    AccountLockedError,
    DuplicateEmailError,
    InvalidCredentialsError,
    NotFoundError,
)
from marketplace.core.pipeline import PendingWrite, run_pre_write
from marketplace.database.databases import marketplace_db
from marketplace.models.common import DocumentModel, to_object_id, utcnow
from marketplace.models.user import (
    Bookmark,
    CartItem,
    Client,
    Listing,
    Message,
    User,
    UserKind,
    UserRole,
    parse_user_document,
)
from marketplace.schemas.auth import ClientRegisterRequest, LoginRequest, RegisterRequest
from marketplace.schemas.user import ListingCreate, UserUpdate
from marketplace.services.standing import is_locked_out, is_publicly_visible

logger = logging.getLogger(__name__)

AnyUser = Union[User, Client]

CLIENT_ONLY_FIELDS = ("cover_image", "bio", "website")


class AccountService:
    """Service for account operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with the marketplace database."""
        self.db = db
        self.users_collection = db[marketplace_db.Collections.USERS]

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    async def _insert(self, user: AnyUser) -> AnyUser:
        doc = user.to_document()
        pending = run_pre_write(PendingWrite(document=doc, modified=frozenset(doc)))

        try:
            result = await self.users_collection.insert_one(pending.document)
        except DuplicateKeyError as e:
            raise DuplicateEmailError(doc["email"]) from e

        return parse_user_document({**pending.document, "_id": result.inserted_id})

    async def _save_fields(self, user: AnyUser, changes: dict[str, Any]) -> AnyUser:
        """
        Persist changes to an existing account.

        The whole updated document is validated first; only the changed
        fields (plus `updatedAt`) are written.

        Args:
            user: The account as currently stored
            changes: Python attribute names mapped to their new values

        Raises:
            DocumentValidationError: if the result is not a valid account
            DuplicateEmailError: if the new email belongs to another account
            PasswordHashingError: if a new password could not be hashed
        """
        data = user.model_dump()
        data.update(changes)
        data["updated_at"] = utcnow()
        updated = parse_user_document(data)

        fields = type(updated).model_fields
        modified = frozenset(fields[name].alias or name for name in changes)
        pending = run_pre_write(
            PendingWrite(document=updated.to_document(), modified=modified)
        )

        to_set = {name: pending.document[name] for name in modified}
        to_set["updatedAt"] = pending.document["updatedAt"]

        try:
            await self.users_collection.update_one(
                {"_id": to_object_id(user.id)},
                {"$set": to_set},
            )
        except DuplicateKeyError as e:
            raise DuplicateEmailError(pending.document["email"]) from e

        return parse_user_document(pending.document)

    async def _push(
        self,
        user_id: str,
        field: str,
        element: DocumentModel,
        guard: Optional[dict[str, Any]] = None,
    ) -> bool:
        """
        Append one embedded element with an atomic `$push`.

        `element` is a validated model. Returns False when the account does
        not match `guard`.
        """
        query = {"_id": to_object_id(user_id), **(guard or {})}
        result = await self.users_collection.update_one(
            query,
            {"$push": {field: element.to_document()}, "$set": {"updatedAt": utcnow()}},
        )
        return result.matched_count > 0

    async def _pull(
        self,
        user_id: str,
        field: str,
        key: str,
        value: str,
        missing_message: str,
    ) -> None:
        """
        Remove the embedded elements whose `key` equals `value` with `$pull`.

        Raises:
            NotFoundError: if no element matches
        """
        try:
            value_oid = to_object_id(value)
        except ValueError as e:
            raise NotFoundError(missing_message) from e

        result = await self.users_collection.update_one(
            {"_id": to_object_id(user_id), f"{field}.{key}": value_oid},
            {"$pull": {field: {key: value_oid}}, "$set": {"updatedAt": utcnow()}},
        )
        if result.matched_count == 0:
            raise NotFoundError(missing_message)

    # ------------------------------------------------------------------
    # Registration and login
    # ------------------------------------------------------------------

    async def register_user(self, request: RegisterRequest) -> User:
        """
        Register a new plain user account.

        Raises:
            ValueError: If passwords don't match
            DuplicateEmailError: If the email is already registered
        """
        if not request.passwords_match():
            raise ValueError("Passwords do not match")

        user = parse_user_document({
            "kind": UserKind.USER.value,
            **request.model_dump(exclude={"password_confirm"}),
            "role": UserRole.USER.value,
        })
        created = await self._insert(user)
        logger.info("Registered user %s (%s)", created.id, created.email)
        return created

    async def register_client(self, request: ClientRegisterRequest) -> Client:
        """
        Register a new business account. Clients start out `pending`.

        Raises:
            ValueError: If passwords don't match
            DuplicateEmailError: If the email is already registered
        """
        if not request.passwords_match():
            raise ValueError("Passwords do not match")

        client = parse_user_document({
            "kind": UserKind.CLIENT.value,
            **request.model_dump(exclude={"password_confirm"}),
            "role": UserRole.CLIENT.value,
        })
        created = await self._insert(client)
        logger.info("Registered client %s (%s)", created.id, created.email)
        return created

    async def authenticate(self, request: LoginRequest) -> AnyUser:
        """
        Check credentials and account standing.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
            AccountLockedError: If the account is suspended or banned
        """
        user = await self.get_user_by_email(request.email)

        if user is None or not user.verify_password(request.password):
            logger.warning("Failed login attempt for %s", request.email)
            raise InvalidCredentialsError("Invalid email or password")

        if is_locked_out(user):
            logger.warning("Login refused for locked account %s", user.id)
            raise AccountLockedError("Account is suspended or banned")

        logger.info("User %s logged in", user.id)
        return user

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def get_user_by_id(self, user_id: str) -> Optional[AnyUser]:
        """
        Get user by ID.

        Returns:
            User or Client, or None if not found or the id is malformed
        """
        try:
            user_doc = await self.users_collection.find_one({"_id": to_object_id(user_id)})
        except ValueError:
            return None

        if not user_doc:
            return None
        return parse_user_document(user_doc)

    async def get_user_by_email(self, email: str) -> Optional[AnyUser]:
        user_doc = await self.users_collection.find_one({"email": email})

        if not user_doc:
            return None
        return parse_user_document(user_doc)

    async def require_user(self, user_id: str) -> AnyUser:
        """Get user by ID or raise NotFoundError."""
        user = await self.get_user_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def list_users(
        self,
        kind: Optional[UserKind] = None,
        skip: int = 0,
        limit: int = 50,
    ) -> list[AnyUser]:
        query: dict[str, Any] = {}
        if kind == UserKind.CLIENT:
            query["kind"] = UserKind.CLIENT.value
        elif kind == UserKind.USER:
            query["kind"] = {"$ne": UserKind.CLIENT.value}

        cursor = self.users_collection.find(
            query, sort=[("createdAt", -1)], skip=skip, limit=limit
        )
        return [parse_user_document(doc) for doc in await cursor.to_list(length=None)]

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    async def update_profile(self, user_id: str, request: UserUpdate) -> AnyUser:
        user = await self.require_user(user_id)
        changes = request.model_dump(exclude_unset=True)
        if not isinstance(user, Client):
            for name in CLIENT_ONLY_FIELDS:
                changes.pop(name, None)
        if not changes:
            return user
        return await self._save_fields(user, changes)

    async def change_password(
        self,
        user_id: str,
        current_password: str,
        new_password: str,
    ) -> AnyUser:
        """
        Change user password after verifying current password.

        Raises:
            InvalidCredentialsError: If current password is incorrect
            NotFoundError: If the user does not exist
        """
        user = await self.require_user(user_id)
        if not user.verify_password(current_password):
            raise InvalidCredentialsError("Current password is incorrect")

        updated = await self._save_fields(user, {"password": new_password})
        logger.info("Password changed for user %s", user_id)
        return updated

    async def update_fields(self, user_id: str, changes: dict[str, Any]) -> AnyUser:
        """Apply raw attribute changes; used by admin moderation."""
        user = await self.require_user(user_id)
        return await self._save_fields(user, changes)

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    async def add_listing(self, user_id: str, request: ListingCreate) -> Listing:
        user = await self.require_user(user_id)
        listing = Listing(**request.model_dump())
        await self._push(user.id, "businessImages", listing)
        return listing

    async def remove_listing(self, user_id: str, listing_id: str) -> None:
        user = await self.require_user(user_id)
        await self._pull(user.id, "businessImages", "_id", listing_id, "Listing not found")

    async def list_public_listings(
        self,
        category: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[tuple[AnyUser, Listing]]:
        """Listings of every account in good standing, newest owners first."""
        cursor = self.users_collection.find(
            {"businessImages": {"$exists": True}},
            sort=[("createdAt", -1)],
        )

        results = []
        for doc in await cursor.to_list(length=None):
            owner = parse_user_document(doc)
            if not is_publicly_visible(owner, now):
                continue
            for listing in owner.listings:
                if category is None or listing.category == category:
                    results.append((owner, listing))
        return results

    # ------------------------------------------------------------------
    # Bookmarks
    # ------------------------------------------------------------------

    async def add_bookmark(self, user_id: str, product_id: str) -> Bookmark:
        """Bookmark a product; bookmarking it again returns the existing bookmark."""
        product_oid = to_object_id(product_id)
        user = await self.require_user(user_id)

        bookmark = Bookmark(product_id=product_id)
        if await self._push(
            user.id, "bookmarks", bookmark, {"bookmarks.productId": {"$ne": product_oid}}
        ):
            return bookmark

        current = await self.require_user(user_id)
        return next((b for b in current.bookmarks if b.product_id == product_id), bookmark)

    async def remove_bookmark(self, user_id: str, product_id: str) -> None:
        user = await self.require_user(user_id)
        await self._pull(user.id, "bookmarks", "productId", product_id, "Bookmark not found")

    # ------------------------------------------------------------------
    # Cart
    # ------------------------------------------------------------------

    async def add_to_cart(self, user_id: str, product_id: str, quantity: int = 1) -> CartItem:
        """Add a product to the cart; a product already in the cart gains quantity."""
        product_oid = to_object_id(product_id)
        user = await self.require_user(user_id)
        user_oid = to_object_id(user.id)
        item = CartItem(product_id=product_id, quantity=quantity)

        # Another request may add the same product between the two updates;
        # retry until one of them lands.
        while True:
            result = await self.users_collection.update_one(
                {"_id": user_oid, "cart.productId": product_oid},
                {"$inc": {"cart.$.quantity": quantity}, "$set": {"updatedAt": utcnow()}},
            )
            if result.matched_count:
                current = await self.require_user(user_id)
                return next((i for i in current.cart if i.product_id == product_id), item)

            if await self._push(
                user.id, "cart", item, {"cart.productId": {"$ne": product_oid}}
            ):
                return item
            if not await self.users_collection.count_documents({"_id": user_oid}, limit=1):
                raise NotFoundError("User not found")

    async def remove_from_cart(self, user_id: str, product_id: str) -> None:
        user = await self.require_user(user_id)
        await self._pull(user.id, "cart", "productId", product_id, "Cart item not found")

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    async def send_message(self, sender_id: str, recipient_id: str, body: str) -> Message:
        """
        Deliver a message. The same message (same id) lands in the sender's
        and the recipient's inbox.
        """
        sender = await self.require_user(sender_id)
        recipient = await self.require_user(recipient_id)

        message = Message(sender=sender.id, recipient=recipient.id, body=body)
        await self._push(sender.id, "messages", message)
        if recipient.id != sender.id:
            await self._push(recipient.id, "messages", message)
        return message

    async def get_messages(self, user_id: str) -> list[Message]:
        user = await self.require_user(user_id)
        return sorted(user.messages, key=lambda m: m.sent_at, reverse=True)
