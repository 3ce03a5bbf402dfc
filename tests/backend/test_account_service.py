"""
Tests for AccountService: registration, login, and the writes that hang off
an account (profile, listings, bookmarks, cart, messages).
"""

import asyncio

import pytest
from bson import ObjectId

from marketplace.core.errors import (
    AccountLockedError,
    DuplicateEmailError,
    InvalidCredentialsError,
    NotFoundError,
    PasswordHashingError,
)
from marketplace.core.security import verify_password
from marketplace.models.user import Ban, Client, User, UserKind
from marketplace.schemas.auth import ClientRegisterRequest, LoginRequest, RegisterRequest
from marketplace.schemas.user import ListingCreate, UserUpdate


def listing_payload(**overrides) -> ListingCreate:
    data = {
        "url": "https://img.example.com/chair.png",
        "name": "Oak chair",
        "price": 45.0,
        "description": "Solid oak dining chair",
        "category": "Furniture",
    }
    data.update(overrides)
    return ListingCreate(**data)


class TestRegistration:
    """Tests for register_user / register_client."""

    @pytest.mark.asyncio
    async def test_register_user_stores_hash_not_plaintext(
        self, account_service, mock_marketplace_db, test_user_data
    ):
        user = await account_service.register_user(RegisterRequest(**test_user_data))

        assert isinstance(user, User)
        assert user.role == "user"

        stored = await mock_marketplace_db.users.find_one({"email": "amina@example.com"})
        assert stored["password"] != test_user_data["password"]
        assert stored["password"].startswith("$2b$10$")
        assert stored["kind"] == "User"
        assert stored["firstName"] == "Amina"
        assert "password_confirm" not in stored

    @pytest.mark.asyncio
    async def test_verify_password_on_registered_user(self, account_service, test_user_data):
        user = await account_service.register_user(RegisterRequest(**test_user_data))

        assert user.verify_password("SecurePassword123!") is True
        assert user.verify_password("WrongPassword!") is False

    @pytest.mark.asyncio
    async def test_register_mismatched_passwords_rejected(self, account_service, test_user_data):
        test_user_data["password_confirm"] = "SomethingElse123!"

        with pytest.raises(ValueError, match="Passwords do not match"):
            await account_service.register_user(RegisterRequest(**test_user_data))

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected_and_original_untouched(
        self, account_service, mock_marketplace_db, test_user_data
    ):
        await account_service.register_user(RegisterRequest(**test_user_data))
        before = await mock_marketplace_db.users.find_one({"email": "amina@example.com"})

        duplicate = dict(test_user_data, first_name="Impostor", password="OtherPassword1!",
                         password_confirm="OtherPassword1!")
        with pytest.raises(DuplicateEmailError):
            await account_service.register_user(RegisterRequest(**duplicate))

        after = await mock_marketplace_db.users.find_one({"email": "amina@example.com"})
        assert after == before
        assert await mock_marketplace_db.users.count_documents({}) == 1

    @pytest.mark.asyncio
    async def test_client_shares_email_space_with_users(
        self, account_service, test_user_data, test_client_data
    ):
        await account_service.register_user(RegisterRequest(**test_user_data))
        test_client_data["email"] = test_user_data["email"]

        with pytest.raises(DuplicateEmailError):
            await account_service.register_client(ClientRegisterRequest(**test_client_data))

    @pytest.mark.asyncio
    async def test_register_client_defaults(
        self, account_service, mock_marketplace_db, test_client_data
    ):
        client = await account_service.register_client(ClientRegisterRequest(**test_client_data))

        assert isinstance(client, Client)
        assert client.status == "pending"
        assert client.role == "client"
        assert client.approved is False

        stored = await mock_marketplace_db.users.find_one({"_id": ObjectId(client.id)})
        assert stored["kind"] == "Client"
        assert stored["businessName"] == "Kofi Crafts"
        assert stored["bio"] == "Handmade furniture"


    @pytest.mark.asyncio
    async def test_failed_hashing_stores_nothing(
        self, account_service, mock_marketplace_db, test_user_data, monkeypatch
    ):
        def broken_hash(value):
            raise RuntimeError("no entropy")

        monkeypatch.setattr("marketplace.core.pipeline.hash_password", broken_hash)

        with pytest.raises(PasswordHashingError):
            await account_service.register_user(RegisterRequest(**test_user_data))

        assert await mock_marketplace_db.users.count_documents({}) == 0


class TestAuthenticate:
    """Tests for authenticate (login)."""

    @pytest.mark.asyncio
    async def test_correct_credentials(self, account_service, register_user):
        created = await register_user(email="login@example.com")

        user = await account_service.authenticate(
            LoginRequest(email="login@example.com", password="SecurePassword123!")
        )

        assert user.id == created.id

    @pytest.mark.asyncio
    async def test_wrong_password(self, account_service, register_user):
        await register_user(email="login@example.com")

        with pytest.raises(InvalidCredentialsError):
            await account_service.authenticate(
                LoginRequest(email="login@example.com", password="WrongPassword!")
            )

    @pytest.mark.asyncio
    async def test_unknown_email(self, account_service):
        with pytest.raises(InvalidCredentialsError):
            await account_service.authenticate(
                LoginRequest(email="nobody@example.com", password="whatever")
            )

    @pytest.mark.asyncio
    async def test_suspended_account_cannot_log_in(self, account_service, register_user):
        user = await register_user(email="locked@example.com")
        await account_service.update_fields(user.id, {"suspended": True})

        with pytest.raises(AccountLockedError):
            await account_service.authenticate(
                LoginRequest(email="locked@example.com", password="SecurePassword123!")
            )

    @pytest.mark.asyncio
    async def test_banned_account_cannot_log_in(self, account_service, register_user):
        from marketplace.models.common import utcnow

        user = await register_user(email="banned@example.com")
        await account_service.update_fields(
            user.id, {"ban": Ban(active=True, days=3, banned_at=utcnow())}
        )

        with pytest.raises(AccountLockedError):
            await account_service.authenticate(
                LoginRequest(email="banned@example.com", password="SecurePassword123!")
            )


class TestUpdates:
    """Tests for the update write path."""

    @pytest.mark.asyncio
    async def test_non_password_update_keeps_hash(
        self, account_service, mock_marketplace_db, register_user
    ):
        user = await register_user()
        before = await mock_marketplace_db.users.find_one({"_id": ObjectId(user.id)})

        await account_service.update_profile(user.id, UserUpdate(first_name="Renamed"))

        after = await mock_marketplace_db.users.find_one({"_id": ObjectId(user.id)})
        assert after["firstName"] == "Renamed"
        assert after["password"] == before["password"]
        assert after["updatedAt"] >= before["updatedAt"]

    @pytest.mark.asyncio
    async def test_change_password_rehashes(
        self, account_service, mock_marketplace_db, register_user
    ):
        user = await register_user()

        await account_service.change_password(user.id, "SecurePassword123!", "BrandNewPass456!")

        stored = await mock_marketplace_db.users.find_one({"_id": ObjectId(user.id)})
        assert stored["password"] != "BrandNewPass456!"
        assert verify_password("BrandNewPass456!", stored["password"])
        assert not verify_password("SecurePassword123!", stored["password"])

    @pytest.mark.asyncio
    async def test_failed_hashing_keeps_old_password(
        self, account_service, mock_marketplace_db, register_user, monkeypatch
    ):
        user = await register_user()
        before = await mock_marketplace_db.users.find_one({"_id": ObjectId(user.id)})

        def broken_hash(value):
            raise RuntimeError("no entropy")

        monkeypatch.setattr("marketplace.core.pipeline.hash_password", broken_hash)

        with pytest.raises(PasswordHashingError):
            await account_service.change_password(user.id, "SecurePassword123!", "BrandNewPass456!")

        after = await mock_marketplace_db.users.find_one({"_id": ObjectId(user.id)})
        assert after["password"] == before["password"]

    @pytest.mark.asyncio
    async def test_change_password_requires_current(self, account_service, register_user):
        user = await register_user()

        with pytest.raises(InvalidCredentialsError):
            await account_service.change_password(user.id, "WrongPassword!", "BrandNewPass456!")

    @pytest.mark.asyncio
    async def test_client_only_fields_ignored_for_users(
        self, account_service, mock_marketplace_db, register_user
    ):
        user = await register_user()

        await account_service.update_profile(user.id, UserUpdate(bio="Not a shop"))

        stored = await mock_marketplace_db.users.find_one({"_id": ObjectId(user.id)})
        assert "bio" not in stored

    @pytest.mark.asyncio
    async def test_client_profile_fields_updated(self, account_service, test_client_data):
        client = await account_service.register_client(ClientRegisterRequest(**test_client_data))

        updated = await account_service.update_profile(
            client.id, UserUpdate(bio="Now with tables", website="https://kofi.example.com")
        )

        assert updated.bio == "Now with tables"
        assert updated.website == "https://kofi.example.com"

    @pytest.mark.asyncio
    async def test_email_change_to_taken_address_rejected(self, account_service, register_user):
        await register_user(email="first@example.com")
        second = await register_user(email="second@example.com")

        with pytest.raises(DuplicateEmailError):
            await account_service.update_profile(second.id, UserUpdate(email="first@example.com"))

    @pytest.mark.asyncio
    async def test_unknown_user(self, account_service):
        with pytest.raises(NotFoundError):
            await account_service.update_fields(str(ObjectId()), {"suspended": True})

    @pytest.mark.asyncio
    async def test_malformed_id_reads_as_missing(self, account_service):
        assert await account_service.get_user_by_id("not-an-id") is None


class TestLookups:

    @pytest.mark.asyncio
    async def test_list_users_by_kind(self, account_service, register_user, test_client_data):
        await register_user()
        await account_service.register_client(ClientRegisterRequest(**test_client_data))

        clients = await account_service.list_users(kind=UserKind.CLIENT)
        users = await account_service.list_users(kind=UserKind.USER)

        assert [c.email for c in clients] == ["kofi@example.com"]
        assert [u.email for u in users] == ["user1@example.com"]
        assert len(await account_service.list_users()) == 2

    @pytest.mark.asyncio
    async def test_legacy_document_without_kind_is_a_user(
        self, account_service, mock_marketplace_db
    ):
        result = await mock_marketplace_db.users.insert_one({
            "firstName": "Legacy",
            "email": "legacy@example.com",
            "password": "$2b$10$abcdefghijklmnopqrstuv",
        })

        user = await account_service.get_user_by_id(str(result.inserted_id))

        assert isinstance(user, User)
        assert user.role == "user"


class TestListings:

    @pytest.mark.asyncio
    async def test_add_and_remove_listing(self, account_service, mock_marketplace_db, register_user):
        user = await register_user()

        listing = await account_service.add_listing(user.id, listing_payload())

        stored = await mock_marketplace_db.users.find_one({"_id": ObjectId(user.id)})
        assert stored["businessImages"][0]["name"] == "Oak chair"
        assert stored["businessImages"][0]["_id"] == ObjectId(listing.id)

        await account_service.remove_listing(user.id, listing.id)

        stored = await mock_marketplace_db.users.find_one({"_id": ObjectId(user.id)})
        assert stored["businessImages"] == []

    @pytest.mark.asyncio
    async def test_concurrent_listings_are_all_kept(self, account_service, register_user):
        user = await register_user()

        await asyncio.gather(
            *(account_service.add_listing(user.id, listing_payload(name=f"Item {n}"))
              for n in range(3))
        )

        names = {listing.name for listing in (await account_service.require_user(user.id)).listings}
        assert names == {"Item 0", "Item 1", "Item 2"}

    @pytest.mark.asyncio
    async def test_remove_missing_listing(self, account_service, register_user):
        user = await register_user()

        with pytest.raises(NotFoundError):
            await account_service.remove_listing(user.id, str(ObjectId()))
        with pytest.raises(NotFoundError):
            await account_service.remove_listing(user.id, "not-an-id")

    @pytest.mark.asyncio
    async def test_public_listings_respect_standing(
        self, account_service, register_user, test_client_data
    ):
        visible = await register_user(email="visible@example.com")
        suspended = await register_user(email="suspended@example.com")
        client = await account_service.register_client(ClientRegisterRequest(**test_client_data))

        await account_service.add_listing(visible.id, listing_payload(name="Visible chair"))
        await account_service.add_listing(suspended.id, listing_payload(name="Hidden chair"))
        await account_service.add_listing(client.id, listing_payload(name="Pending table"))
        await account_service.update_fields(suspended.id, {"suspended": True})

        names = [listing.name for _, listing in await account_service.list_public_listings()]
        assert names == ["Visible chair"]

        await account_service.update_fields(client.id, {"status": "approved"})
        names = {listing.name for _, listing in await account_service.list_public_listings()}
        assert names == {"Visible chair", "Pending table"}

    @pytest.mark.asyncio
    async def test_public_listings_filter_by_category(self, account_service, register_user):
        user = await register_user()
        await account_service.add_listing(user.id, listing_payload(name="Chair"))
        await account_service.add_listing(user.id, listing_payload(name="Lamp", category="Lighting"))

        results = await account_service.list_public_listings(category="Lighting")

        assert [listing.name for _, listing in results] == ["Lamp"]


class TestBookmarksAndCart:

    @pytest.mark.asyncio
    async def test_bookmark_is_not_duplicated(self, account_service, register_user):
        user = await register_user()
        product_id = str(ObjectId())

        first = await account_service.add_bookmark(user.id, product_id)
        second = await account_service.add_bookmark(user.id, product_id)

        assert first.id == second.id
        stored = await account_service.require_user(user.id)
        assert len(stored.bookmarks) == 1

    @pytest.mark.asyncio
    async def test_bookmark_requires_valid_product_id(self, account_service, register_user):
        user = await register_user()

        with pytest.raises(ValueError):
            await account_service.add_bookmark(user.id, "bogus")

    @pytest.mark.asyncio
    async def test_remove_bookmark(self, account_service, register_user):
        user = await register_user()
        product_id = str(ObjectId())
        await account_service.add_bookmark(user.id, product_id)

        await account_service.remove_bookmark(user.id, product_id)

        assert (await account_service.require_user(user.id)).bookmarks == []
        with pytest.raises(NotFoundError):
            await account_service.remove_bookmark(user.id, product_id)

    @pytest.mark.asyncio
    async def test_cart_quantity_accumulates(self, account_service, register_user):
        user = await register_user()
        product_id = str(ObjectId())

        await account_service.add_to_cart(user.id, product_id)
        item = await account_service.add_to_cart(user.id, product_id, quantity=2)

        assert item.quantity == 3
        stored = await account_service.require_user(user.id)
        assert len(stored.cart) == 1
        assert stored.cart[0].quantity == 3

    @pytest.mark.asyncio
    async def test_cart_increment_from_stale_read_is_kept(
        self, account_service, register_user, monkeypatch
    ):
        user = await register_user()
        product_id = str(ObjectId())
        snapshot = await account_service.require_user(user.id)
        await account_service.add_to_cart(user.id, product_id)

        async def stale_require_user(user_id):
            return snapshot

        monkeypatch.setattr(account_service, "require_user", stale_require_user)
        await account_service.add_to_cart(user.id, product_id, quantity=2)
        monkeypatch.undo()

        cart = (await account_service.require_user(user.id)).cart
        assert [(item.product_id, item.quantity) for item in cart] == [(product_id, 3)]

    @pytest.mark.asyncio
    async def test_concurrent_cart_adds_all_count(self, account_service, register_user):
        user = await register_user()
        product_id = str(ObjectId())

        await asyncio.gather(
            *(account_service.add_to_cart(user.id, product_id) for _ in range(5))
        )

        cart = (await account_service.require_user(user.id)).cart
        assert len(cart) == 1
        assert cart[0].quantity == 5

    @pytest.mark.asyncio
    async def test_remove_from_cart(self, account_service, register_user):
        user = await register_user()
        product_id = str(ObjectId())
        await account_service.add_to_cart(user.id, product_id)

        await account_service.remove_from_cart(user.id, product_id)

        assert (await account_service.require_user(user.id)).cart == []


class TestMessages:

    @pytest.mark.asyncio
    async def test_message_lands_in_both_inboxes(self, account_service, register_user):
        sender = await register_user()
        recipient = await register_user()

        message = await account_service.send_message(sender.id, recipient.id, "Is the chair available?")

        sender_inbox = await account_service.get_messages(sender.id)
        recipient_inbox = await account_service.get_messages(recipient.id)
        assert [m.id for m in sender_inbox] == [message.id]
        assert [m.id for m in recipient_inbox] == [message.id]
        assert recipient_inbox[0].sender == sender.id
        assert recipient_inbox[0].recipient == recipient.id
        assert recipient_inbox[0].body == "Is the chair available?"

    @pytest.mark.asyncio
    async def test_delivery_from_stale_read_keeps_earlier_messages(
        self, account_service, register_user, monkeypatch
    ):
        first_sender = await register_user()
        second_sender = await register_user()
        recipient = await register_user()
        snapshots = {
            user.id: await account_service.require_user(user.id)
            for user in (second_sender, recipient)
        }

        await account_service.send_message(first_sender.id, recipient.id, "first")

        async def stale_require_user(user_id):
            return snapshots[user_id]

        monkeypatch.setattr(account_service, "require_user", stale_require_user)
        await account_service.send_message(second_sender.id, recipient.id, "second")
        monkeypatch.undo()

        inbox = await account_service.get_messages(recipient.id)
        assert sorted(m.body for m in inbox) == ["first", "second"]

    @pytest.mark.asyncio
    async def test_message_to_unknown_recipient(self, account_service, register_user):
        sender = await register_user()

        with pytest.raises(NotFoundError):
            await account_service.send_message(sender.id, str(ObjectId()), "Hello?")

        assert await account_service.get_messages(sender.id) == []
