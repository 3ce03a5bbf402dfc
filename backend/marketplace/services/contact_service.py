"""
Contact form submissions.
"""
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from marketplace.database.databases import marketplace_db
from marketplace.models.contact import Contact
from marketplace.schemas.contact import ContactCreate

logger = logging.getLogger(__name__)


class ContactService:

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.contacts_collection = db[marketplace_db.Collections.CONTACTS]

    async def submit(self, request: ContactCreate) -> Contact:
        contact = Contact(**request.model_dump())
        result = await self.contacts_collection.insert_one(contact.to_document())
        logger.info("Contact message received from %s", request.email)
        return contact.model_copy(update={"id": str(result.inserted_id)})

    async def list_contacts(self, limit: int = 100) -> list[Contact]:
        cursor = self.contacts_collection.find({}, sort=[("createdAt", -1)], limit=limit)
        return [Contact.model_validate(doc) for doc in await cursor.to_list(length=None)]
