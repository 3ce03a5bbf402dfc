"""
Contact form submissions for the `contacts` collection.
"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from marketplace.models.common import DocumentModel, ObjectIdStr, utcnow


class Contact(DocumentModel):
    id: Optional[ObjectIdStr] = Field(None, alias="_id")
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
