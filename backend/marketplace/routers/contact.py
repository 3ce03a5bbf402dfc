"""
Contact form router.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, status

from marketplace.dependencies.services import get_contact_service
from marketplace.schemas.contact import ContactCreate, ContactResponse
from marketplace.services.contact_service import ContactService

router = APIRouter(tags=["Contact"])


@router.post(
    "/contact",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a message to the site owners",
)
async def submit_contact(
    body: ContactCreate,
    contacts: Annotated[ContactService, Depends(get_contact_service)],
):
    contact = await contacts.submit(body)
    return ContactResponse.model_validate(contact)
