"""
Contact API Routes - public contact form submission and admin inbox management.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from app.db_handlers import ContactDBHandler
from app.dependencies.auth import get_current_user
from app.schemas import ContactCreate, ContactResponse, ContactUpdate
from app.utils.logger import setup_logger
from app.utils.object_id import normalize_object_id

logger = setup_logger("api.contacts")

router = APIRouter(prefix="/contacts", tags=["Contacts"])


def parse_contact_id(contact_id: str) -> str:
    canonical = normalize_object_id(contact_id)
    if canonical is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid contact ID format",
        )
    return canonical


@router.get(
    "",
    response_model=list[ContactResponse],
    dependencies=[Depends(get_current_user)],
)
async def list_contacts(contact_db_handler: ContactDBHandler = Depends()):
    """List contact messages, newest first."""
    try:
        contacts = await contact_db_handler.list_newest_first()
    except Exception as e:
        logger.error(f"Error listing contacts: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load contacts",
        ) from e
    return [ContactResponse.model_validate(c) for c in contacts]


@router.post(
    "", response_model=ContactResponse, status_code=status.HTTP_201_CREATED
)
async def create_contact(
    contact_data: ContactCreate,
    contact_db_handler: ContactDBHandler = Depends(),
):
    """Store a message from the public contact form."""
    try:
        contact = await contact_db_handler.create(contact_data.model_dump())
    except Exception as e:
        logger.error(f"Error saving contact message: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send message",
        ) from e
    logger.info(f"New contact message {contact.id} from {contact.email}")
    return ContactResponse.model_validate(contact)


@router.put(
    "/{contact_id}",
    response_model=ContactResponse,
    dependencies=[Depends(get_current_user)],
)
async def update_contact(
    contact_id: str,
    update: ContactUpdate,
    contact_db_handler: ContactDBHandler = Depends(),
):
    """Partial update, typically toggling the read flag."""
    canonical_id = parse_contact_id(contact_id)
    try:
        contact = await contact_db_handler.update_by_id(
            canonical_id, update.to_update_dict()
        )
    except Exception as e:
        logger.error(f"Error updating contact {canonical_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update contact",
        ) from e

    if contact is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Contact not found"
        )
    return ContactResponse.model_validate(contact)


@router.delete("/{contact_id}", dependencies=[Depends(get_current_user)])
async def delete_contact(
    contact_id: str,
    contact_db_handler: ContactDBHandler = Depends(),
):
    canonical_id = parse_contact_id(contact_id)
    try:
        contact = await contact_db_handler.remove(canonical_id)
    except Exception as e:
        logger.error(f"Error deleting contact {canonical_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete contact",
        ) from e

    if contact is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Contact not found"
        )
    return {}
