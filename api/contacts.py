"""
Contact routes — list, create and delete the caller's own contacts.

Route prefix: /contacts
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import NotFoundError
from auth.dependencies import CurrentUser, db_session, get_current_user
from database.helpers import create_contact, delete_contact, list_contacts

logger = logging.getLogger(__name__)

router = APIRouter(tags=["contacts"])


class ContactCreate(BaseModel):
    name: str
    number: str


class ContactOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    number: str


class DeletedContact(BaseModel):
    id: int


@router.get("", response_model=List[ContactOut])
async def get_contacts(
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(db_session),
) -> List[Any]:
    return await list_contacts(session, user.id)


@router.post("", response_model=ContactOut, status_code=status.HTTP_201_CREATED)
async def add_contact(
    req: ContactCreate,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(db_session),
) -> Any:
    contact = await create_contact(session, user.id, name=req.name, number=req.number)
    logger.info("User %s created contact %s", user.id, contact.id)
    return contact


@router.delete("/{contact_id}", response_model=DeletedContact)
async def remove_contact(
    contact_id: str,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, int]:
    """Delete one of the caller's contacts; someone else's id is a 404 like a missing one."""
    try:
        cid = int(contact_id)
    except ValueError:
        raise NotFoundError("Contact not found!")

    deleted = await delete_contact(session, user.id, cid)
    if deleted is None:
        raise NotFoundError("Contact not found!")

    logger.info("User %s deleted contact %s", user.id, deleted)
    return {"id": deleted}
