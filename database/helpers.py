"""
Database helper functions — user lookup and owner-scoped contact queries.

Every function runs a single statement; callers own the session and
decide when to commit.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Contact, User

logger = logging.getLogger(__name__)


class DuplicateEmail(Exception):
    """The store's unique constraint on ``users.email`` rejected an insert."""


# ── Users ───────────────────────────────────────────────────────────────


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user_by_id(session: AsyncSession, user_id: int) -> Optional[User]:
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def create_user(
    session: AsyncSession,
    *,
    name: str,
    email: str,
    password_hash: str,
) -> User:
    """
    Insert a user and commit.

    Raises ``DuplicateEmail`` when another row already holds ``email``; a
    pre-check by the caller is only an early exit, this is the real guard.
    """
    user = User(name=name, email=email, password_hash=password_hash)
    session.add(user)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise DuplicateEmail(email) from exc
    return user


# ── Contacts ────────────────────────────────────────────────────────────


async def list_contacts(session: AsyncSession, owner_id: int) -> List[Contact]:
    """All contacts of ``owner_id``, newest first."""
    result = await session.execute(
        select(Contact)
        .where(Contact.user_id == owner_id)
        .order_by(Contact.created_at.desc(), Contact.id.desc())
    )
    return list(result.scalars().all())


async def create_contact(
    session: AsyncSession,
    owner_id: int,
    *,
    name: str,
    number: str,
) -> Contact:
    contact = Contact(name=name, number=number, user_id=owner_id)
    session.add(contact)
    await session.commit()
    return contact


async def delete_contact(
    session: AsyncSession,
    owner_id: int,
    contact_id: int,
) -> Optional[int]:
    """
    Delete ``contact_id`` only if ``owner_id`` owns it.

    Returns the deleted id, or ``None`` when no row matched (missing or
    owned by someone else).
    """
    result = await session.execute(
        delete(Contact)
        .where(Contact.id == contact_id, Contact.user_id == owner_id)
        .returning(Contact.id)
    )
    deleted = result.scalar_one_or_none()
    await session.commit()
    if deleted is None:
        logger.debug("Delete of contact %s by user %s matched no row", contact_id, owner_id)
    return deleted
