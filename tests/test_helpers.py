"""
Tests for the persistence helpers against an in-memory SQLite store.
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import delete, func, select

from database.helpers import (
    DuplicateEmail,
    create_contact,
    create_user,
    delete_contact,
    get_user_by_email,
    get_user_by_id,
    list_contacts,
)
from database.models import Contact, User


async def _user(db, email="ann@x.com", name="Ann"):
    return await create_user(db, name=name, email=email, password_hash="hash")


class TestUsers:
    @pytest.mark.asyncio
    async def test_create_assigns_id_and_timestamp(self, db):
        user = await _user(db)
        assert user.id is not None
        assert user.created_at is not None

    @pytest.mark.asyncio
    async def test_lookup_by_email_and_id(self, db):
        user = await _user(db)
        assert (await get_user_by_email(db, "ann@x.com")).id == user.id
        assert (await get_user_by_id(db, user.id)).email == "ann@x.com"
        assert await get_user_by_email(db, "nobody@x.com") is None
        assert await get_user_by_id(db, user.id + 100) is None

    @pytest.mark.asyncio
    async def test_email_lookup_is_case_sensitive(self, db):
        await _user(db, email="Ann@x.com")
        assert await get_user_by_email(db, "ann@x.com") is None

    @pytest.mark.asyncio
    async def test_unique_constraint_raises_duplicate(self, db):
        await _user(db)
        with pytest.raises(DuplicateEmail):
            await _user(db, name="Other")
        count = await db.scalar(select(func.count()).select_from(User))
        assert count == 1


class TestContacts:
    @pytest.mark.asyncio
    async def test_list_is_owner_scoped(self, db):
        ann = await _user(db)
        bob = await _user(db, email="bob@x.com", name="Bob")
        await create_contact(db, ann.id, name="Mum", number="111")
        await create_contact(db, bob.id, name="Dad", number="222")

        names = [c.name for c in await list_contacts(db, ann.id)]
        assert names == ["Mum"]

    @pytest.mark.asyncio
    async def test_list_newest_first(self, db):
        ann = await _user(db)
        old = await create_contact(db, ann.id, name="Old", number="1")
        new = await create_contact(db, ann.id, name="New", number="2")
        old.created_at = datetime.now(timezone.utc) - timedelta(days=1)
        await db.commit()

        assert [c.id for c in await list_contacts(db, ann.id)] == [new.id, old.id]

    @pytest.mark.asyncio
    async def test_delete_requires_ownership(self, db):
        ann = await _user(db)
        bob = await _user(db, email="bob@x.com", name="Bob")
        contact = await create_contact(db, ann.id, name="Mum", number="111")

        assert await delete_contact(db, bob.id, contact.id) is None
        assert len(await list_contacts(db, ann.id)) == 1

        assert await delete_contact(db, ann.id, contact.id) == contact.id
        assert await list_contacts(db, ann.id) == []

    @pytest.mark.asyncio
    async def test_delete_missing_returns_none(self, db):
        ann = await _user(db)
        assert await delete_contact(db, ann.id, 999) is None

    @pytest.mark.asyncio
    async def test_deleting_user_cascades_to_contacts(self, db):
        ann = await _user(db)
        await create_contact(db, ann.id, name="Mum", number="111")
        await db.execute(delete(User).where(User.id == ann.id))
        await db.commit()

        count = await db.scalar(select(func.count()).select_from(Contact))
        assert count == 0
