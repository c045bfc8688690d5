"""
PhotoShare Backend — Comment Service Unit Tests
=================================================

What we test:
    ✅ Comments come back in the order they were posted, authors resolved
    ✅ Only the author may delete a comment
    ✅ Deleting keeps the remaining comments in order
    ✅ Unknown photo or comment → NotFoundError
"""

from uuid import uuid4

import pytest

from photoshare.exceptions import ForbiddenError, NotFoundError
from photoshare.services.comment_service import CommentService
from photoshare.services.photo_service import PhotoService


class TestCommentService:

    def setup_method(self):
        self.service = CommentService()
        self.photos = PhotoService()

    async def _photo(self, database, owner_id):
        async with database.session_factory() as db:
            photo = await self.photos.create(db, owner_id, "https://cdn.test/cat.jpg")
            await db.commit()
        return photo

    async def _add(self, database, photo_id, author_id, text):
        async with database.session_factory() as db:
            thread = await self.service.add(db, photo_id, author_id, text)
            await db.commit()
        return thread

    @pytest.mark.asyncio
    async def test_comments_keep_posting_order(self, database, make_user):
        alice = await make_user("alice")
        bob = await make_user("bob")
        photo = await self._photo(database, alice)

        await self._add(database, photo.id, bob, "first")
        await self._add(database, photo.id, alice, "second")
        thread = await self._add(database, photo.id, bob, "third")

        assert [c.text for c in thread] == ["first", "second", "third"]
        assert [c.author.username for c in thread] == ["bob", "alice", "bob"]

        async with database.session_factory() as db:
            [listed] = await self.photos.list_photos(db)
        assert [c.id for c in listed.comments] == [c.id for c in thread]

    @pytest.mark.asyncio
    async def test_comment_on_unknown_photo(self, database, make_user):
        alice = await make_user("alice")
        async with database.session_factory() as db:
            with pytest.raises(NotFoundError) as exc_info:
                await self.service.add(db, uuid4(), alice, "hello?")
        assert exc_info.value.resource == "photo"

    @pytest.mark.asyncio
    async def test_author_deletes_comment(self, database, make_user):
        alice = await make_user("alice")
        bob = await make_user("bob")
        photo = await self._photo(database, alice)

        await self._add(database, photo.id, bob, "first")
        thread = await self._add(database, photo.id, bob, "second")
        await self._add(database, photo.id, alice, "third")

        async with database.session_factory() as db:
            await self.service.remove(db, photo.id, thread[1].id, bob)
            await db.commit()

        async with database.session_factory() as db:
            [listed] = await self.photos.list_photos(db)
        assert [c.text for c in listed.comments] == ["first", "third"]

    @pytest.mark.asyncio
    async def test_non_author_cannot_delete(self, database, make_user):
        alice = await make_user("alice")
        bob = await make_user("bob")
        photo = await self._photo(database, alice)
        [comment] = await self._add(database, photo.id, bob, "mine")

        # Owning the photo does not grant rights over other people's comments
        async with database.session_factory() as db:
            with pytest.raises(ForbiddenError):
                await self.service.remove(db, photo.id, comment.id, alice)

        async with database.session_factory() as db:
            [listed] = await self.photos.list_photos(db)
        assert len(listed.comments) == 1

    @pytest.mark.asyncio
    async def test_delete_missing_comment(self, database, make_user):
        alice = await make_user("alice")
        photo = await self._photo(database, alice)

        async with database.session_factory() as db:
            with pytest.raises(NotFoundError) as exc_info:
                await self.service.remove(db, photo.id, uuid4(), alice)
        assert exc_info.value.resource == "comment"
