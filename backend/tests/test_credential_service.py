"""
PhotoShare Backend — Credential Service Unit Tests
====================================================

What we test:
    ✅ Password hashing helpers (salted, verifiable, malformed hash)
    ✅ Signup stores a hash, never the plaintext
    ✅ Duplicate email rejected, case-insensitively; the first account is untouched
    ✅ Login with the right password returns the user
    ✅ Wrong password and unknown email both fail as InvalidCredentialError,
       each after exactly one bcrypt check
    ✅ Database failures surface as PersistenceError
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from photoshare.exceptions import (
    DuplicateEmailError,
    InvalidCredentialError,
    PersistenceError,
    UnknownEmailError,
)
from photoshare.models.user import User
from photoshare.services.credential_service import (
    CredentialService,
    check_password,
    hash_password,
)


class TestPasswordHashing:

    def test_hash_is_salted_and_verifiable(self):
        first = hash_password("hunter2", rounds=4)
        second = hash_password("hunter2", rounds=4)

        assert first != second
        assert first.startswith("$2b$04$")
        assert check_password("hunter2", first)
        assert check_password("hunter2", second)

    def test_wrong_password_does_not_match(self):
        hashed = hash_password("hunter2", rounds=4)
        assert not check_password("hunter3", hashed)

    def test_long_passwords_differ_past_72_bytes(self):
        """Pre-hashing makes bytes beyond bcrypt's 72-byte limit significant."""
        base = "a" * 80
        hashed = hash_password(base + "x", rounds=4)
        assert not check_password(base + "y", hashed)

    def test_malformed_hash_is_a_mismatch(self):
        assert check_password("anything", "not-a-bcrypt-hash") is False


class TestRegister:

    def setup_method(self):
        self.service = CredentialService(rounds=4)

    @pytest.mark.asyncio
    async def test_register_stores_hash_not_plaintext(self, database):
        async with database.session_factory() as db:
            user_id = await self.service.register(db, "alice", "alice@x.com", "pw")
            await db.commit()

        async with database.session_factory() as db:
            user = (await db.execute(select(User).where(User.id == user_id))).scalar_one()

        assert user.username == "alice"
        assert user.email == "alice@x.com"
        assert user.password_hash != "pw"
        assert check_password("pw", user.password_hash)

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, database):
        async with database.session_factory() as db:
            await self.service.register(db, "alice", "alice@x.com", "pw")
            await db.commit()

        async with database.session_factory() as db:
            with pytest.raises(DuplicateEmailError):
                await self.service.register(db, "alice2", "alice@x.com", "other")

    @pytest.mark.asyncio
    async def test_duplicate_email_check_ignores_case(self, database):
        async with database.session_factory() as db:
            await self.service.register(db, "alice", "Alice@X.com", "pw")
            await db.commit()

        async with database.session_factory() as db:
            with pytest.raises(DuplicateEmailError):
                await self.service.register(db, "alice2", "alice@x.COM", "pw")

    @pytest.mark.asyncio
    async def test_duplicate_leaves_first_account_intact(self, database):
        async with database.session_factory() as db:
            first_id = await self.service.register(db, "alice", "alice@x.com", "pw")

        async with database.session_factory() as db:
            with pytest.raises(DuplicateEmailError):
                await self.service.register(db, "mallory", "alice@x.com", "other")

        async with database.session_factory() as db:
            users = (await db.execute(select(User))).scalars().all()
            assert [u.id for u in users] == [first_id]
            assert users[0].username == "alice"

            user = await self.service.verify(db, "alice@x.com", "pw")
            assert user.id == first_id
            with pytest.raises(InvalidCredentialError):
                await self.service.verify(db, "alice@x.com", "other")

    @pytest.mark.asyncio
    async def test_failed_commit_raises_persistence_error(self, database):
        async with database.session_factory() as db:
            db.commit = AsyncMock(side_effect=OperationalError("COMMIT", {}, Exception("disk full")))
            with pytest.raises(PersistenceError):
                await self.service.register(db, "alice", "alice@x.com", "pw")

        async with database.session_factory() as db:
            assert (await db.execute(select(User))).scalars().all() == []

    @pytest.mark.asyncio
    async def test_database_failure_raises_persistence_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(PersistenceError):
            await self.service.register(mock_db_session, "alice", "alice@x.com", "pw")


class TestVerify:

    def setup_method(self):
        self.service = CredentialService(rounds=4)

    async def _register_alice(self, database):
        async with database.session_factory() as db:
            user_id = await self.service.register(db, "alice", "alice@x.com", "pw")
            await db.commit()
        return user_id

    @pytest.mark.asyncio
    async def test_correct_password_returns_user(self, database):
        user_id = await self._register_alice(database)

        async with database.session_factory() as db:
            user = await self.service.verify(db, "alice@x.com", "pw")

        assert user.id == user_id
        assert user.username == "alice"

    @pytest.mark.asyncio
    async def test_wrong_password_rejected(self, database):
        await self._register_alice(database)

        async with database.session_factory() as db:
            with pytest.raises(InvalidCredentialError) as exc_info:
                await self.service.verify(db, "alice@x.com", "nope")

        assert not isinstance(exc_info.value, UnknownEmailError)

    @pytest.mark.asyncio
    async def test_unknown_email_looks_like_wrong_password(self, database):
        await self._register_alice(database)

        async with database.session_factory() as db:
            with pytest.raises(InvalidCredentialError) as exc_info:
                await self.service.verify(db, "bob@x.com", "pw")

        assert isinstance(exc_info.value, UnknownEmailError)
        assert exc_info.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_unknown_email_still_runs_one_bcrypt_check(self, database):
        await self._register_alice(database)
        spy = MagicMock(return_value=False)

        with patch("photoshare.services.credential_service.check_password", spy):
            async with database.session_factory() as db:
                with pytest.raises(UnknownEmailError):
                    await self.service.verify(db, "bob@x.com", "pw")

        spy.assert_called_once_with("pw", self.service._dummy_hash)

    @pytest.mark.asyncio
    async def test_wrong_password_runs_one_bcrypt_check(self, database):
        await self._register_alice(database)
        spy = MagicMock(return_value=False)

        with patch("photoshare.services.credential_service.check_password", spy):
            async with database.session_factory() as db:
                with pytest.raises(InvalidCredentialError):
                    await self.service.verify(db, "alice@x.com", "nope")

        spy.assert_called_once()
        password, stored_hash = spy.call_args.args
        assert password == "nope"
        assert stored_hash != self.service._dummy_hash

    @pytest.mark.asyncio
    async def test_login_email_is_case_insensitive(self, database):
        user_id = await self._register_alice(database)

        async with database.session_factory() as db:
            user = await self.service.verify(db, "ALICE@x.com", "pw")

        assert user.id == user_id

    @pytest.mark.asyncio
    async def test_database_failure_raises_persistence_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(PersistenceError):
            await self.service.verify(mock_db_session, "alice@x.com", "pw")
