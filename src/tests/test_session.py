"""Session state machine and auth providers."""

from __future__ import annotations

import threading
from unittest import mock

from django.test import SimpleTestCase, TestCase

from authentication.exceptions import AuthenticationError, RegistrationError
from authentication.managers import UserManager
from authentication.models import User
from authentication.providers import DatabaseAuthProvider
from authentication.session import AuthSession, SessionState
from tests.utils import create_user, make_mock_provider


class MockSessionTests(SimpleTestCase):
    """Sign-in / sign-up / sign-out against the seeded mock provider."""

    def setUp(self):
        self.provider = make_mock_provider()
        self.session = AuthSession(self.provider)

    async def test_starts_logged_out(self):
        self.assertEqual(self.session.state, SessionState.LOGGED_OUT)
        self.assertIsNone(self.session.current_profile())
        self.assertFalse(self.session.is_admin())

    async def test_admin_sign_in(self):
        profile = await self.session.sign_in("admin", "admin123")

        self.assertEqual(profile.role, "admin")
        self.assertEqual(self.session.state, SessionState.LOGGED_IN)
        self.assertEqual(self.session.current_profile(), profile)
        self.assertTrue(self.session.is_admin())

    async def test_bad_credentials_stay_logged_out(self):
        for username, password in [("admin", "wrong"), ("nobody", "admin123"), ("", "")]:
            with self.assertRaises(AuthenticationError):
                await self.session.sign_in(username, password)
            self.assertEqual(self.session.state, SessionState.LOGGED_OUT)

    async def test_sign_out(self):
        await self.session.sign_in("admin", "admin123")

        await self.session.sign_out()

        self.assertEqual(self.session.state, SessionState.LOGGED_OUT)
        self.assertIsNone(self.session.current_profile())

    async def test_failed_sign_in_keeps_existing_profile(self):
        profile = await self.session.sign_in("admin", "admin123")

        with self.assertRaises(AuthenticationError):
            await self.session.sign_in("admin", "nope")

        self.assertEqual(self.session.current_profile(), profile)

    async def test_sign_up_creates_user_and_logs_in(self):
        profile = await self.session.sign_up("reader_1", "secret1")

        self.assertEqual(profile.role, "user")
        self.assertEqual(profile.email, "reader_1@example.com")
        self.assertEqual(self.session.state, SessionState.LOGGED_IN)
        self.assertFalse(self.session.is_admin())

        # The new account can sign in from a fresh session.
        other = AuthSession(self.provider)
        self.assertEqual(await other.sign_in("reader_1", "secret1"), profile)

    async def test_sign_up_rejects_taken_username(self):
        with self.assertRaises(RegistrationError) as ctx:
            await self.session.sign_up("Admin", "secret1")

        self.assertIn("username", ctx.exception.errors)
        self.assertEqual(self.session.state, SessionState.LOGGED_OUT)

    async def test_sign_up_validates_input(self):
        with self.assertRaises(RegistrationError) as ctx:
            await self.session.sign_up("bad name!", "123")

        self.assertEqual(set(ctx.exception.errors), {"username", "password"})

    async def test_first_registrant_on_empty_provider_is_admin(self):
        session = AuthSession(make_mock_provider(seed=False))

        first = await session.sign_up("founder", "secret1")
        second = await AuthSession(session.provider).sign_up("second", "secret1")

        self.assertEqual(first.role, "admin")
        self.assertEqual(second.role, "user")

    async def test_refresh_profile(self):
        profile = await self.session.sign_in("admin", "admin123")

        self.assertEqual(await self.session.refresh_profile(), profile)


class DatabaseProviderTests(TestCase):
    """Bcrypt-backed accounts in the ``User`` table."""

    def setUp(self):
        self.provider = DatabaseAuthProvider()

    async def test_first_registrant_becomes_admin(self):
        first = await self.provider.register("founder", "secret1")
        second = await self.provider.register("member", "secret2")

        self.assertEqual(first.role, User.Role.ADMIN)
        self.assertEqual(second.role, User.Role.USER)
        self.assertEqual(await User.objects.acount(), 2)

    async def test_register_duplicate_is_case_insensitive(self):
        await self.provider.register("writer", "secret1")

        with self.assertRaises(RegistrationError):
            await self.provider.register("WRITER", "secret1")

    async def test_authenticate_and_lookup(self):
        registered = await self.provider.register("writer", "secret1")

        profile = await self.provider.authenticate("writer", "secret1")

        self.assertEqual(profile, registered)
        self.assertEqual(await self.provider.get_profile(profile.id), profile)
        self.assertIsNone(await self.provider.get_profile("not-a-uuid"))

    async def test_authenticate_rejects_bad_password(self):
        await self.provider.register("writer", "secret1")

        with self.assertRaises(AuthenticationError):
            await self.provider.authenticate("writer", "secret2")
        with self.assertRaises(AuthenticationError):
            await self.provider.authenticate("ghost", "secret1")

    async def test_bcrypt_runs_off_the_event_loop(self):
        loop_thread = threading.get_ident()
        hash_threads, check_threads = [], []
        real_hash, real_verify = UserManager.hash_password, UserManager.verify_password

        def recording_hash(raw_password):
            hash_threads.append(threading.get_ident())
            return real_hash(raw_password)

        def recording_verify(user, raw_password):
            check_threads.append(threading.get_ident())
            return real_verify(user, raw_password)

        with mock.patch.object(UserManager, "hash_password", side_effect=recording_hash), \
                mock.patch.object(UserManager, "verify_password", side_effect=recording_verify):
            await self.provider.register("writer", "secret1")
            await self.provider.authenticate("writer", "secret1")

        self.assertEqual(len(hash_threads), 1)
        self.assertEqual(len(check_threads), 1)
        self.assertNotIn(loop_thread, hash_threads + check_threads)


class DatabaseProviderInactiveTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = create_user("sleeper", "secret1", is_active=False)

    async def test_inactive_user_cannot_sign_in(self):
        session = AuthSession(DatabaseAuthProvider())

        with self.assertRaises(AuthenticationError):
            await session.sign_in("sleeper", "secret1")

        self.assertEqual(session.state, SessionState.LOGGED_OUT)
        self.assertIsNone(await session.provider.get_profile(str(self.user.pk)))
