import asyncio
import io
import unittest
from contextlib import asynccontextmanager, redirect_stderr, redirect_stdout
from unittest.mock import patch

from photo_accounts import cli
from photo_accounts.core.security import BcryptCryptoRepository, verify_password
from photo_accounts.repositories.memory import InMemoryUserRepository
from photo_accounts.schemas.user import CreateUserRequest
from photo_accounts.services.user_service import UserService


class TestCli(unittest.TestCase):
    def setUp(self):
        self.repository = InMemoryUserRepository()
        self.service = UserService(self.repository, BcryptCryptoRepository(rounds=4))

        @asynccontextmanager
        async def scope():
            yield self.service

        patcher = patch.object(cli, "user_service_scope", scope)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _sign_up_admin(self):
        return asyncio.run(
            self.service.sign_up_admin(
                CreateUserRequest(email="admin@test.com", password="admin_password")
            )
        )

    def _run(self, *argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            code = cli.main(list(argv))
        return code, stdout.getvalue(), stderr.getvalue()

    def test_reset_admin_password_without_admin(self):
        with patch.object(cli.getpass, "getpass") as prompt:
            code, _, stderr = self._run("reset-admin-password")

        self.assertEqual(code, 1)
        self.assertIn("Admin account does not exist", stderr)
        prompt.assert_not_called()

    def test_reset_admin_password_with_provided_password(self):
        admin = self._sign_up_admin()

        with patch.object(cli.getpass, "getpass", return_value="chosen-password"):
            code, stdout, _ = self._run("reset-admin-password")

        self.assertEqual(code, 0)
        self.assertIn("The admin password has been updated.", stdout)
        self.assertNotIn("chosen-password", stdout)
        stored = asyncio.run(self.repository.get(admin.id))
        self.assertTrue(verify_password("chosen-password", stored.hashed_password))

    def test_reset_admin_password_generates_one(self):
        admin = self._sign_up_admin()

        with patch.object(cli.getpass, "getpass", return_value=""):
            code, stdout, _ = self._run("reset-admin-password")

        self.assertEqual(code, 0)
        lines = stdout.strip().splitlines()
        self.assertEqual(lines[0], "The admin password has been updated to:")
        stored = asyncio.run(self.repository.get(admin.id))
        self.assertTrue(verify_password(lines[1], stored.hashed_password))

    def test_count_users(self):
        self._sign_up_admin()
        asyncio.run(self.service.create_user(CreateUserRequest(email="user@test.com", password="pw")))

        code, stdout, _ = self._run("count-users")
        admin_code, admin_stdout, _ = self._run("count-users", "--admin")

        self.assertEqual((code, stdout.strip()), (0, "2"))
        self.assertEqual((admin_code, admin_stdout.strip()), (0, "1"))


if __name__ == "__main__":
    unittest.main()
