import unittest

from photo_accounts.interfaces.user import UserListFilter
from photo_accounts.repositories.memory import InMemoryUserRepository


class TestInMemoryUserRepository(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.repository = InMemoryUserRepository()
        self.admin = await self.repository.create(
            {"email": "Admin@Test.com", "hashed_password": "hash", "is_admin": True}
        )
        self.user = await self.repository.create({"email": "user@test.com", "first_name": "User"})

    async def test_create_assigns_id_and_lowercases_email(self):
        self.assertTrue(self.admin.id)
        self.assertNotEqual(self.admin.id, self.user.id)
        self.assertEqual(self.admin.email, "admin@test.com")
        self.assertFalse(self.admin.is_deleted)

    async def test_create_rejects_duplicate_email(self):
        with self.assertRaises(ValueError):
            await self.repository.create({"email": "USER@test.com"})

    async def test_create_rejects_unknown_fields(self):
        with self.assertRaises(ValueError):
            await self.repository.create({"email": "x@test.com", "password": "plaintext"})

    async def test_get_and_get_by_email(self):
        self.assertEqual((await self.repository.get(self.user.id)).email, "user@test.com")
        self.assertEqual((await self.repository.get_by_email("ADMIN@test.com")).id, self.admin.id)
        self.assertIsNone(await self.repository.get("missing"))

    async def test_returned_accounts_are_copies(self):
        user = await self.repository.get(self.user.id)
        user.first_name = "changed"

        self.assertEqual((await self.repository.get(self.user.id)).first_name, "User")

    async def test_get_admin(self):
        admin = await self.repository.get_admin()

        self.assertEqual(admin.id, self.admin.id)

    async def test_update(self):
        updated = await self.repository.update(self.user.id, {"last_name": "Smith", "email": "NEW@test.com"})

        self.assertEqual(updated.last_name, "Smith")
        self.assertEqual(updated.email, "new@test.com")
        self.assertGreaterEqual(updated.updated_at, self.user.updated_at)

    async def test_update_rejects_email_of_another_active_account(self):
        with self.assertRaises(ValueError):
            await self.repository.update(self.user.id, {"email": "ADMIN@test.com"})

        active = [user for user in await self.repository.get_list() if user.email == "admin@test.com"]
        self.assertEqual([user.id for user in active], [self.admin.id])

    async def test_update_keeps_own_email(self):
        updated = await self.repository.update(self.user.id, {"email": "User@Test.com", "first_name": "Same"})

        self.assertEqual(updated.email, "user@test.com")
        self.assertEqual(updated.first_name, "Same")

    async def test_update_may_take_email_of_deleted_account(self):
        await self.repository.delete(self.admin.id)

        updated = await self.repository.update(self.user.id, {"email": "admin@test.com"})

        self.assertEqual(updated.email, "admin@test.com")

    async def test_update_unknown_user(self):
        with self.assertRaises(ValueError):
            await self.repository.update("missing", {"first_name": "x"})

    async def test_soft_delete_hides_user(self):
        deleted = await self.repository.delete(self.user.id)

        self.assertTrue(deleted.is_deleted)
        self.assertIsNotNone(deleted.deleted_at)
        self.assertIsNone(await self.repository.get(self.user.id))
        self.assertIsNone(await self.repository.get_by_email("user@test.com"))
        self.assertEqual((await self.repository.get(self.user.id, True)).id, self.user.id)

    async def test_delete_twice_fails(self):
        await self.repository.delete(self.user.id)

        with self.assertRaises(ValueError):
            await self.repository.delete(self.user.id)

    async def test_deleted_email_can_be_reused(self):
        await self.repository.delete(self.user.id)

        replacement = await self.repository.create({"email": "user@test.com"})

        self.assertNotEqual(replacement.id, self.user.id)

    async def test_restore(self):
        await self.repository.delete(self.user.id)

        restored = await self.repository.restore(self.user.id)

        self.assertFalse(restored.is_deleted)
        self.assertEqual((await self.repository.get(self.user.id)).id, self.user.id)

    async def test_restore_active_user_fails(self):
        with self.assertRaises(ValueError):
            await self.repository.restore(self.user.id)

    async def test_restore_fails_when_email_was_taken(self):
        await self.repository.delete(self.user.id)
        await self.repository.create({"email": "user@test.com"})

        with self.assertRaises(ValueError):
            await self.repository.restore(self.user.id)

    async def test_get_list_filters(self):
        await self.repository.delete(self.user.id)

        active = await self.repository.get_list()
        everyone = await self.repository.get_list(UserListFilter(include_deleted=True))
        others = await self.repository.get_list(UserListFilter(exclude_id=self.admin.id, include_deleted=True))

        self.assertEqual([user.id for user in active], [self.admin.id])
        self.assertEqual({user.id for user in everyone}, {self.admin.id, self.user.id})
        self.assertEqual([user.id for user in others], [self.user.id])


if __name__ == "__main__":
    unittest.main()
