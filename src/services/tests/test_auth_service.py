"""Unit tests for auth_service registration and authentication."""

import unittest

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import DuplicateError, ValidationError
from services.auth_service import authenticate, password_problem, register


class TestRegister(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()

    def test_register_hashes_password(self):
        user = register(self.repo, 'a@example.com', 'secret123')

        self.assertEqual(user.email, 'a@example.com')
        self.assertNotEqual(user.password_hash, 'secret123')
        self.assertTrue(user.password_hash.startswith('$2'))

    def test_duplicate_email(self):
        register(self.repo, 'a@example.com', 'secret123')
        with self.assertRaises(DuplicateError):
            register(self.repo, 'a@example.com', 'other456')

    def test_email_is_stored_lowercased(self):
        user = register(self.repo, '  Alice@Example.COM ', 'secret123')

        self.assertEqual(user.email, 'alice@example.com')
        self.assertIs(self.repo.get_by_email('alice@example.com'), user)

    def test_duplicate_email_in_other_case(self):
        register(self.repo, 'a@example.com', 'secret123')
        with self.assertRaises(DuplicateError):
            register(self.repo, 'A@Example.com', 'other456')

    def test_weak_passwords(self):
        for password in ('short1', 'lettersonly', '1234567890', 'x' * 70 + '12345'):
            with self.subTest(password=password):
                with self.assertRaises(ValidationError):
                    register(self.repo, 'b@example.com', password)
        self.assertEqual(self.repo.store, {})


class TestPasswordProblem(unittest.TestCase):

    def test_first_failing_rule_is_reported(self):
        cases = {
            'short1': 'Password must be at least 8 characters',
            '1234567890': 'Password must contain at least one letter',
            'lettersonly': 'Password must contain at least one number',
            '\u00e9' * 36 + 'a1': 'Password must be at most 72 bytes',
        }
        for password, message in cases.items():
            with self.subTest(password=password):
                self.assertEqual(password_problem(password), message)

    def test_acceptable_password(self):
        self.assertIsNone(password_problem('secret123'))


class TestAuthenticate(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.user = register(self.repo, 'a@example.com', 'secret123')

    def test_valid_credentials(self):
        user = authenticate(self.repo, 'a@example.com', 'secret123')

        self.assertEqual(user.id, self.user.id)
        self.assertIsNotNone(self.repo.get_by_id(user.id).last_login)

    def test_email_case_is_ignored(self):
        user = authenticate(self.repo, 'A@EXAMPLE.com', 'secret123')
        self.assertEqual(user.id, self.user.id)

    def test_wrong_password(self):
        with self.assertRaises(ValidationError):
            authenticate(self.repo, 'a@example.com', 'wrong-pass1')

    def test_unknown_email_gives_same_error(self):
        with self.assertRaises(ValidationError) as ctx:
            authenticate(self.repo, 'nobody@example.com', 'secret123')
        self.assertEqual(str(ctx.exception), 'Invalid email or password')


if __name__ == '__main__':
    unittest.main()
