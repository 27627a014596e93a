import unittest

from core.constants import MAX_PERFORMANCE_DAYS, MAX_QUERY_LIMIT
from utils.validation import (
    is_valid_auth_method,
    is_valid_email,
    is_valid_ethereum_address,
    is_valid_phone_number,
    is_valid_positive_integer,
    normalize_address,
    normalize_auth_method,
    sanitize_string,
)

ADDRESS = "0xABCDEF0123456789ABCDEF0123456789ABCDEF01"


class TestAddressValidation(unittest.TestCase):
    def test_accepts_any_casing(self):
        self.assertTrue(is_valid_ethereum_address(ADDRESS))
        self.assertTrue(is_valid_ethereum_address(ADDRESS.lower()))
        self.assertTrue(is_valid_ethereum_address("0x" + "a1B2" * 10))

    def test_rejects_malformed(self):
        self.assertFalse(is_valid_ethereum_address("0x123"))
        self.assertFalse(is_valid_ethereum_address(ADDRESS[2:]))
        self.assertFalse(is_valid_ethereum_address("0X" + ADDRESS[2:]))
        self.assertFalse(is_valid_ethereum_address("0x" + "g" * 40))
        self.assertFalse(is_valid_ethereum_address(ADDRESS + "0"))
        self.assertFalse(is_valid_ethereum_address(None))
        self.assertFalse(is_valid_ethereum_address(12345))

    def test_normalize_address(self):
        self.assertEqual(
            normalize_address(ADDRESS), "0xabcdef0123456789abcdef0123456789abcdef01"
        )


class TestEmailAndPhoneValidation(unittest.TestCase):
    def test_email(self):
        self.assertTrue(is_valid_email("alice@example.com"))
        self.assertFalse(is_valid_email("not-an-email"))
        self.assertFalse(is_valid_email("alice@example"))
        self.assertFalse(is_valid_email("al ice@example.com"))
        self.assertFalse(is_valid_email("a" * 250 + "@example.com"))
        self.assertFalse(is_valid_email(None))

    def test_phone_number(self):
        self.assertTrue(is_valid_phone_number("+14155550123"))
        self.assertTrue(is_valid_phone_number("447911123456"))
        self.assertFalse(is_valid_phone_number("abc"))
        self.assertFalse(is_valid_phone_number("+0123456"))
        self.assertFalse(is_valid_phone_number("+1234567890123456"))
        self.assertFalse(is_valid_phone_number("+1\u0662\u0663"))


class TestAuthMethodValidation(unittest.TestCase):
    def test_known_methods_case_insensitive(self):
        self.assertTrue(is_valid_auth_method("metamask"))
        self.assertTrue(is_valid_auth_method("MetaMask"))
        self.assertTrue(is_valid_auth_method("coinbase-wallet"))
        self.assertFalse(is_valid_auth_method("myspace"))
        self.assertFalse(is_valid_auth_method(""))

    def test_normalize_auth_method(self):
        self.assertEqual(normalize_auth_method("INAPP"), "inApp")
        self.assertEqual(normalize_auth_method("MetaMask"), "metamask")
        self.assertIsNone(normalize_auth_method("myspace"))


class TestPositiveInteger(unittest.TestCase):
    def test_accepts_in_range(self):
        self.assertTrue(is_valid_positive_integer("1", MAX_QUERY_LIMIT))
        self.assertTrue(is_valid_positive_integer("3650", MAX_PERFORMANCE_DAYS))
        self.assertTrue(is_valid_positive_integer(42, MAX_QUERY_LIMIT))

    def test_rejects_out_of_range_or_non_numeric(self):
        self.assertFalse(is_valid_positive_integer("99999", MAX_PERFORMANCE_DAYS))
        self.assertFalse(is_valid_positive_integer("-5", MAX_QUERY_LIMIT))
        self.assertFalse(is_valid_positive_integer("0", MAX_QUERY_LIMIT))
        self.assertFalse(is_valid_positive_integer("12abc", MAX_QUERY_LIMIT))
        self.assertFalse(is_valid_positive_integer("1.5", MAX_QUERY_LIMIT))
        self.assertFalse(is_valid_positive_integer("007", MAX_QUERY_LIMIT))
        self.assertFalse(is_valid_positive_integer(" 7", MAX_QUERY_LIMIT))
        self.assertFalse(is_valid_positive_integer(True, MAX_QUERY_LIMIT))
        self.assertFalse(is_valid_positive_integer(None, MAX_QUERY_LIMIT))

    def test_rejects_non_ascii_digits(self):
        # Arabic-Indic digits: int() would read "1\u0660" as 10
        self.assertFalse(is_valid_positive_integer("1\u0660", MAX_QUERY_LIMIT))
        self.assertFalse(is_valid_positive_integer("\u0661", MAX_QUERY_LIMIT))


class TestSanitizeString(unittest.TestCase):
    def test_trims_and_truncates(self):
        self.assertEqual(sanitize_string("  alice  ", 100), "alice")
        self.assertEqual(sanitize_string("abcdef", 3), "abc")
        self.assertEqual(sanitize_string(None, 10), "")
        self.assertEqual(sanitize_string(123, 10), "")

    def test_idempotent(self):
        for value in ["  padded  ", "ab  cd", "x" * 20, "abc   def", "", "   "]:
            for max_length in (1, 3, 5, 10):
                once = sanitize_string(value, max_length)
                self.assertEqual(sanitize_string(once, max_length), once)


if __name__ == "__main__":
    unittest.main()
