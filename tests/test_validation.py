import unittest
from datetime import date

from bto import BookingStatus, FlatKind, MaritalStatus, ValidationError
from bto.data.validation import (
    format_date,
    format_flat_kind,
    is_valid_nric,
    is_valid_password,
    parse_date,
    parse_enum,
    parse_flat_kind,
    parse_marital_status,
    parse_nric,
    parse_optional_date,
)


class ValidationTests(unittest.TestCase):
    def test_nric(self):
        self.assertTrue(is_valid_nric("S1234567A"))
        self.assertTrue(is_valid_nric("g7654321x"))
        self.assertFalse(is_valid_nric("X1234567A"))
        self.assertFalse(is_valid_nric("S123456A"))
        self.assertFalse(is_valid_nric(""))
        self.assertEqual(parse_nric(" t7654321b "), "T7654321B")
        with self.assertRaises(ValidationError):
            parse_nric("S12345678")

    def test_dates(self):
        self.assertEqual(parse_date("2026-02-03"), date(2026, 2, 3))
        self.assertEqual(format_date(date(2026, 2, 3)), "2026-02-03")
        self.assertEqual(format_date(None), "")
        self.assertIsNone(parse_optional_date(""))
        self.assertIsNone(parse_optional_date("null"))
        with self.assertRaises(ValidationError):
            parse_date("03/02/2026")

    def test_marital_status(self):
        self.assertEqual(parse_marital_status("Married"), MaritalStatus.MARRIED)
        self.assertEqual(parse_marital_status("SINGLE"), MaritalStatus.SINGLE)
        with self.assertRaises(ValidationError):
            parse_marital_status("Divorced")

    def test_flat_kind(self):
        self.assertEqual(parse_flat_kind("2-Room"), FlatKind.TWO_ROOM)
        self.assertEqual(parse_flat_kind("3-room"), FlatKind.THREE_ROOM)
        self.assertEqual(parse_flat_kind("THREE_ROOM"), FlatKind.THREE_ROOM)
        self.assertEqual(format_flat_kind(FlatKind.TWO_ROOM), "2-Room")
        with self.assertRaises(ValidationError):
            parse_flat_kind("5-Room")

    def test_enum(self):
        self.assertEqual(parse_enum(BookingStatus, "confirmed"), BookingStatus.CONFIRMED)
        with self.assertRaises(ValidationError):
            parse_enum(BookingStatus, "LOST")

    def test_password(self):
        self.assertTrue(is_valid_password("password"))
        self.assertFalse(is_valid_password("short"))
        self.assertFalse(is_valid_password(""))


if __name__ == '__main__':
    unittest.main()
