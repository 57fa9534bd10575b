"""
Unit Tests for Account and Instruction Layouts

Covers the 12-byte balance account layout and the fixed
opcode + argument instruction payloads.
"""

from unittest import TestCase

from ..exceptions import AccountLayoutError
from ..layouts import (
    BALANCE_ACCOUNT_SIZE,
    BalanceAccount,
    InstructionType,
    decode_instruction_data,
    encode_create_data,
    encode_credit_data,
    encode_debit_data,
)


class TestBalanceAccountLayout(TestCase):
    """Test cases for BalanceAccount encoding."""

    def test_account_size(self):
        """Test the account occupies three u32 fields."""
        self.assertEqual(BALANCE_ACCOUNT_SIZE, 12)

    def test_default_account_is_zeroed(self):
        """Test a default account encodes to zeros."""
        self.assertEqual(BalanceAccount().encode(), bytes(12))

    def test_encode_little_endian_fields(self):
        """Test fields are encoded as little-endian u32 in order."""
        account = BalanceAccount(credited_amount=100, debited_amount=50, balance=50)

        self.assertEqual(account.encode(), bytes.fromhex("640000003200000032000000"))

    def test_decode_account_bytes(self):
        """Test decoding raw account data."""
        data = bytes.fromhex("e8030000f4010000f4010000")

        account = BalanceAccount.decode(data)

        self.assertEqual(account.credited_amount, 1000)
        self.assertEqual(account.debited_amount, 500)
        self.assertEqual(account.balance, 500)

    def test_round_trip_at_u32_bounds(self):
        """Test decode(encode(x)) == x for boundary values."""
        account = BalanceAccount(credited_amount=2 ** 32 - 1, debited_amount=0, balance=2 ** 32 - 1)

        self.assertEqual(BalanceAccount.decode(account.encode()), account)

    def test_decode_rejects_wrong_length(self):
        """Test short and long account data are rejected."""
        with self.assertRaises(AccountLayoutError):
            BalanceAccount.decode(bytes(11))
        with self.assertRaises(AccountLayoutError):
            BalanceAccount.decode(bytes(13))
        with self.assertRaises(AccountLayoutError):
            BalanceAccount.decode(b"")

    def test_encode_rejects_out_of_range_field(self):
        """Test fields outside u32 cannot be encoded."""
        with self.assertRaises(ValueError):
            BalanceAccount(credited_amount=2 ** 32).encode()
        with self.assertRaises(ValueError):
            BalanceAccount(balance=-1).encode()


class TestInstructionLayout(TestCase):
    """Test cases for instruction payload encoding."""

    def test_create_payload(self):
        """Test create is opcode 1 followed by the bump byte."""
        self.assertEqual(encode_create_data(254), b"\x01\xfe")

    def test_credit_payload(self):
        """Test credit is opcode 2 followed by a u32 LE amount."""
        self.assertEqual(encode_credit_data(100), b"\x02\x64\x00\x00\x00")

    def test_debit_payload(self):
        """Test debit is opcode 3 followed by a u32 LE amount."""
        self.assertEqual(encode_debit_data(50), b"\x03\x32\x00\x00\x00")

    def test_amount_upper_bound(self):
        """Test the largest u32 amount is accepted."""
        self.assertEqual(encode_credit_data(2 ** 32 - 1), b"\x02\xff\xff\xff\xff")

    def test_amount_out_of_range(self):
        """Test invalid amounts raise ValueError."""
        for amount in (2 ** 32, -1, 1.5, True, "100"):
            with self.subTest(amount=amount):
                with self.assertRaises(ValueError):
                    encode_credit_data(amount)

    def test_bump_out_of_range(self):
        """Test bumps outside u8 raise ValueError."""
        with self.assertRaises(ValueError):
            encode_create_data(256)

    def test_decode_payloads(self):
        """Test decoding each instruction payload."""
        self.assertEqual(decode_instruction_data(b"\x01\xfe"), (InstructionType.CREATE, 254))
        self.assertEqual(decode_instruction_data(encode_credit_data(100)), (InstructionType.CREDIT, 100))
        self.assertEqual(decode_instruction_data(encode_debit_data(50)), (InstructionType.DEBIT, 50))

    def test_decode_invalid_payloads(self):
        """Test empty, unknown and mis-sized payloads are rejected."""
        for data in (b"", b"\x04\x00", b"\x00", b"\x01", b"\x02\x01\x00", b"\x03\x01\x00\x00\x00\x00"):
            with self.subTest(data=data):
                with self.assertRaises(ValueError):
                    decode_instruction_data(data)
