"""
Borsh layouts for the balance account and instruction payloads.

The balance program stores three little-endian u32 fields per account and
accepts a one-byte opcode followed by a fixed-width argument.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple

from borsh_construct import CStruct, U8, U32

from .exceptions import AccountLayoutError

U8_MAX = 2 ** 8 - 1
U32_MAX = 2 ** 32 - 1


class InstructionType(IntEnum):
    """Opcodes understood by the balance program."""
    CREATE = 1
    CREDIT = 2
    DEBIT = 3


BALANCE_ACCOUNT_LAYOUT = CStruct(
    "credited_amount" / U32,
    "debited_amount" / U32,
    "balance" / U32,
)

CREATE_INSTRUCTION_LAYOUT = CStruct(
    "instruction" / U8,
    "bump" / U8,
)

AMOUNT_INSTRUCTION_LAYOUT = CStruct(
    "instruction" / U8,
    "amount" / U32,
)

BALANCE_ACCOUNT_SIZE = BALANCE_ACCOUNT_LAYOUT.sizeof()
CREATE_INSTRUCTION_SIZE = CREATE_INSTRUCTION_LAYOUT.sizeof()
AMOUNT_INSTRUCTION_SIZE = AMOUNT_INSTRUCTION_LAYOUT.sizeof()


@dataclass(frozen=True)
class BalanceAccount:
    """State stored in a user's balance account."""
    credited_amount: int = 0
    debited_amount: int = 0
    balance: int = 0

    @classmethod
    def decode(cls, data: bytes) -> "BalanceAccount":
        """Decode raw account bytes."""
        if len(data) != BALANCE_ACCOUNT_SIZE:
            raise AccountLayoutError(
                f"Expected {BALANCE_ACCOUNT_SIZE} bytes of balance account data, got {len(data)}"
            )
        parsed = BALANCE_ACCOUNT_LAYOUT.parse(bytes(data))
        return cls(
            credited_amount=parsed.credited_amount,
            debited_amount=parsed.debited_amount,
            balance=parsed.balance,
        )

    def encode(self) -> bytes:
        """Encode to the on-chain account layout."""
        for name in ("credited_amount", "debited_amount", "balance"):
            _check_range(name, getattr(self, name), U32_MAX)
        return BALANCE_ACCOUNT_LAYOUT.build({
            "credited_amount": self.credited_amount,
            "debited_amount": self.debited_amount,
            "balance": self.balance,
        })


def _check_range(name: str, value: int, upper: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= upper:
        raise ValueError(f"{name} must be an integer between 0 and {upper}, got {value!r}")


def validate_amount(amount: int) -> int:
    """Check that an amount fits the u32 argument of credit and debit."""
    _check_range("amount", amount, U32_MAX)
    return amount


def encode_create_data(bump: int) -> bytes:
    """Encode the create instruction: opcode + bump seed."""
    _check_range("bump", bump, U8_MAX)
    return CREATE_INSTRUCTION_LAYOUT.build({
        "instruction": InstructionType.CREATE,
        "bump": bump,
    })


def _encode_amount_data(instruction: InstructionType, amount: int) -> bytes:
    validate_amount(amount)
    return AMOUNT_INSTRUCTION_LAYOUT.build({
        "instruction": instruction,
        "amount": amount,
    })


def encode_credit_data(amount: int) -> bytes:
    """Encode the credit instruction: opcode + u32 LE amount."""
    return _encode_amount_data(InstructionType.CREDIT, amount)


def encode_debit_data(amount: int) -> bytes:
    """Encode the debit instruction: opcode + u32 LE amount."""
    return _encode_amount_data(InstructionType.DEBIT, amount)


def decode_instruction_data(data: bytes) -> Tuple[InstructionType, int]:
    """
    Decode an instruction payload into its opcode and argument.

    Raises:
        ValueError: If the payload is empty, the opcode is unknown or the
            argument has the wrong width
    """
    if len(data) < 1:
        raise ValueError("Instruction data is empty")

    try:
        instruction = InstructionType(data[0])
    except ValueError:
        raise ValueError(f"Unknown instruction opcode: {data[0]}")

    if instruction == InstructionType.CREATE:
        if len(data) != CREATE_INSTRUCTION_SIZE:
            raise ValueError(f"Create instruction must be {CREATE_INSTRUCTION_SIZE} bytes, got {len(data)}")
        return instruction, CREATE_INSTRUCTION_LAYOUT.parse(bytes(data)).bump

    if len(data) != AMOUNT_INSTRUCTION_SIZE:
        raise ValueError(
            f"{instruction.name.lower()} instruction must be {AMOUNT_INSTRUCTION_SIZE} bytes, got {len(data)}"
        )
    return instruction, AMOUNT_INSTRUCTION_LAYOUT.parse(bytes(data)).amount
