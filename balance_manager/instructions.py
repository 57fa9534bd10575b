"""
Instruction builders for the balance program.
"""

from typing import Tuple

from solders.instruction import Instruction, AccountMeta
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID

from .layouts import encode_create_data, encode_credit_data, encode_debit_data

BALANCE_ACCOUNT_SEED = b"balance_account"


def derive_balance_account_address(user_pubkey: Pubkey, program_id: Pubkey) -> Tuple[Pubkey, int]:
    """Derive the balance account PDA and bump for a user."""
    seeds = [BALANCE_ACCOUNT_SEED, bytes(user_pubkey)]
    return Pubkey.find_program_address(seeds, program_id)


def create_balance_account_instruction(user_pubkey: Pubkey, program_id: Pubkey) -> Instruction:
    """Build the instruction that creates a user's balance account."""
    balance_account, bump = derive_balance_account_address(user_pubkey, program_id)

    return Instruction(
        program_id=program_id,
        accounts=[
            AccountMeta(pubkey=user_pubkey, is_signer=True, is_writable=True),           # payer / owner
            AccountMeta(pubkey=balance_account, is_signer=False, is_writable=True),      # balance account
            AccountMeta(pubkey=SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),   # system_program
        ],
        data=encode_create_data(bump)
    )


def credit_account_instruction(user_pubkey: Pubkey, amount: int, program_id: Pubkey) -> Instruction:
    """Build the instruction that credits a user's balance account."""
    balance_account, _ = derive_balance_account_address(user_pubkey, program_id)

    return Instruction(
        program_id=program_id,
        accounts=[AccountMeta(pubkey=balance_account, is_signer=False, is_writable=True)],
        data=encode_credit_data(amount)
    )


def debit_account_instruction(user_pubkey: Pubkey, amount: int, program_id: Pubkey) -> Instruction:
    """Build the instruction that debits a user's balance account."""
    balance_account, _ = derive_balance_account_address(user_pubkey, program_id)

    return Instruction(
        program_id=program_id,
        accounts=[AccountMeta(pubkey=balance_account, is_signer=False, is_writable=True)],
        data=encode_debit_data(amount)
    )
