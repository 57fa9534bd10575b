"""
Balance Account Service

High-level operations on a user's balance account: lookup, creation,
credit and debit. Every failure is logged and re-raised unchanged.
"""

from typing import Optional, Tuple

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from ..clients.solana_client import SolanaClient
from ..exceptions import BalanceAccountNotFoundError
from ..instructions import (
    create_balance_account_instruction,
    credit_account_instruction,
    debit_account_instruction,
    derive_balance_account_address,
)
from ..layouts import BalanceAccount
from ..logging_utils import OperationType, create_operation_logger, log_blockchain_operation

logger = create_operation_logger("BalanceService")


class BalanceService:
    """Service for managing balance accounts owned by the balance program."""

    def __init__(self, client: SolanaClient, program_id: Pubkey):
        self.client = client
        self.program_id = program_id

    def get_balance_account_address(self, user_pubkey: Pubkey) -> Pubkey:
        """Address of the user's balance account."""
        address, _ = derive_balance_account_address(user_pubkey, self.program_id)
        return address

    @log_blockchain_operation(OperationType.ACCOUNT_LOOKUP, "get_user_balance_account")
    async def get_user_balance_account(
        self,
        user_pubkey: Pubkey
    ) -> Tuple[Optional[BalanceAccount], Optional[Pubkey]]:
        """
        Fetch and decode the user's balance account.

        Returns:
            (account, address), or (None, None) when the account does not exist
        """
        try:
            address = self.get_balance_account_address(user_pubkey)
            data = await self.client.get_account_data(address)

            if data is None:
                return None, None

            return BalanceAccount.decode(data), address
        except Exception as e:
            logger.error("Error fetching user balance account", user=str(user_pubkey), error=str(e))
            raise

    @log_blockchain_operation(OperationType.ACCOUNT_CREATION, "create_balance_account")
    async def create_balance_account(self, payer: Keypair) -> str:
        """Create the payer's balance account. Returns the transaction signature."""
        try:
            instruction = create_balance_account_instruction(payer.pubkey(), self.program_id)
            return await self._submit(instruction, payer)
        except Exception as e:
            logger.error("Error creating balance account", user=str(payer.pubkey()), error=str(e))
            raise

    @log_blockchain_operation(OperationType.CREDIT, "credit_account")
    async def credit_account(self, payer: Keypair, amount: int) -> str:
        """Credit the payer's balance account. Returns the transaction signature."""
        try:
            instruction = credit_account_instruction(payer.pubkey(), amount, self.program_id)
            return await self._submit(instruction, payer)
        except Exception as e:
            logger.error("Error crediting account", user=str(payer.pubkey()), amount=amount, error=str(e))
            raise

    @log_blockchain_operation(OperationType.DEBIT, "debit_account")
    async def debit_account(self, payer: Keypair, amount: int) -> str:
        """Debit the payer's balance account. Returns the transaction signature."""
        try:
            instruction = debit_account_instruction(payer.pubkey(), amount, self.program_id)
            return await self._submit(instruction, payer)
        except Exception as e:
            logger.error("Error debiting account", user=str(payer.pubkey()), amount=amount, error=str(e))
            raise

    async def get_account_details(self, payer: Keypair) -> Tuple[BalanceAccount, Pubkey]:
        """
        Fetch the payer's balance account, creating it first when absent.

        Raises:
            BalanceAccountNotFoundError: If the account is still missing after creation
        """
        user_pubkey = payer.pubkey()
        account, address = await self.get_user_balance_account(user_pubkey)
        if account is not None:
            return account, address

        logger.info("Balance account not found, creating it", user=str(user_pubkey))
        await self.create_balance_account(payer)

        account, address = await self.get_user_balance_account(user_pubkey)
        if account is None:
            logger.error("Balance account missing after creation", user=str(user_pubkey))
            raise BalanceAccountNotFoundError(
                f"Balance account for {user_pubkey} not found after creation"
            )

        return account, address

    async def _submit(self, instruction, payer: Keypair) -> str:
        signature = await self.client.send_and_confirm_transaction([instruction], [payer])
        print(f"Tx hash => {signature}")
        return signature
