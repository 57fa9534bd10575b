"""
Solana RPC client for the balance manager.

This module wraps the solana-py async client with endpoint health probing,
transaction submission and signature confirmation polling.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

import httpx
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solana.rpc.types import TxOpts
from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction
from solders.transaction_status import TransactionConfirmationStatus
from tenacity import AsyncRetrying, RetryError, retry_if_result, stop_after_delay, wait_fixed

from ..config import DEFAULT_COMMITMENT
from ..exceptions import TransactionConfirmationTimeout, TransactionFailedError
from ..logging_utils import LogLevel, OperationType, create_operation_logger, log_blockchain_operation

logger = create_operation_logger("SolanaClient")

# Confirmation statuses that satisfy each commitment level
ACCEPTED_CONFIRMATION_STATUSES = {
    'processed': [
        TransactionConfirmationStatus.Processed,
        TransactionConfirmationStatus.Confirmed,
        TransactionConfirmationStatus.Finalized,
    ],
    'confirmed': [
        TransactionConfirmationStatus.Confirmed,
        TransactionConfirmationStatus.Finalized,
    ],
    'finalized': [
        TransactionConfirmationStatus.Finalized,
    ],
}


class RPCEndpointStatus(Enum):
    """Status of an RPC endpoint."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    UNKNOWN = "unknown"


@dataclass
class RPCEndpoint:
    """Represents a Solana RPC endpoint with health metrics."""
    url: str
    status: RPCEndpointStatus = RPCEndpointStatus.UNKNOWN
    last_check: Optional[float] = None
    response_time: Optional[float] = None
    error_count: int = 0
    success_count: int = 0

    @property
    def success_rate(self) -> float:
        """Calculate success rate as a percentage."""
        total = self.success_count + self.error_count
        if total == 0:
            return 0.0
        return (self.success_count / total) * 100


class SolanaClient:
    """
    Async Solana RPC client used by the balance service.

    Failed calls are logged and re-raised; nothing is retried. Confirmation
    polling only re-reads the signature status while it is still pending.
    """

    def __init__(
        self,
        rpc_url: str,
        commitment: str = DEFAULT_COMMITMENT,
        timeout: float = 30,
        confirm_timeout: float = 60,
        confirm_poll_interval: float = 0.5
    ):
        """
        Initialize the Solana client.

        Args:
            rpc_url: JSON-RPC endpoint URL
            commitment: Commitment level for reads, preflight and confirmation
            timeout: Request timeout in seconds
            confirm_timeout: Seconds to wait for a transaction to confirm
            confirm_poll_interval: Seconds between signature status polls
        """
        if commitment not in ACCEPTED_CONFIRMATION_STATUSES:
            raise ValueError(f"Unsupported commitment level: {commitment}")

        self.endpoint = RPCEndpoint(url=rpc_url)
        self.commitment = commitment
        self.timeout = timeout
        self.confirm_timeout = confirm_timeout
        self.confirm_poll_interval = confirm_poll_interval
        self.async_client: Optional[AsyncClient] = None

        logger.info("SolanaClient initialized", url=rpc_url, commitment=commitment)

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @log_blockchain_operation(OperationType.HEALTH_CHECK, "check_endpoint_health", level=LogLevel.DEBUG)
    async def check_endpoint_health(self) -> bool:
        """Probe the endpoint with getHealth. Failures only mark the endpoint."""
        start_time = time.time()

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.endpoint.url,
                    json={
                        "jsonrpc": "2.0",
                        "id": 1,
                        "method": "getHealth"
                    },
                    headers={"Content-Type": "application/json"}
                )
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self.endpoint.status = RPCEndpointStatus.UNHEALTHY
            self.endpoint.last_check = time.time()
            logger.warning(
                "Endpoint health check failed",
                url=self.endpoint.url,
                error=str(e),
                response_time=time.time() - start_time
            )
            return False

        self.endpoint.response_time = time.time() - start_time
        self.endpoint.last_check = time.time()

        if response.status_code == 200 and data.get("result") == "ok":
            self.endpoint.status = RPCEndpointStatus.HEALTHY
            logger.debug(
                "Endpoint health check passed",
                url=self.endpoint.url,
                response_time=self.endpoint.response_time
            )
            return True

        self.endpoint.status = RPCEndpointStatus.UNHEALTHY
        logger.warning(
            "Endpoint reported unhealthy",
            url=self.endpoint.url,
            status_code=response.status_code,
            error=data.get("error")
        )
        return False

    @log_blockchain_operation(OperationType.RPC_CALL, "connect", level=LogLevel.DEBUG)
    async def connect(self) -> None:
        """Open the RPC connection and log the current slot."""
        if self.async_client is not None:
            return

        await self.check_endpoint_health()

        self.async_client = AsyncClient(
            self.endpoint.url,
            commitment=Commitment(self.commitment),
            timeout=self.timeout
        )

        slot = await self.get_slot()
        logger.info(
            "Connected to Solana RPC",
            url=self.endpoint.url,
            status=self.endpoint.status.value,
            current_slot=slot
        )

    @log_blockchain_operation(OperationType.RPC_CALL, "close", level=LogLevel.DEBUG)
    async def close(self) -> None:
        """Close the RPC connection."""
        if self.async_client is not None:
            await self.async_client.close()
            self.async_client = None

    async def _call(self, method_name: str, *args, **kwargs):
        """Invoke an AsyncClient method and record endpoint metrics."""
        if self.async_client is None:
            raise RuntimeError("SolanaClient is not connected")

        start_time = time.time()
        try:
            method = getattr(self.async_client, method_name)
            result = await method(*args, **kwargs)
        except Exception as e:
            self.endpoint.error_count += 1
            logger.error(
                "RPC call failed",
                method=method_name,
                url=self.endpoint.url,
                error_type=type(e).__name__,
                error=str(e)
            )
            raise

        self.endpoint.success_count += 1
        self.endpoint.response_time = time.time() - start_time
        return result

    @log_blockchain_operation(OperationType.RPC_CALL, "get_slot", level=LogLevel.DEBUG)
    async def get_slot(self) -> int:
        """Get the current slot."""
        response = await self._call("get_slot")
        return response.value

    @log_blockchain_operation(OperationType.RPC_CALL, "get_account_data", level=LogLevel.DEBUG)
    async def get_account_data(self, pubkey: Pubkey) -> Optional[bytes]:
        """Get raw account data, or None when the account does not exist."""
        response = await self._call("get_account_info", pubkey, commitment=Commitment(self.commitment))
        if response.value is None:
            return None
        return bytes(response.value.data)

    @log_blockchain_operation(OperationType.RPC_CALL, "get_latest_blockhash", level=LogLevel.DEBUG)
    async def get_latest_blockhash(self) -> Hash:
        """Get a recent blockhash for transaction building."""
        response = await self._call("get_latest_blockhash", Commitment(self.commitment))
        return response.value.blockhash

    @log_blockchain_operation(OperationType.TRANSACTION, "send_transaction", level=LogLevel.DEBUG)
    async def send_transaction(self, instructions: Sequence[Instruction], signers: List[Keypair]) -> Signature:
        """Compile, sign and send a transaction. The first signer pays fees."""
        if not signers:
            raise ValueError("At least one signer is required")

        payer = signers[0]
        recent_blockhash = await self.get_latest_blockhash()

        message = MessageV0.try_compile(
            payer=payer.pubkey(),
            instructions=list(instructions),
            address_lookup_table_accounts=[],
            recent_blockhash=recent_blockhash
        )
        transaction = VersionedTransaction(message, signers)

        response = await self._call(
            "send_transaction",
            transaction,
            opts=TxOpts(skip_confirmation=True, preflight_commitment=Commitment(self.commitment))
        )
        logger.info("Transaction sent", signature=str(response.value))
        return response.value

    async def _is_confirmed(self, signature: Signature) -> bool:
        response = await self._call("get_signature_statuses", [signature])
        status = response.value[0]

        if status is None:
            return False

        if status.err is not None:
            logger.error("Transaction failed on-chain", signature=str(signature), error=str(status.err))
            raise TransactionFailedError(str(signature), status.err)

        # No confirmation status from older nodes means the slot is rooted
        if status.confirmation_status is None:
            return status.confirmations is None

        return status.confirmation_status in ACCEPTED_CONFIRMATION_STATUSES[self.commitment]

    @log_blockchain_operation(OperationType.TRANSACTION, "confirm_transaction", level=LogLevel.DEBUG)
    async def confirm_transaction(self, signature: Signature) -> None:
        """Poll the signature status until it reaches the configured commitment."""
        retrying = AsyncRetrying(
            stop=stop_after_delay(self.confirm_timeout),
            wait=wait_fixed(self.confirm_poll_interval),
            retry=retry_if_result(lambda confirmed: not confirmed)
        )

        try:
            await retrying(self._is_confirmed, signature)
        except RetryError:
            logger.error(
                "Transaction confirmation timed out",
                signature=str(signature),
                timeout=self.confirm_timeout
            )
            raise TransactionConfirmationTimeout(str(signature), self.confirm_timeout)

        logger.debug("Transaction confirmed", signature=str(signature), commitment=self.commitment)

    @log_blockchain_operation(OperationType.TRANSACTION, "send_and_confirm_transaction")
    async def send_and_confirm_transaction(self, instructions: Sequence[Instruction], signers: List[Keypair]) -> str:
        """
        Send a transaction and wait for confirmation.

        Args:
            instructions: Instructions to include, in order
            signers: Signing keypairs; the first one pays fees

        Returns:
            The transaction signature (base58)
        """
        signature = await self.send_transaction(instructions, signers)
        await self.confirm_transaction(signature)
        return str(signature)
