"""
Exceptions raised by the balance manager client.
"""

from typing import Any, Optional


class BalanceManagerError(Exception):
    """Base exception for balance manager errors."""
    pass


class KeypairLoadError(BalanceManagerError):
    """Exception raised when the signing keypair cannot be loaded."""
    pass


class AccountLayoutError(BalanceManagerError):
    """Exception raised when account bytes do not match the balance account layout."""
    pass


class BalanceAccountNotFoundError(BalanceManagerError):
    """Exception raised when a balance account is missing after creation."""
    pass


class TransactionFailedError(BalanceManagerError):
    """Exception raised when a submitted transaction fails on-chain."""

    def __init__(self, signature: str, error: Optional[Any] = None):
        self.signature = signature
        self.error = error
        super().__init__(f"Transaction {signature} failed: {error}")


class TransactionConfirmationTimeout(BalanceManagerError):
    """Exception raised when a transaction is not confirmed in time."""

    def __init__(self, signature: str, timeout: float):
        self.signature = signature
        self.timeout = timeout
        super().__init__(f"Transaction {signature} not confirmed within {timeout}s")
