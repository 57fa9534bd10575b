"""
Balance Manager Services Package
"""

from .balance_service import BalanceService

__all__ = [
    'BalanceService',
]
