"""
Blockchain clients for the balance manager.
"""

from .solana_client import SolanaClient, RPCEndpoint, RPCEndpointStatus

__all__ = [
    'SolanaClient',
    'RPCEndpoint',
    'RPCEndpointStatus',
]
