"""
Solana cluster and balance program configuration.
"""

import os
from typing import Dict, Any

# Public RPC endpoints for the supported networks
SOLANA_RPC_ENDPOINTS = {
    'devnet': 'https://api.devnet.solana.com',
    'testnet': 'https://api.testnet.solana.com',
    'mainnet': 'https://api.mainnet-beta.solana.com',
    'localnet': 'http://127.0.0.1:8899',
}

DEFAULT_NETWORK = 'devnet'

# Deployed balance program
DEFAULT_PROGRAM_ID = 'DDPNybfLY7hrwWeatxc7wxnq1iG4bb7jMCCJt1v54HHR'

COMMITMENT_LEVELS = ('processed', 'confirmed', 'finalized')
DEFAULT_COMMITMENT = 'confirmed'

# web3.js style secret key file (JSON array of 64 bytes)
DEFAULT_KEYPAIR_PATH = 'secretKey.json'


def get_rpc_url(network: str = None) -> str:
    """Get the RPC URL for the specified network."""
    if network is None:
        network = os.getenv('SOLANA_NETWORK', DEFAULT_NETWORK).lower()

    return SOLANA_RPC_ENDPOINTS.get(network, SOLANA_RPC_ENDPOINTS[DEFAULT_NETWORK])


def get_solana_config() -> Dict[str, Any]:
    """Get Solana configuration from environment variables."""
    network = os.getenv('SOLANA_NETWORK', DEFAULT_NETWORK).lower()
    if network not in SOLANA_RPC_ENDPOINTS:
        network = DEFAULT_NETWORK

    commitment = os.getenv('SOLANA_COMMITMENT', DEFAULT_COMMITMENT).lower()
    if commitment not in COMMITMENT_LEVELS:
        raise ValueError(
            f"Unsupported SOLANA_COMMITMENT '{commitment}', "
            f"expected one of: {', '.join(COMMITMENT_LEVELS)}"
        )

    return {
        'network': network,
        # Custom RPC endpoint overrides the network default
        'rpc_url': os.getenv('SOLANA_RPC_URL') or get_rpc_url(network),
        'program_id': os.getenv('BALANCE_PROGRAM_ID', DEFAULT_PROGRAM_ID),
        'commitment': commitment,
        'keypair_path': os.getenv('SOLANA_KEYPAIR_PATH', DEFAULT_KEYPAIR_PATH),
        'private_key': os.getenv('SOLANA_PRIVATE_KEY'),
        'timeout': float(os.getenv('SOLANA_TIMEOUT', '30')),
        'confirm_timeout': float(os.getenv('SOLANA_CONFIRM_TIMEOUT', '60')),
        'confirm_poll_interval': float(os.getenv('SOLANA_CONFIRM_POLL_INTERVAL', '0.5')),
    }


def get_logging_config() -> Dict[str, Any]:
    """Get logging configuration from environment variables."""
    return {
        'level': os.getenv('LOG_LEVEL', 'INFO').upper(),
        'json_output': os.getenv('LOG_FORMAT', 'console').lower() == 'json',
    }
