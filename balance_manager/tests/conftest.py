"""
Shared fixtures for balance manager tests.
"""

from unittest.mock import AsyncMock, Mock

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from ..config import DEFAULT_PROGRAM_ID


@pytest.fixture
def payer():
    return Keypair.from_seed(bytes(range(32)))


@pytest.fixture
def program_id():
    return Pubkey.from_string(DEFAULT_PROGRAM_ID)


@pytest.fixture
def mock_client():
    """SolanaClient stand-in with async RPC methods."""
    client = Mock()
    client.get_account_data = AsyncMock(return_value=None)
    client.send_and_confirm_transaction = AsyncMock(return_value="5igSignature")
    return client
