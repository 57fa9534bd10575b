"""
Signing keypair loading.
"""

import json
import os
from typing import Optional

import base58
from solders.keypair import Keypair

from .exceptions import KeypairLoadError
from .logging_utils import create_operation_logger

logger = create_operation_logger(__name__)


def _keypair_from_secret(secret_bytes: bytes) -> Keypair:
    try:
        if len(secret_bytes) == 32:
            return Keypair.from_seed(secret_bytes)
        elif len(secret_bytes) == 64:
            return Keypair.from_bytes(secret_bytes)
    except ValueError as e:
        raise KeypairLoadError(f"Invalid secret key: {e}") from e
    raise KeypairLoadError(f"Invalid secret key length: {len(secret_bytes)}")


def load_keypair_from_file(keypair_path: str) -> Keypair:
    """Load a keypair from a JSON array secret key file."""
    path = os.path.expanduser(keypair_path)
    if not os.path.exists(path):
        raise KeypairLoadError(f"Keypair file not found: {path}")

    try:
        with open(path, 'r') as f:
            keypair_data = json.load(f)
        secret_bytes = bytes(keypair_data)
    except (OSError, ValueError, TypeError) as e:
        raise KeypairLoadError(f"Invalid keypair file {path}: {e}") from e

    return _keypair_from_secret(secret_bytes)


def load_keypair_from_base58(private_key: str) -> Keypair:
    """Load a keypair from a base58 encoded seed or secret key."""
    try:
        secret_bytes = base58.b58decode(private_key.strip())
    except ValueError as e:
        raise KeypairLoadError(f"Invalid base58 private key: {e}") from e

    return _keypair_from_secret(secret_bytes)


def load_keypair(keypair_path: Optional[str] = None, private_key: Optional[str] = None) -> Keypair:
    """
    Load the signing keypair.

    A base58 private key takes precedence over the keypair file.

    Args:
        keypair_path: Path to a JSON array secret key file
        private_key: Base58 encoded 32-byte seed or 64-byte secret key

    Returns:
        The loaded keypair

    Raises:
        KeypairLoadError: If no usable key material is found
    """
    try:
        if private_key:
            keypair = load_keypair_from_base58(private_key)
            source = "private_key"
        elif keypair_path:
            keypair = load_keypair_from_file(keypair_path)
            source = keypair_path
        else:
            raise KeypairLoadError("No keypair path or private key provided")
    except KeypairLoadError as e:
        logger.error("Failed to load keypair", error=str(e))
        raise

    logger.info("Loaded signing keypair", pubkey=str(keypair.pubkey()), source=source)
    return keypair
