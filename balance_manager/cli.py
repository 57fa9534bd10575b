"""
Command-line entry point for the balance manager.

Runs the demo sequence against the balance program: ensure the user's balance
account exists, credit it, debit it, and print the account state after each
step.
"""

import argparse
import asyncio
from typing import List, Optional

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .clients.solana_client import SolanaClient
from .config import (
    COMMITMENT_LEVELS,
    SOLANA_RPC_ENDPOINTS,
    get_logging_config,
    get_rpc_url,
    get_solana_config,
)
from .keypair import load_keypair
from .layouts import BalanceAccount, validate_amount
from .logging_utils import configure_logging, create_operation_logger
from .services.balance_service import BalanceService

logger = create_operation_logger("cli")

DEFAULT_CREDIT_AMOUNT = 100
DEFAULT_DEBIT_AMOUNT = 50


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='balance-manager',
        description='Create, credit and debit a balance account on the balance program',
    )
    parser.add_argument(
        '--keypair',
        type=str,
        help='Path to a JSON array secret key file (default: SOLANA_KEYPAIR_PATH or secretKey.json)',
    )
    parser.add_argument(
        '--network',
        choices=sorted(SOLANA_RPC_ENDPOINTS),
        help='Cluster to connect to (default: SOLANA_NETWORK or devnet)',
    )
    parser.add_argument(
        '--rpc-url',
        type=str,
        help='Custom RPC endpoint, overrides --network',
    )
    parser.add_argument(
        '--program-id',
        type=str,
        help='Balance program address (default: BALANCE_PROGRAM_ID or the deployed program)',
    )
    parser.add_argument(
        '--commitment',
        choices=COMMITMENT_LEVELS,
        help='Commitment level for reads and confirmation (default: confirmed)',
    )
    parser.add_argument(
        '--credit',
        type=int,
        default=DEFAULT_CREDIT_AMOUNT,
        help=f'Amount to credit (default: {DEFAULT_CREDIT_AMOUNT})',
    )
    parser.add_argument(
        '--debit',
        type=int,
        default=DEFAULT_DEBIT_AMOUNT,
        help=f'Amount to debit (default: {DEFAULT_DEBIT_AMOUNT})',
    )
    parser.add_argument(
        '--log-level',
        type=str,
        help='Log level (default: LOG_LEVEL or INFO)',
    )
    parser.add_argument(
        '--json-logs',
        action='store_true',
        help='Emit JSON log lines',
    )
    return parser


def resolve_config(args: argparse.Namespace) -> dict:
    """Merge command-line flags over the environment configuration."""
    config = get_solana_config()

    if args.network:
        config['network'] = args.network
        config['rpc_url'] = get_rpc_url(args.network)
    if args.rpc_url:
        config['rpc_url'] = args.rpc_url
    if args.program_id:
        config['program_id'] = args.program_id
    if args.commitment:
        config['commitment'] = args.commitment
    if args.keypair:
        config['keypair_path'] = args.keypair
        config['private_key'] = None

    return config


def print_account_details(address: Optional[Pubkey], account: Optional[BalanceAccount]) -> None:
    print("userBalanceAccount => ", {
        'userPublicKey': str(address) if address is not None else None,
        'creditAccount': account.credited_amount if account is not None else None,
        'debitAccount': account.debited_amount if account is not None else None,
        'balance': account.balance if account is not None else None,
    })


async def show_account_details(service: BalanceService, payer: Keypair) -> BalanceAccount:
    account, address = await service.get_account_details(payer)
    print_account_details(address, account)
    return account


async def run_demo(config: dict, credit_amount: int, debit_amount: int) -> None:
    """Run the create / credit / debit sequence."""
    # Reject bad amounts before any transaction, including create, is sent
    validate_amount(credit_amount)
    validate_amount(debit_amount)

    payer = load_keypair(config['keypair_path'], config['private_key'])
    program_id = Pubkey.from_string(config['program_id'])

    logger.info(
        "Starting balance manager",
        network=config['network'],
        rpc_url=config['rpc_url'],
        program_id=str(program_id),
        user=str(payer.pubkey())
    )

    client = SolanaClient(
        rpc_url=config['rpc_url'],
        commitment=config['commitment'],
        timeout=config['timeout'],
        confirm_timeout=config['confirm_timeout'],
        confirm_poll_interval=config['confirm_poll_interval']
    )

    async with client:
        service = BalanceService(client, program_id)

        await show_account_details(service, payer)

        print(f"Credit the account with {credit_amount}")
        await service.credit_account(payer, credit_amount)
        await show_account_details(service, payer)

        print(f"Debit the account with {debit_amount}")
        await service.debit_account(payer, debit_amount)
        await show_account_details(service, payer)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point. Returns 0 on success and -1 on any error."""
    args = build_parser().parse_args(argv)

    logging_config = get_logging_config()
    configure_logging(
        level=args.log_level or logging_config['level'],
        json_output=args.json_logs or logging_config['json_output']
    )

    try:
        config = resolve_config(args)
        asyncio.run(run_demo(config, args.credit, args.debit))
    except Exception as e:
        logger.exception("Balance manager failed", error=str(e))
        return -1

    return 0
