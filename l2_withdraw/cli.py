#!/usr/bin/env python3
"""
L2 Withdraw CLI - Move tokens from an L2 back to L1 from the command line.

Usage:
    l2-withdraw withdraw --chain-id 10 --adapter 0x... --token 0x... --to 0x... --amount 1000000
    l2-withdraw balance --chain-id 10 --token 0x... -c secrets/rebalancer.json
    l2-withdraw allowance --chain-id 10 --token 0x... --spender 0x...
"""

import argparse
import json
import logging
import signal
import sys
import threading

from .env import Environment
from .contracts import ERC20Token
from .exceptions import WithdrawalError
from .explorer import explorer_link
from .models import ZERO_ADDRESS, BridgeAdapterRef, TokenRef, WithdrawalRequest, to_address
from .withdraw import WithdrawalOrchestrator


def load_env(args) -> Environment:
    if args.credentials:
        return Environment.from_credentials_file(args.credentials)
    return Environment.from_env()


def parse_hex_data(value: str) -> bytes:
    value = value[2:] if value.startswith("0x") else value
    try:
        return bytes.fromhex(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a hex string: {value!r}")


def parse_timeout(value: str) -> float:
    try:
        timeout = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if timeout < 0:
        raise argparse.ArgumentTypeError(f"timeout must be 0 or more, got {value}")
    return timeout


def cmd_withdraw(args):
    """Withdraw tokens from L2 to L1"""
    env = load_env(args)
    client = env.client(args.chain_id)
    confirmer = env.confirmer(args.chain_id, timeout=args.timeout or None)

    request = WithdrawalRequest(
        l2_chain_id=args.chain_id,
        adapter=BridgeAdapterRef(args.chain_id, args.adapter),
        amount=args.amount,
        recipient=args.to,
        token=TokenRef(args.chain_id, args.token),
        remote_token=args.remote_token,
        extension_data=args.data,
    )

    cancel = threading.Event()
    previous = signal.signal(signal.SIGINT, lambda signum, frame: cancel.set())
    try:
        print(f"Withdrawing {request.amount} of {request.token.address} from chain {args.chain_id}")
        print(f"  From: {client.address}")
        print(f"  To (L1): {request.recipient}")
        result = WithdrawalOrchestrator(client, confirmer).execute(request, cancel=cancel)
    finally:
        signal.signal(signal.SIGINT, previous)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(f"✅ Withdrawal confirmed in block {result.block_number}")
        print(f"   Approve:  {explorer_link(args.chain_id, result.approve_tx.tx_hash)}")
        print(f"   Withdraw: {explorer_link(args.chain_id, result.withdraw_tx.tx_hash)}")


def cmd_balance(args):
    """Show token balance"""
    env = load_env(args)
    client = env.client(args.chain_id)
    owner = to_address(args.owner, "owner") if args.owner else client.address
    balance = ERC20Token(client, to_address(args.token, "token")).balance_of(owner)

    if args.json:
        print(json.dumps({"owner": owner, "token": args.token, "balance": str(balance)}, indent=2))
    else:
        print(f"{owner}: {balance}")


def cmd_allowance(args):
    """Show allowance granted to a spender"""
    env = load_env(args)
    client = env.client(args.chain_id)
    owner = to_address(args.owner, "owner") if args.owner else client.address
    spender = to_address(args.spender, "spender")
    allowance = ERC20Token(client, to_address(args.token, "token")).allowance(owner, spender)

    if args.json:
        print(json.dumps({"owner": owner, "spender": spender, "allowance": str(allowance)}, indent=2))
    else:
        print(f"{owner} -> {spender}: {allowance}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="L2 Withdraw - Guarded token withdrawals from L2 to L1"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    def add_common(sub):
        sub.add_argument("--chain-id", type=int, required=True, help="L2 chain id (e.g. 10)")
        sub.add_argument("-c", "--credentials", help="Path to credentials file (default: environment)")
        sub.add_argument("--json", action="store_true", help="Output as JSON")

    # Withdraw command
    withdraw_parser = subparsers.add_parser("withdraw", help="Withdraw tokens to L1")
    add_common(withdraw_parser)
    withdraw_parser.add_argument("--adapter", required=True, help="L2 bridge adapter address")
    withdraw_parser.add_argument("--token", required=True, help="L2 token address")
    withdraw_parser.add_argument("--to", required=True, help="Recipient address on L1")
    withdraw_parser.add_argument("--amount", type=int, required=True, help="Amount in token base units")
    withdraw_parser.add_argument("--remote-token", default=ZERO_ADDRESS, help="L1 token address, if the adapter needs it")
    withdraw_parser.add_argument("--data", type=parse_hex_data, default=b"", help="Bridge specific data (hex)")
    withdraw_parser.add_argument("--timeout", type=parse_timeout, default=300.0, help="Per-transaction wait in seconds (0 = no limit)")
    withdraw_parser.set_defaults(func=cmd_withdraw)

    # Balance command
    balance_parser = subparsers.add_parser("balance", help="Show token balance")
    add_common(balance_parser)
    balance_parser.add_argument("--token", required=True, help="Token address")
    balance_parser.add_argument("--owner", help="Account to check (default: signer)")
    balance_parser.set_defaults(func=cmd_balance)

    # Allowance command
    allowance_parser = subparsers.add_parser("allowance", help="Show token allowance")
    add_common(allowance_parser)
    allowance_parser.add_argument("--token", required=True, help="Token address")
    allowance_parser.add_argument("--spender", required=True, help="Spender address")
    allowance_parser.add_argument("--owner", help="Account to check (default: signer)")
    allowance_parser.set_defaults(func=cmd_allowance)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        args.func(args)
    except (WithdrawalError, ValueError) as e:
        print(f"❌ Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
