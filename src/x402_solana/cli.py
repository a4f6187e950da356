"""
Command-line interface for exercising the x402 Solana payment helpers.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from decimal import Decimal
from typing import Any, Iterable, Sequence, Tuple

from .api import resolve_supported_methods, send_payment
from .core.config import ClientConfig, load_client_config
from .core.errors import ConfigError, X402Error
from .core.facilitators import FACILITATORS, get_supported_facilitators
from .core.headers import decode_payment_header
from .core.requirements import build_payment_requirements
from .core.types import PaymentRequest
from .core.units import format_decimal, lamports_to_sol, to_decimal
from .core.uri import decode_payment_uri, encode_payment_uri


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _amount(value: str) -> Decimal:
    try:
        return to_decimal(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _print_json(document: Any) -> None:
    print(json.dumps(document, indent=2, default=str))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="x402-solana",
        description="Pay for x402-protected resources with SOL through a facilitator",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing X402_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    facilitators = commands.add_parser("facilitators", help="List known facilitators")
    facilitators.add_argument("--network", help="Only show facilitators supporting NETWORK")

    supported = commands.add_parser("supported", help="Query a facilitator's supported kinds")
    supported.add_argument("--facilitator", help="Registry key (default: X402_FACILITATOR)")

    requirements = commands.add_parser("requirements", help="Print payment requirements as JSON")
    requirements.add_argument("pay_to")
    requirements.add_argument("amount", type=_amount, help="Amount in SOL")
    requirements.add_argument("--resource", default="/payment")
    requirements.add_argument("--description", default="x402 Payment")

    pay = commands.add_parser("pay", help="Run one verify + settle payment attempt")
    pay.add_argument("pay_to")
    pay.add_argument("amount", type=_amount, help="Amount in SOL")
    pay.add_argument("--payer", help="Payer address (default: X402_PAYER_ADDRESS)")
    pay.add_argument("--memo", default=None, help="Payment description sent to the facilitator")
    pay.add_argument(
        "--verify-only",
        action="store_true",
        help="Submit the payload to /verify but skip settlement",
    )

    uri = commands.add_parser("uri", help="Encode or decode Solana Pay URIs")
    uri_commands = uri.add_subparsers(dest="uri_command", required=True)
    uri_encode = uri_commands.add_parser("encode")
    uri_encode.add_argument("recipient")
    uri_encode.add_argument("--amount", type=_amount, default=Decimal(0))
    for name in ("label", "message", "memo", "reference"):
        uri_encode.add_argument(f"--{name}")
    uri_decode = uri_commands.add_parser("decode")
    uri_decode.add_argument("uri")

    header = commands.add_parser("header", help="Inspect X-PAYMENT header values")
    header_commands = header.add_subparsers(dest="header_command", required=True)
    header_decode = header_commands.add_parser("decode")
    header_decode.add_argument("header")
    return parser


def _cmd_facilitators(args: argparse.Namespace) -> int:
    infos = (
        get_supported_facilitators(args.network)
        if args.network
        else list(FACILITATORS.values())
    )
    if not infos:
        logging.error("No facilitator supports network %s", args.network)
        return 1
    for key, info in FACILITATORS.items():
        if info in infos:
            print(f"{key:<10} {info.name:<14} {info.url}")
            print(f"{'':<10} networks: {', '.join(info.networks)}")
    return 0


def _cmd_supported(args: argparse.Namespace, config: ClientConfig) -> int:
    key = args.facilitator or config.facilitator_key
    kinds = asyncio.run(
        resolve_supported_methods(
            key,
            client=config.facilitator_client(),
            facilitator_url=None if args.facilitator else config.facilitator_url,
        )
    )
    _print_json([kind.to_dict() for kind in kinds])
    return 0


def _cmd_requirements(args: argparse.Namespace, config: ClientConfig) -> int:
    response = build_payment_requirements(
        args.pay_to, args.amount, config.network, args.resource, args.description
    )
    _print_json(response.to_dict())
    return 0


def _cmd_pay(args: argparse.Namespace, config: ClientConfig) -> int:
    outcome = asyncio.run(
        send_payment(
            args.pay_to,
            args.amount,
            payer=args.payer,
            config=config,
            description=args.memo or "x402 Payment",
            verify_only=args.verify_only,
        )
    )
    if not outcome.success:
        logging.error("Payment failed: %s", outcome.failure_reason)
        return 1

    amount = format_decimal(lamports_to_sol(outcome.requirements.max_amount_required))
    if outcome.settlement is None:
        logging.info("Facilitator accepted a payment of %s SOL", amount)
    else:
        logging.info(
            "Paid %s SOL. Transaction hash: %s", amount, outcome.settlement.tx_hash
        )
    return 0


def _cmd_uri(args: argparse.Namespace) -> int:
    if args.uri_command == "encode":
        request = PaymentRequest(
            recipient=args.recipient,
            amount=args.amount,
            label=args.label,
            message=args.message,
            memo=args.memo,
            reference=args.reference,
        )
        print(encode_payment_uri(request))
        return 0

    decoded = decode_payment_uri(args.uri)
    if decoded is None:
        logging.error("Not a Solana Pay URI: %s", args.uri)
        return 1
    _print_json(
        {
            "recipient": decoded.recipient,
            "amount": format(decoded.amount, "f"),
            "label": decoded.label,
            "message": decoded.message,
            "memo": decoded.memo,
            "reference": decoded.reference,
        }
    )
    return 0


def _cmd_header(args: argparse.Namespace) -> int:
    payload = decode_payment_header(args.header)
    if payload is None:
        logging.error("Malformed payment header")
        return 1
    _print_json(payload.to_dict())
    return 0


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    return {key: value for key, value in pairs}


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    if args.command == "facilitators":
        return _cmd_facilitators(args)
    if args.command == "uri":
        return _cmd_uri(args)
    if args.command == "header":
        return _cmd_header(args)

    try:
        config = load_client_config(
            env_file=args.env_file, overrides=_collect_overrides(args.set or ())
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    handlers = {
        "supported": _cmd_supported,
        "requirements": _cmd_requirements,
        "pay": _cmd_pay,
    }
    try:
        return handlers[args.command](args, config)
    except (X402Error, ValueError) as exc:
        logging.error("%s failed: %s", args.command, exc)
        return 1


def main() -> None:
    raise SystemExit(run_cli())
