"""
Walk through one x402 payment step by step using the public API.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from x402_solana import (
    ConfigError,
    X402Error,
    build_payment_payload,
    build_payment_requirements,
    encode_payment_header,
    is_valid_address,
    load_client_config,
    resolve_supported_methods,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send an x402 SOL payment using the SDK API")
    parser.add_argument("pay_to", help="Recipient Solana address")
    parser.add_argument("amount", help="Amount in SOL (e.g. 0.01)")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing X402_* settings",
    )
    parser.add_argument("--payer", help="Payer address (default: X402_PAYER_ADDRESS)")
    parser.add_argument("--facilitator", help="Facilitator registry key (default: payai)")
    parser.add_argument("--network", help="Network identifier (default: solana-devnet)")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument(
        "--verify-only",
        action="store_true",
        help="Stop after facilitator verification (no settlement)",
    )
    return parser.parse_args()


async def pay(args: argparse.Namespace) -> int:
    try:
        config = load_client_config(
            env_file=args.env_file,
            facilitator=args.facilitator,
            network=args.network,
            payer_address=args.payer,
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    if config.payer_address is None:
        logging.error("A payer address is required (--payer or X402_PAYER_ADDRESS)")
        return 1
    if not is_valid_address(args.pay_to, config.network):
        logging.error("Invalid recipient address: %s", args.pay_to)
        return 1

    client = config.facilitator_client()
    kinds = await resolve_supported_methods(
        config.facilitator_key, client=client, facilitator_url=config.facilitator_url
    )
    logging.info(
        "%s supports: %s",
        config.facilitator.name,
        ", ".join(f"{kind.scheme} on {kind.network}" for kind in kinds),
    )

    requirements = build_payment_requirements(
        args.pay_to, args.amount, config.network, "/payment", "x402 Payment"
    ).accepts[0]

    try:
        payload = await build_payment_payload(config.ledger(), config.payer_address, requirements)
    except X402Error as exc:
        logging.error("Could not build payment payload: %s", exc)
        return 1
    header = encode_payment_header(payload)

    verification = await client.verify(config.facilitator_url, header, requirements)
    if not verification.is_valid:
        logging.error("Payment rejected: %s", verification.invalid_reason)
        return 1

    if args.verify_only:
        logging.info("Verification succeeded; skipping settlement.")
        return 0

    settlement = await client.settle(config.facilitator_url, header, requirements)
    if settlement.success:
        logging.info(
            "Payment settled on %s. Transaction hash: %s",
            settlement.network_id,
            settlement.tx_hash,
        )
        return 0

    logging.error("Settlement failed: %s", settlement.error)
    return 1


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )
    return asyncio.run(pay(args))


if __name__ == "__main__":
    sys.exit(main())
