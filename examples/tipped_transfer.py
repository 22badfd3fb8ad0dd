#!/usr/bin/env python3
"""
tipped_transfer.py: end-to-end example using blockrz_sdk

What this script does:
1) Resolves the latest reference of your gas coin and the reference gas price.
2) Builds a SUI transfer (split from gas, transfer to recipient).
3) Dry-runs it with a placeholder budget and computes gas budget + tip.
4) Sets the budget, appends the BlockRazor tip commands and re-encodes.
5) Prints the unsigned TransactionData (base64). If --signature is given,
   submits it through the relay (or the fullnode when no relay is configured).

Signing is not part of the SDK; sign the printed bytes with your wallet
tooling and pass the serialized signature back with --signature.

Environment
-----------
  BLOCKRZ_RPC_URL      (default: Sui mainnet fullnode)
  BLOCKRZ_RELAY_URL    BlockRazor relay JSON-RPC endpoint (optional)
  BLOCKRZ_AUTH_TOKEN   relay auth token (optional)
"""

from __future__ import annotations

import argparse
import base64
import json
import logging
import sys

from blockrz_sdk.config import SDKConfig
from blockrz_sdk.context import SdkContext
from blockrz_sdk.errors import BlockRzSdkError
from blockrz_sdk.tx.ptb import ProgrammableTransaction

# Large enough for a simple transfer dry run; replaced by the computed budget.
PLACEHOLDER_BUDGET = 50_000_000


def main() -> int:
    ap = argparse.ArgumentParser(description="Build, budget and tip a SUI transfer")
    ap.add_argument("--sender", required=True, help="Sender address (0x...)")
    ap.add_argument("--gas-coin", required=True, help="Gas coin object id owned by the sender")
    ap.add_argument("--recipient", required=True, help="Recipient address (0x...)")
    ap.add_argument("--amount", type=int, required=True, help="Amount to transfer in MIST")
    ap.add_argument("--signature", action="append", default=[], help="Serialized signature (base64); repeatable")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    ctx = SdkContext.from_config(SDKConfig.from_env())
    sui = ctx.client
    try:
        gas_ref = sui.get_latest_object_ref(args.gas_coin)
        price = sui.get_reference_gas_price()

        tx = ProgrammableTransaction(
            sender=args.sender,
            gas_price=price,
            gas_budget=PLACEHOLDER_BUDGET,
            gas_payment=[gas_ref],
        )
        coin = tx.split_coins(tx.gas(), [args.amount])
        tx.transfer_objects([coin], args.recipient)

        fee = ctx.fee_calculator.from_tx_bytes(tx.to_transaction_data_bcs())
        tx.gas_budget = fee.gas_budget
        tip_obj = ctx.injector.add_tip(tx, fee.tip_amount)
        tx_bytes = tx.to_transaction_data_bcs()
    except (BlockRzSdkError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    tx_b64 = base64.b64encode(tx_bytes).decode("ascii")
    print(json.dumps({"fee": fee.to_dict(), "tipObject": tip_obj.to_dict(), "txBytes": tx_b64}, indent=2))

    if not args.signature:
        return 0
    try:
        resp = sui.execute_transaction_block(tx_b64, args.signature)
    except BlockRzSdkError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(json.dumps(resp, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
