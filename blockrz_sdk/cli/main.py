"""
blockrz_sdk.cli.main
====================

`blockrz-sdk`: fee/tip helpers for BlockRazor-tipped Sui transactions.

Examples
--------
    $ blockrz-sdk fee --computation 1000000 --storage 2000000
    $ blockrz-sdk --rpc https://fullnode.mainnet.sui.io:443 estimate <TX_B64>
    $ blockrz-sdk pool list
    $ blockrz-sdk pool pick --seed 7
    $ blockrz-sdk tip-plan --amount 180000 --index 0
    $ blockrz-sdk object-ref 0x…

Configuration
-------------
- RPC URL   : `--rpc` or env `BLOCKRZ_RPC_URL` (default: Sui mainnet fullnode)
- Timeout   : `--timeout` or env `BLOCKRZ_TIMEOUT` seconds
- Tip pool  : `--pool-file` or env `BLOCKRZ_TIP_POOL_FILE` (JSON)
"""

from __future__ import annotations

import base64
import json
import logging
import sys
from dataclasses import dataclass
from typing import Any, NoReturn, Optional

import typer

from ..config import SDKConfig
from ..errors import BlockRzSdkError
from ..fee import FeeCalculator, calculate_fee
from ..rpc.http import RpcClient
from ..rpc.sui import SuiClient
from ..tip.inject import TipInjector
from ..tip.pool import DEFAULT_POOL, FixedSelector, RandomSelector, TipObjectPool
from ..tx.ptb import ProgrammableTransaction
from ..types.core import GasCostSummary
from ..version import __version__ as SDK_VERSION

app = typer.Typer(
    name="blockrz-sdk",
    help="BlockRazor Sui SDK CLI: compute gas budgets and tips and inspect the tip pool.",
    no_args_is_help=True,
    add_completion=False,
)
pool_app = typer.Typer(no_args_is_help=True, help="Inspect the shared tip-object pool.")
app.add_typer(pool_app, name="pool")

__all__ = ["app", "main"]


@dataclass
class Ctx:
    config: SDKConfig

    def pool(self) -> TipObjectPool:
        if self.config.tip_pool_file:
            return TipObjectPool.from_file(self.config.tip_pool_file)
        return DEFAULT_POOL

    def rpc(self) -> RpcClient:
        cfg = self.config
        return RpcClient(
            cfg.rpc_url,
            timeout=cfg.request_timeout,
            max_retries=cfg.max_retries,
            backoff_factor=cfg.backoff_factor,
            headers=cfg.http_headers(),
        )


def _print_json(obj: Any) -> None:
    typer.echo(json.dumps(obj, indent=2, ensure_ascii=False))


def _fail(e: Exception) -> NoReturn:
    typer.echo(f"error: {e}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def _root(
    ctx: typer.Context,
    rpc: Optional[str] = typer.Option(None, "--rpc", help="Sui fullnode JSON-RPC URL.", envvar="BLOCKRZ_RPC_URL"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="HTTP timeout in seconds."),
    pool_file: Optional[str] = typer.Option(None, "--pool-file", help="JSON file overriding the tip-object pool."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Resolve configuration for this CLI process."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    overrides: dict = {}
    if rpc:
        overrides["rpc_url"] = rpc
    if timeout is not None:
        overrides["request_timeout"] = timeout
    if pool_file:
        overrides["tip_pool_file"] = pool_file
    try:
        cfg = SDKConfig.with_overrides(SDKConfig.from_env(), **overrides)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    ctx.obj = Ctx(config=cfg)


@app.command("version")
def version() -> None:
    """Print the SDK CLI version."""
    typer.echo(f"blockrz-sdk {SDK_VERSION}")


@app.command("fee")
def fee(
    computation: str = typer.Option(..., "--computation", help="computationCost (decimal)."),
    storage: str = typer.Option(..., "--storage", help="storageCost (decimal)."),
) -> None:
    """Compute gas budget and tip from a gas cost report."""
    try:
        result = calculate_fee(GasCostSummary(computation_cost=computation, storage_cost=storage))
    except BlockRzSdkError as e:
        _fail(e)
    _print_json(result.to_dict())


@app.command("estimate")
def estimate(
    ctx: typer.Context,
    tx_b64: str = typer.Argument(..., help="Base64 BCS TransactionData to dry-run."),
) -> None:
    """Dry-run a transaction through --rpc and print the resulting fee."""
    c: Ctx = ctx.obj
    try:
        with c.rpc() as rpc:
            result = FeeCalculator(SuiClient(rpc)).from_tx_b64(tx_b64)
    except BlockRzSdkError as e:
        _fail(e)
    _print_json(result.to_dict())


@app.command("object-ref")
def object_ref(
    ctx: typer.Context,
    object_id: str = typer.Argument(..., help="Object id (0x...)."),
) -> None:
    """Fetch the latest version and digest of an object."""
    c: Ctx = ctx.obj
    try:
        with c.rpc() as rpc:
            ref = SuiClient(rpc).get_latest_object_ref(object_id)
    except BlockRzSdkError as e:
        _fail(e)
    _print_json(ref.to_dict())


@app.command("tip-plan")
def tip_plan(
    ctx: typer.Context,
    amount: int = typer.Option(..., "--amount", help="Tip amount in MIST."),
    index: Optional[int] = typer.Option(None, "--index", help="Use this pool entry instead of a random one."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for random selection."),
) -> None:
    """Build a transaction holding only the tip commands and print it."""
    c: Ctx = ctx.obj
    try:
        pool = c.pool()
        selector = FixedSelector(index) if index is not None else RandomSelector(seed)
        tx = ProgrammableTransaction()
        obj = TipInjector(pool, selector).add_tip(tx, amount)
    except BlockRzSdkError as e:
        _fail(e)
    _print_json(
        {
            "tipObject": obj.to_dict(),
            "transaction": tx.to_dict(),
            "kindBcs": base64.b64encode(tx.to_bcs()).decode("ascii"),
        }
    )


@pool_app.command("list")
def pool_list(ctx: typer.Context) -> None:
    """Print every pool entry."""
    c: Ctx = ctx.obj
    try:
        pool = c.pool()
    except BlockRzSdkError as e:
        _fail(e)
    _print_json(pool.to_json())


@pool_app.command("pick")
def pool_pick(
    ctx: typer.Context,
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible selection."),
) -> None:
    """Pick one pool entry at random."""
    c: Ctx = ctx.obj
    try:
        obj = c.pool().select(RandomSelector(seed))
    except BlockRzSdkError as e:
        _fail(e)
    _print_json(obj.to_dict())


# --- Entrypoints --------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> int:
    """Run the CLI. Returns an integer exit code."""
    try:
        rv = app(prog_name="blockrz-sdk", standalone_mode=False, args=argv)
        return rv if isinstance(rv, int) else 0
    except typer.Exit as e:  # normal exit
        return int(e.exit_code)
    except Exception as e:
        typer.echo(f"error: {e}", err=True)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
