"""
Explicit wiring of the SDK's collaborators.

`SdkContext` bundles config, the chain client, the tip-object pool, the
selector and the two services built on them. Construct one with
`SdkContext.from_config(cfg)` and pass its members around, or let the
module-level helpers (`blockrz_sdk.fee.calculate_fee_from_tx_b64`,
`blockrz_sdk.tip.add_tip`, ...) use the process-wide `default_context()`.

The default context is built at most once, from `SDKConfig.from_env()`, even
under concurrent first use. It is never mutated afterwards.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from .config import SDKConfig
from .fee import FeeCalculator
from .rpc.http import RpcClient
from .rpc.sui import SuiClient
from .tip.inject import TipInjector
from .tip.pool import DEFAULT_POOL, RandomSelector, TipObjectPool, TipObjectSelector

_LOG = logging.getLogger("blockrz_sdk")


@dataclass(frozen=True)
class SdkContext:
    config: SDKConfig
    client: SuiClient
    pool: TipObjectPool
    selector: TipObjectSelector
    injector: TipInjector
    fee_calculator: FeeCalculator

    @classmethod
    def from_config(
        cls,
        config: SDKConfig,
        *,
        client: Optional[SuiClient] = None,
        pool: Optional[TipObjectPool] = None,
        selector: Optional[TipObjectSelector] = None,
    ) -> "SdkContext":
        if client is None:
            rpc = RpcClient(
                config.rpc_url,
                timeout=config.request_timeout,
                max_retries=config.max_retries,
                backoff_factor=config.backoff_factor,
                headers=config.http_headers(),
            )
            relay = None
            if config.relay_url:
                relay = RpcClient(
                    config.relay_url,
                    timeout=config.request_timeout,
                    max_retries=config.max_retries,
                    backoff_factor=config.backoff_factor,
                    headers=config.relay_headers(),
                )
            client = SuiClient(rpc, relay)
        if pool is None:
            pool = TipObjectPool.from_file(config.tip_pool_file) if config.tip_pool_file else DEFAULT_POOL
        if selector is None:
            selector = RandomSelector(config.selector_seed)
        return cls(
            config=config,
            client=client,
            pool=pool,
            selector=selector,
            injector=TipInjector(pool, selector),
            fee_calculator=FeeCalculator(client),
        )


_default: Optional[SdkContext] = None
_default_lock = threading.Lock()


def default_context() -> SdkContext:
    """Return the process-wide context, building it on first use."""
    global _default
    ctx = _default
    if ctx is not None:
        return ctx
    with _default_lock:
        if _default is None:
            cfg = SDKConfig.from_env()
            _default = SdkContext.from_config(cfg)
            _LOG.debug("default context built for %s", cfg.rpc_url)
        return _default


def set_default_context(ctx: Optional[SdkContext]) -> None:
    """Replace (or with None, reset) the process-wide context."""
    global _default
    with _default_lock:
        _default = ctx


__all__ = ["SdkContext", "default_context", "set_default_context"]
