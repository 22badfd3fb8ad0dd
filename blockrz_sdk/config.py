"""
SDK configuration: RPC endpoints, relay credentials, retry/timeouts and the
tip-object pool source.

- Loads sane defaults and supports overrides via environment variables (BLOCKRZ_*).
- Provides helpers for building HTTP headers and validating endpoints.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .constants import DEFAULT_MAINNET_RPC
from .version import __version__


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None and v != "" else default


def _ensure_scheme(url: Optional[str], allowed: tuple[str, ...]) -> Optional[str]:
    if not url:
        return url
    lower = url.lower()
    if not any(lower.startswith(f"{sch}://") for sch in allowed):
        raise ValueError(f"URL must start with {allowed}, got: {url!r}")
    return url


def _parse_seed(val: Optional[str]) -> Optional[int]:
    if val is None or val == "":
        return None
    return int(val, 10)


@dataclass(slots=True)
class SDKConfig:
    # Read-only fullnode used for dry runs and object lookups
    rpc_url: str = field(default_factory=lambda: DEFAULT_MAINNET_RPC)
    # Optional BlockRazor relay endpoint used for submission
    relay_url: Optional[str] = None
    auth_token: Optional[str] = None
    # HTTP behaviour
    request_timeout: float = 15.0
    max_retries: int = 3
    backoff_factor: float = 1.8
    # Headers / identity
    user_agent: str = field(default_factory=lambda: f"blockrz-sui-sdk-py/{__version__}")
    # Tip pool overrides
    tip_pool_file: Optional[str] = None
    selector_seed: Optional[int] = None

    @classmethod
    def from_env(cls, prefix: str = "BLOCKRZ_") -> "SDKConfig":
        """
        Create config from environment variables:

        BLOCKRZ_RPC_URL         (http/https)
        BLOCKRZ_RELAY_URL       (http/https) optional
        BLOCKRZ_AUTH_TOKEN      (str) optional, sent as `auth_token` header to the relay
        BLOCKRZ_TIMEOUT         (float seconds, HTTP)
        BLOCKRZ_MAX_RETRIES     (int)
        BLOCKRZ_BACKOFF         (float)
        BLOCKRZ_USER_AGENT      (str)
        BLOCKRZ_TIP_POOL_FILE   (path to a JSON pool override)
        BLOCKRZ_SELECTOR_SEED   (int) optional, makes tip-object selection reproducible
        """
        rpc = _env(f"{prefix}RPC_URL", DEFAULT_MAINNET_RPC)
        relay = _env(f"{prefix}RELAY_URL", None)
        _ensure_scheme(rpc, ("http", "https"))
        _ensure_scheme(relay, ("http", "https"))

        return cls(
            rpc_url=rpc or DEFAULT_MAINNET_RPC,
            relay_url=relay,
            auth_token=_env(f"{prefix}AUTH_TOKEN", None),
            request_timeout=float(_env(f"{prefix}TIMEOUT", "15.0")),
            max_retries=int(_env(f"{prefix}MAX_RETRIES", "3")),
            backoff_factor=float(_env(f"{prefix}BACKOFF", "1.8")),
            user_agent=_env(f"{prefix}USER_AGENT", None) or f"blockrz-sui-sdk-py/{__version__}",
            tip_pool_file=_env(f"{prefix}TIP_POOL_FILE", None),
            selector_seed=_parse_seed(_env(f"{prefix}SELECTOR_SEED", None)),
        )

    @classmethod
    def with_overrides(cls, base: Optional["SDKConfig"] = None, **overrides: Any) -> "SDKConfig":
        """Copy `base` (default: `from_env()`) replacing known fields; unknown keys are ignored."""
        data = (base or cls.from_env()).to_dict()
        data.update((k, v) for k, v in overrides.items() if k in data)
        for key in ("rpc_url", "relay_url"):
            if key in overrides:
                _ensure_scheme(data[key], ("http", "https"))
        return cls(**data)

    def http_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    def relay_headers(self) -> Dict[str, str]:
        headers = self.http_headers()
        if self.auth_token:
            headers["auth_token"] = self.auth_token
        return headers

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rpc_url": self.rpc_url,
            "relay_url": self.relay_url,
            "auth_token": self.auth_token,
            "request_timeout": float(self.request_timeout),
            "max_retries": int(self.max_retries),
            "backoff_factor": float(self.backoff_factor),
            "user_agent": self.user_agent,
            "tip_pool_file": self.tip_pool_file,
            "selector_seed": self.selector_seed,
        }


__all__ = ["SDKConfig"]
