"""
Nubit DA configuration.

Connection settings for the Nuport RPC service and the namespace this
deployment stores its batches under. Validation runs at load time, so a bad
namespace or URL fails before any batch is processed.

Environment variables (all optional):

  NUBIT_DA_ENABLE=false                 # submit batches to Nubit DA
  NUBIT_DA_URL=http://localhost:26656   # Nuport RPC endpoint
  NUBIT_DA_NAMESPACE=nitro-dev          # namespace name (<= 29 UTF-8 bytes)
  NUBIT_DA_AUTHKEY=                     # bearer token for the RPC service
  NUBIT_DA_TIMEOUT=30                   # per-request timeout, seconds
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from functools import lru_cache
from typing import Dict, List
from urllib.parse import urlparse

from .errors import ConfigError, InvalidServiceURL
from .nmt.namespace import Namespace, encode_namespace


# ------------------------------- helpers ------------------------------------


_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _getenv(key: str, default: str | None = None) -> str | None:
    v = os.environ.get(key)
    return v if v is not None and v.strip() != "" else default


def _getenv_bool(key: str, default: bool) -> bool:
    v = _getenv(key)
    if v is None:
        return default
    vv = v.strip().lower()
    if vv in _TRUE:
        return True
    if vv in _FALSE:
        return False
    raise ConfigError(f"Invalid bool for {key}: {v!r}")


def _getenv_float(key: str, default: float) -> float:
    v = _getenv(key)
    if v is None:
        return default
    try:
        return float(v)
    except ValueError as e:
        raise ConfigError(f"Invalid number for {key}: {v!r}") from e


# ------------------------------- config -------------------------------------


@dataclass(frozen=True)
class NubitConfig:
    """
    Nubit DA client configuration.

    - enable:    submit batches to Nubit DA
    - url:       Nuport RPC service address
    - namespace: namespace name identifying this integration
    - authkey:   auth key for the Nuport RPC service
    - timeout:   per-request timeout in seconds
    """
    enable: bool = False
    url: str = "http://localhost:26656"
    namespace: str = "nitro-dev"
    authkey: str = field(default="", repr=False)
    timeout: float = 30.0

    def validate(self) -> None:
        parsed = urlparse(self.url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidServiceURL(
                f"url must be an http(s) URL with a host, got {self.url!r}",
                data={"url": self.url},
            )
        if self.timeout <= 0:
            raise ConfigError("timeout must be > 0")
        encode_namespace(self.namespace)

    def namespace_bytes(self) -> Namespace:
        return encode_namespace(self.namespace)

    def to_dict(self) -> Dict[str, object]:
        d = asdict(self)
        d["authkey"] = "***" if self.authkey else ""
        return d


# ------------------------------- loader -------------------------------------


def _load_from_env() -> NubitConfig:
    defaults = NubitConfig()
    cfg = NubitConfig(
        enable=_getenv_bool("NUBIT_DA_ENABLE", defaults.enable),
        url=_getenv("NUBIT_DA_URL", defaults.url) or defaults.url,
        namespace=_getenv("NUBIT_DA_NAMESPACE", defaults.namespace) or defaults.namespace,
        authkey=_getenv("NUBIT_DA_AUTHKEY", defaults.authkey) or "",
        timeout=_getenv_float("NUBIT_DA_TIMEOUT", defaults.timeout),
    )
    cfg.validate()
    return cfg


@lru_cache(maxsize=1)
def get_config() -> NubitConfig:
    """
    Load and validate configuration (cached). Clear the cache in tests
    via `get_config.cache_clear()` to observe env changes.
    """
    return _load_from_env()


# Pretty-print helper (useful in CLIs)
def format_config(cfg: NubitConfig | None = None) -> str:
    cfg = cfg or get_config()
    lines: List[str] = []
    for k, v in cfg.to_dict().items():
        lines.append(f"nubit.{k}: {v}")
    lines.append(f"nubit.namespace_hex: {cfg.namespace_bytes().hex()}")
    return "\n".join(lines)


__all__ = [
    "NubitConfig",
    "get_config",
    "format_config",
]
