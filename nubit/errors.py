"""
Nubit DA errors.

Typed exception hierarchy with structured metadata. The hierarchy encodes the
recovery error taxonomy, so callers can tell the kinds apart with plain
`except` clauses:

    MalformedInput      historical batch is unreadable; resolved locally into an
                        empty payload by the batch reader, never propagated
    TransportError      the DA network could not be reached (or the call was
                        cancelled / timed out); the caller retries or halts
    VerificationError   data returned by the DA network contradicts its own
                        commitment; retrying does not help
    ConfigError         bad namespace or service URL, raised at construction
    NoFallbackAvailable store failed and on-chain fallback is disabled

Usage:

    from nubit.errors import RowRootMismatch, TransportError

    try:
        payload = recover_payload_from_batch(msg, reader)
    except VerificationError as e:
        log.error("DA data rejected: %s", e, extra={"data": e.data})

All errors expose:
- .code      : stable machine-readable code (snake_case)
- .data      : optional structured payload (dict-like)
- .to_dict() : JSON-friendly rendering for logs and CLIs
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class NubitError(Exception):
    """
    Base class for Nubit DA errors.

    Subclasses set `default_code`.
    """
    default_code = "nubit_error"

    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.data: Dict[str, Any] = dict(data) if data else {}

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.message:
            return f"{self.code}: {self.message}"
        return self.code

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message or None,
            "data": self.data or None,
        }


# --------------------------------------------------------------------------- #
# Malformed input (resolved locally into an empty batch)
# --------------------------------------------------------------------------- #


class MalformedInput(NubitError):
    """A batch message or pointer that cannot be parsed."""
    default_code = "malformed_input"


class TruncatedMessage(MalformedInput):
    """The sequencer message ends before the DA header byte."""
    default_code = "truncated_message"


class NotAPointerMessage(MalformedInput):
    """The header byte does not carry the Nubit flag bits."""
    default_code = "not_a_pointer_message"


class MalformedPointer(MalformedInput):
    """The pointer bytes do not decode into a valid BlobPointer."""
    default_code = "malformed_pointer"


# --------------------------------------------------------------------------- #
# Transport
# --------------------------------------------------------------------------- #


class TransportError(NubitError):
    """
    Fetch/submit/proof call failed before any data could be judged: network
    error, RPC error, timeout or cancellation.
    """
    default_code = "transport_error"


class NoFallbackAvailable(NubitError):
    """
    Storing a batch on the DA network failed and storing the data on chain
    instead is disabled. Terminal for the caller.
    """
    default_code = "no_fallback_available"


# --------------------------------------------------------------------------- #
# Verification (security relevant, never retryable)
# --------------------------------------------------------------------------- #


class VerificationError(NubitError):
    """Fetched data is inconsistent with the commitment in the blob pointer."""
    default_code = "verification_failed"


class MissingSquareData(VerificationError):
    """A non-empty payload was returned without the square needed to verify it."""
    default_code = "missing_square_data"


class MalformedSquare(VerificationError):
    """Square geometry or share layout is inconsistent (with itself or the pointer)."""
    default_code = "malformed_square"


class RowRootMismatch(VerificationError):
    """A row's recomputed NMT root differs from the row root served with it."""
    default_code = "row_root_mismatch"

    def __init__(self, row_index: int, expected: bytes, computed: bytes) -> None:
        super().__init__(
            f"row {row_index}: root does not match the served row root",
            data={
                "row_index": row_index,
                "expected": "0x" + bytes(expected).hex(),
                "computed": "0x" + bytes(computed).hex(),
            },
        )
        self.row_index = row_index
        self.expected = bytes(expected)
        self.computed = bytes(computed)


class DataRootMismatch(VerificationError):
    """The data root over row+column roots differs from the pointer's data root."""
    default_code = "data_root_mismatch"

    def __init__(self, expected: bytes, computed: bytes) -> None:
        super().__init__(
            "data root does not match the blob pointer",
            data={
                "expected": "0x" + bytes(expected).hex(),
                "computed": "0x" + bytes(computed).hex(),
            },
        )
        self.expected = bytes(expected)
        self.computed = bytes(computed)


# --------------------------------------------------------------------------- #
# Configuration (fail fast at construction)
# --------------------------------------------------------------------------- #


class ConfigError(NubitError, ValueError):
    """Invalid configuration value."""
    default_code = "config_error"


class NamespaceTooLong(ConfigError):
    """Namespace name does not fit the fixed namespace width."""
    default_code = "namespace_too_long"


class InvalidServiceURL(ConfigError):
    """DA service URL is not an http(s) URL with a host."""
    default_code = "invalid_service_url"


__all__ = [
    "NubitError",
    "MalformedInput",
    "TruncatedMessage",
    "NotAPointerMessage",
    "MalformedPointer",
    "TransportError",
    "NoFallbackAvailable",
    "VerificationError",
    "MissingSquareData",
    "MalformedSquare",
    "RowRootMismatch",
    "DataRootMismatch",
    "ConfigError",
    "NamespaceTooLong",
    "InvalidServiceURL",
]
