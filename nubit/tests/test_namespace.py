import pytest

from nubit.constants import NAMESPACE_SIZE
from nubit.errors import ConfigError, NamespaceTooLong
from nubit.nmt.namespace import (
    PARITY_SHARES_NAMESPACE,
    ZERO_NAMESPACE,
    Namespace,
    NamespaceError,
    encode_namespace,
)


# ---------------------------------------------------------------------------
# encode_namespace
# ---------------------------------------------------------------------------

def test_encode_nitro_dev_left_pads_with_zeros():
    ns = encode_namespace("nitro-dev")
    assert len(ns.raw) == NAMESPACE_SIZE
    assert ns.raw == b"\x00" * 20 + b"nitro-dev"
    assert ns.hex() == "00" * 20 + "6e6974726f2d646576"
    assert ns.version == 0


def test_encode_empty_name_is_zero_namespace():
    assert encode_namespace("") == ZERO_NAMESPACE


def test_encode_exactly_full_width():
    name = "n" * NAMESPACE_SIZE
    assert encode_namespace(name).raw == name.encode()


def test_encode_too_long_raises():
    with pytest.raises(NamespaceTooLong) as ei:
        encode_namespace("n" * (NAMESPACE_SIZE + 1))
    assert ei.value.code == "namespace_too_long"
    assert isinstance(ei.value, ConfigError)


def test_encode_counts_utf8_bytes_not_characters():
    # 15 two-byte characters = 30 bytes
    with pytest.raises(NamespaceTooLong):
        encode_namespace("é" * 15)
    assert len(encode_namespace("é" * 14).raw) == NAMESPACE_SIZE


# ---------------------------------------------------------------------------
# Namespace value type
# ---------------------------------------------------------------------------

def test_namespace_rejects_wrong_width():
    with pytest.raises(NamespaceError):
        Namespace(b"\x00" * 28)
    with pytest.raises(NamespaceError):
        Namespace("not-bytes")  # type: ignore[arg-type]


def test_from_parts_and_accessors():
    ns = Namespace.from_parts(0, b"\x01" * 28)
    assert ns.version == 0
    assert ns.id == b"\x01" * 28
    assert bytes(ns) == b"\x00" + b"\x01" * 28
    with pytest.raises(NamespaceError):
        Namespace.from_parts(256, b"\x01" * 28)
    with pytest.raises(NamespaceError):
        Namespace.from_parts(0, b"\x01" * 27)


def test_ordering_is_bytewise():
    assert ZERO_NAMESPACE < encode_namespace("nitro-dev") < PARITY_SHARES_NAMESPACE
    assert PARITY_SHARES_NAMESPACE.raw == b"\xff" * NAMESPACE_SIZE
