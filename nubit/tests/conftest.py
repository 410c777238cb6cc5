from __future__ import annotations

import pytest
from prometheus_client import CollectorRegistry

from nubit.config import get_config
from nubit.metrics import NubitMetrics
from nubit.preimages import MemoryPreimageRecorder

from .squares import make_square

_ENV_KEYS = (
    "NUBIT_DA_ENABLE",
    "NUBIT_DA_URL",
    "NUBIT_DA_NAMESPACE",
    "NUBIT_DA_AUTHKEY",
    "NUBIT_DA_TIMEOUT",
)


@pytest.fixture
def square_factory():
    return make_square


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
def metrics(registry: CollectorRegistry) -> NubitMetrics:
    return NubitMetrics(registry=registry)


@pytest.fixture
def recorder() -> MemoryPreimageRecorder:
    return MemoryPreimageRecorder()


@pytest.fixture
def clean_env(monkeypatch):
    """Strip NUBIT_DA_* from the environment and reset the cached config."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    get_config.cache_clear()
    yield monkeypatch
    get_config.cache_clear()
