import pytest

from nubit.config import NubitConfig, format_config, get_config
from nubit.errors import ConfigError, InvalidServiceURL, NamespaceTooLong


def test_defaults(clean_env):
    cfg = get_config()
    assert cfg == NubitConfig()
    assert cfg.enable is False
    assert cfg.url == "http://localhost:26656"
    assert cfg.namespace == "nitro-dev"
    assert cfg.timeout == 30.0


def test_env_overrides(clean_env):
    clean_env.setenv("NUBIT_DA_ENABLE", "yes")
    clean_env.setenv("NUBIT_DA_URL", "https://nuport.example:8443")
    clean_env.setenv("NUBIT_DA_NAMESPACE", "orbit")
    clean_env.setenv("NUBIT_DA_AUTHKEY", "s3cret")
    clean_env.setenv("NUBIT_DA_TIMEOUT", "2.5")
    cfg = get_config()
    assert cfg.enable is True
    assert cfg.url == "https://nuport.example:8443"
    assert cfg.namespace_bytes().raw.endswith(b"orbit")
    assert cfg.authkey == "s3cret"
    assert cfg.timeout == 2.5


def test_get_config_is_cached(clean_env):
    first = get_config()
    clean_env.setenv("NUBIT_DA_NAMESPACE", "other")
    assert get_config() is first
    get_config.cache_clear()
    assert get_config().namespace == "other"


def test_blank_values_fall_back_to_defaults(clean_env):
    clean_env.setenv("NUBIT_DA_URL", "  ")
    assert get_config().url == NubitConfig().url


@pytest.mark.parametrize(
    "key,value,exc",
    [
        ("NUBIT_DA_ENABLE", "maybe", ConfigError),
        ("NUBIT_DA_TIMEOUT", "soon", ConfigError),
        ("NUBIT_DA_TIMEOUT", "0", ConfigError),
        ("NUBIT_DA_URL", "localhost:26656", InvalidServiceURL),
        ("NUBIT_DA_URL", "ftp://host", InvalidServiceURL),
        ("NUBIT_DA_NAMESPACE", "x" * 30, NamespaceTooLong),
    ],
)
def test_invalid_values_fail_fast(clean_env, key, value, exc):
    clean_env.setenv(key, value)
    with pytest.raises(exc):
        get_config()


def test_config_errors_are_value_errors():
    with pytest.raises(ValueError):
        NubitConfig(url="nope").validate()


def test_authkey_is_redacted():
    cfg = NubitConfig(authkey="s3cret")
    assert cfg.to_dict()["authkey"] == "***"
    text = format_config(cfg)
    assert "s3cret" not in text
    assert "nubit.namespace_hex: " + "00" * 20 + "6e6974726f2d646576" in text


def test_authkey_is_not_in_repr():
    cfg = NubitConfig(authkey="s3cret")
    assert "s3cret" not in repr(cfg)
    assert "s3cret" not in str(cfg)
    assert cfg.authkey == "s3cret"
