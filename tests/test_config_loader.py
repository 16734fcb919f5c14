import pytest
from pydantic import ValidationError

from src.api.main import create_app
from src.utils.config_loader import RelayConfig, load_relay_config

_ENV_VARS = [
    "PAYSTACK_SECRET_KEY",
    "PAYSTACK_BASE_URL",
    "PAYSTACK_TIMEOUT_SECONDS",
    "HOST",
    "PORT",
    "BASE_URL",
    "INTEGRATIONS_MODE",
    "RELAY_CONFIG_PATH",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _write(tmp_path, text):
    path = tmp_path / "relay_config.yml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_match_gateway_conventions():
    cfg = RelayConfig()
    assert cfg.paystack.base_url == "https://api.paystack.co"
    assert cfg.paystack.currency == "KES"
    assert cfg.paystack.provider == "mpesa"
    assert cfg.paystack.default_email == "customer@fastcv.app"
    assert cfg.phone.country_code == "254"
    assert cfg.server.port == 3000
    assert cfg.store.record_ttl_seconds is None
    assert cfg.use_mock_gateway is False


def test_shipped_config_file_loads():
    cfg = load_relay_config()
    assert cfg.paystack.secret_key == ""
    assert cfg.server.cors_origins == ["*"]


def test_env_overrides_yaml(tmp_path, monkeypatch):
    path = _write(
        tmp_path,
        "paystack:\n  secret_key: from-yaml\n  timeout_seconds: 5\nserver:\n  port: 8000\n",
    )
    monkeypatch.setenv("PAYSTACK_SECRET_KEY", "sk_env")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("BASE_URL", "https://relay.example.com")
    monkeypatch.setenv("INTEGRATIONS_MODE", "Mock")

    cfg = load_relay_config(path)

    assert cfg.paystack.secret_key == "sk_env"
    assert cfg.paystack.timeout_seconds == 5
    assert cfg.server.port == 9000
    assert cfg.server.base_url == "https://relay.example.com"
    assert cfg.use_mock_gateway is True


def test_empty_env_values_do_not_override(tmp_path, monkeypatch):
    path = _write(tmp_path, "paystack:\n  secret_key: from-yaml\n")
    monkeypatch.setenv("PAYSTACK_SECRET_KEY", "  ")

    assert load_relay_config(path).paystack.secret_key == "from-yaml"


def test_empty_file_gives_defaults(tmp_path):
    cfg = load_relay_config(_write(tmp_path, ""))
    assert cfg == RelayConfig()


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_relay_config(tmp_path / "absent.yml")


def test_config_path_env_var_selects_file(tmp_path, monkeypatch):
    path = _write(tmp_path, "paystack:\n  currency: NGN\nserver:\n  port: 8123\n")
    monkeypatch.setenv("RELAY_CONFIG_PATH", str(path))

    cfg = load_relay_config()

    assert cfg.paystack.currency == "NGN"
    assert cfg.server.port == 8123


def test_explicit_path_wins_over_config_path_env_var(tmp_path, monkeypatch):
    monkeypatch.setenv("RELAY_CONFIG_PATH", str(tmp_path / "absent.yml"))

    cfg = load_relay_config(_write(tmp_path, "server:\n  port: 8124\n"))

    assert cfg.server.port == 8124


def test_app_built_without_config_reads_config_path_env_var(tmp_path, monkeypatch):
    monkeypatch.setenv("RELAY_CONFIG_PATH", str(_write(tmp_path, "integrations_mode: mock\n")))

    app = create_app()

    assert app.state.config.use_mock_gateway is True


def test_invalid_port_fails_validation(tmp_path, monkeypatch):
    path = _write(tmp_path, "")
    monkeypatch.setenv("PORT", "not-a-port")

    with pytest.raises(ValidationError):
        load_relay_config(path)
