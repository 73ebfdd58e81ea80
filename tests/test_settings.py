from pathlib import Path

import pytest

from smartqr.core.config.settings import Settings
from smartqr.core.exceptions import ConfigError


def test_configured_settings_pass_validation(settings):
    assert settings.get_missing_credentials() == []
    settings.validate_credentials()


def test_missing_and_placeholder_values_are_aggregated():
    settings = Settings()
    settings.VIETQR_CLIENT_ID = "your_vietqr_client_id_here"
    settings.VIETQR_API_KEY = "api-key"
    settings.GEMINI_API_KEY = "   "

    assert settings.get_missing_credentials() == ["VIETQR_CLIENT_ID", "GEMINI_API_KEY"]
    with pytest.raises(ConfigError) as exc_info:
        settings.validate_credentials()

    message = exc_info.value.message
    assert "VIETQR_CLIENT_ID, GEMINI_API_KEY" in message
    assert "VIETQR_API_KEY" not in message
    assert exc_info.value.status_code == 500


@pytest.mark.parametrize("qr_format", ["compact", "qr_only", "print"])
def test_supported_qr_formats_pass_validation(settings, qr_format):
    settings.VIETQR_QR_FORMAT = qr_format

    assert settings.get_qr_format_error() is None
    settings.validate_credentials()


def test_unknown_qr_format_raises_config_error(settings):
    settings.VIETQR_QR_FORMAT = "poster"

    with pytest.raises(ConfigError, match="Invalid VIETQR_QR_FORMAT: 'poster'") as exc_info:
        settings.validate_credentials()
    assert exc_info.value.status_code == 500


def test_env_example_lists_placeholder_credentials():
    env_example = Path(__file__).resolve().parent.parent / ".env.example"
    values = dict(
        line.split("=", 1) for line in env_example.read_text(encoding="utf-8").splitlines()
        if line and not line.startswith("#")
    )

    assert values == Settings.PLACEHOLDER_VALUES
