import pytest
from pydantic import ValidationError

from lfx_make.services.deps import get_settings_service
from lfx_make.services.settings.base import Settings


def test_defaults():
    settings = Settings()

    assert settings.mcp_client_name == "lfx-make-sse-client"
    assert settings.mcp_sse_timeout == 5.0
    assert settings.mcp_sse_read_timeout == 300.0
    assert settings.mcp_verify_ssl is True
    assert settings.load_error_max_length == 100


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LFX_MAKE_MCP_CLIENT_NAME", "custom-client")
    monkeypatch.setenv("LFX_MAKE_MCP_VERIFY_SSL", "false")

    settings = get_settings_service().settings

    assert settings.mcp_client_name == "custom-client"
    assert settings.mcp_verify_ssl is False


def test_invalid_values_are_rejected():
    with pytest.raises(ValidationError):
        Settings(load_error_max_length=0)
    with pytest.raises(ValidationError):
        get_settings_service().set("mcp_sse_timeout", -1)
