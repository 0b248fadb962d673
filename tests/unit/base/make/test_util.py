import pytest

from lfx_make.base.make.util import build_sse_url, redact_secret, redact_sse_url, resolve_zone_host
from lfx_make.services.deps import get_settings_service


@pytest.mark.parametrize(("zone", "host"), [("us1", "us1.make.com"), ("EU2", "eu2.make.com"), (" ap1 ", "ap1.make.com")])
def test_zone_codes_resolve_to_make_hosts(zone, host):
    assert resolve_zone_host(zone) == host


def test_full_host_is_kept():
    assert resolve_zone_host("eu1.make.celonis.com") == "eu1.make.celonis.com"


def test_host_template_comes_from_settings(monkeypatch):
    monkeypatch.setenv("LFX_MAKE_MAKE_ZONE_HOST_TEMPLATE", "{zone}.example.test")

    assert resolve_zone_host("us1") == "us1.example.test"


def test_host_template_requires_placeholder():
    with pytest.raises(ValueError, match="zone"):
        get_settings_service().set("make_zone_host_template", "make.com")


def test_empty_zone_is_rejected():
    with pytest.raises(ValueError, match="zone is required"):
        resolve_zone_host("")


def test_build_sse_url():
    assert build_sse_url("us1", "tok-123") == "https://us1.make.com/mcp/api/v1/u/tok-123/sse"


def test_build_sse_url_requires_token():
    with pytest.raises(ValueError, match="token is required"):
        build_sse_url("us1", "  ")


def test_redaction():
    url = build_sse_url("us1", "tok-123")
    message = f"Client error '401 Unauthorized' for url '{url}'"

    assert redact_sse_url(message) == "Client error '401 Unauthorized' for url 'https://us1.make.com/mcp/api/v1/u/****/sse'"
    assert redact_secret("token tok-123 rejected", "tok-123") == "token **** rejected"
    assert redact_secret("unchanged", None) == "unchanged"
