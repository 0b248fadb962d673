from .util import build_sse_url, redact_secret, redact_sse_url, resolve_zone_host

__all__ = ["build_sse_url", "redact_secret", "redact_sse_url", "resolve_zone_host"]
