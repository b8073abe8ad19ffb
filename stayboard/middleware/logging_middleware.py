"""Logging helpers with sensitive data redaction."""

import re

# Sensitive parameters to redact from URLs and error messages
SENSITIVE_PARAMS = [
    "appid",
    "api_key",
    "apikey",
    "access_key",
    "token",
    "password",
    "secret",
    "key",
]


def redact_sensitive_data(url: str) -> str:
    """Redact sensitive query parameters from a URL or any text embedding one."""
    redacted = url
    for param in SENSITIVE_PARAMS:
        pattern = rf"([?&]){param}=([^&\s\"']+)"
        redacted = re.sub(pattern, rf"\g<1>{param}=***REDACTED***", redacted)
    return redacted
