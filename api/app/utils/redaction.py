"""Credential masking for connection strings written to logs."""

from __future__ import annotations

import re

_USERINFO_RE = re.compile(r"^([a-z][a-z0-9+.-]*://)[^@/]+@", re.IGNORECASE)
_QUERY_CREDENTIAL_RE = re.compile(r"(?i)([?&](?:password|sslpassword|passfile|token)=)[^&]*")


def redact_secrets(url: str) -> str:
    """Mask the userinfo part and credential query parameters of a database URL."""
    if not url:
        return url
    return _QUERY_CREDENTIAL_RE.sub(r"\1***", _USERINFO_RE.sub(r"\1***@", url))
