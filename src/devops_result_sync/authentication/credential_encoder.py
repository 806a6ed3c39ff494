"""Personal access token encoding for Basic authentication."""

from __future__ import annotations

import base64

from devops_result_sync.configuration.loader import ConfigurationError


class MissingCredentialError(ConfigurationError):
    """Raised when no access token is available."""


def encode_access_token(token: str | None) -> str:
    """Return ``base64(":" + token)``, the Basic credential for a personal access token."""
    if token is None or not token.strip():
        raise MissingCredentialError(
            "Access token is required; set the AZURE_PAT environment variable."
        )
    return base64.b64encode(f":{token}".encode()).decode("ascii")


def basic_authorization_header(token: str | None) -> str:
    return f"Basic {encode_access_token(token)}"
