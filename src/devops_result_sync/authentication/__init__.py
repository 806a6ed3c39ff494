"""Authentication exports."""

from .credential_encoder import (
    MissingCredentialError,
    basic_authorization_header,
    encode_access_token,
)

__all__ = [
    "MissingCredentialError",
    "basic_authorization_header",
    "encode_access_token",
]
