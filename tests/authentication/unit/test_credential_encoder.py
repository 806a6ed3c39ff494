"""Access token encoding tests."""

from __future__ import annotations

import base64

import pytest
from devops_result_sync.authentication import (
    MissingCredentialError,
    basic_authorization_header,
    encode_access_token,
)
from devops_result_sync.configuration import ConfigurationError


def test_encode_access_token_prefixes_empty_user_name() -> None:
    encoded = encode_access_token("abc")

    assert encoded == base64.b64encode(b":abc").decode("ascii")
    assert base64.b64decode(encoded) == b":abc"


def test_basic_authorization_header_uses_basic_scheme() -> None:
    assert basic_authorization_header("abc") == "Basic OmFiYw=="


@pytest.mark.parametrize("token", [None, "", "   "])
def test_missing_token_is_a_configuration_error(token: str | None) -> None:
    with pytest.raises(MissingCredentialError, match="AZURE_PAT") as excinfo:
        encode_access_token(token)

    assert isinstance(excinfo.value, ConfigurationError)
