"""
Stored connector credentials as a tagged union.

Each connector projects the variant it understands into its own auth shape
and rejects the others.
"""
from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, TypeAdapter


class _AuthVariant(BaseModel):
    model_config = ConfigDict(frozen=True)


class HeaderKey(_AuthVariant):
    auth_type: Literal["HeaderKey"] = "HeaderKey"
    api_key: SecretStr


class BodyKey(_AuthVariant):
    auth_type: Literal["BodyKey"] = "BodyKey"
    api_key: SecretStr
    key1: SecretStr


class SignatureKey(_AuthVariant):
    auth_type: Literal["SignatureKey"] = "SignatureKey"
    api_key: SecretStr
    key1: SecretStr
    api_secret: SecretStr


class NoKey(_AuthVariant):
    auth_type: Literal["NoKey"] = "NoKey"


ConnectorAuthType = Annotated[
    Union[HeaderKey, BodyKey, SignatureKey, NoKey],
    Field(discriminator="auth_type"),
]

_auth_adapter: TypeAdapter = TypeAdapter(ConnectorAuthType)


def parse_connector_auth(data: dict) -> "HeaderKey | BodyKey | SignatureKey | NoKey":
    """Load a stored credential blob, e.g. {"auth_type": "HeaderKey", "api_key": "..."}."""
    return _auth_adapter.validate_python(data)
