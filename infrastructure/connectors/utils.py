"""
Wire helpers shared by connector transformers.

`ExposedSecret` is the only place a SecretStr is unwrapped: when a wire DTO
is serialized into the outbound body. Everywhere else it stays masked.
"""
from __future__ import annotations

from typing import Annotated, Optional, TypeVar

from pydantic import BaseModel, PlainSerializer, SecretStr, ValidationError

from domain.connector.exceptions import RequestEncodingFailed, ResponseDeserializationFailed


M = TypeVar("M", bound=BaseModel)

ExposedSecret = Annotated[
    SecretStr,
    PlainSerializer(lambda v: v.get_secret_value(), return_type=str, when_used="always"),
]


def encode(model: BaseModel, *, connector: str, context: Optional[str] = None) -> str:
    """Serialize a wire DTO to its JSON body."""
    try:
        return model.model_dump_json(by_alias=True, exclude_none=True)
    except (ValueError, TypeError) as exc:
        raise RequestEncodingFailed(connector=connector, context=context or type(model).__name__) from exc


def parse_struct(raw: bytes, model: type[M], *, connector: str, context: Optional[str] = None) -> M:
    """Deserialize connector bytes into a wire DTO."""
    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        raise ResponseDeserializationFailed(
            connector=connector,
            context=context or model.__name__,
            raw_response=raw,
        ) from exc
