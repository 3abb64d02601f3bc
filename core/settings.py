"""
Connector-related settings using pydantic-settings v2 with nested env keys.

Loaded once per process and only read afterwards, so it is safe to share
across concurrent connector calls. Override per connector with e.g.
CONNECTORS__PAYU__BASE_URL.
"""
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, ConfigDict, Field

from domain.connector.exceptions import ConnectorNotConfigured


class ConnectorTimeouts(BaseModel):
    connect: float = 1.0
    read: float = 10.0
    write: float = 10.0
    total: float = 15.0


class ConnectorRetry(BaseModel):
    # Only applies to connect-level failures where the request never left.
    max: int = 2
    base_backoff: float = 0.2


class ConnectorParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_url: str


class Connectors(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    mifinity: ConnectorParams = Field(
        default_factory=lambda: ConnectorParams(base_url="https://demo.mifinity.com/")
    )
    payu: ConnectorParams = Field(
        default_factory=lambda: ConnectorParams(base_url="https://secure.snd.payu.com/api/")
    )

    def get(self, connector: str) -> ConnectorParams:
        if connector in type(self).model_fields:
            params = getattr(self, connector)
        else:
            params = (self.model_extra or {}).get(connector)
        if params is None:
            raise ConnectorNotConfigured(connector=connector)
        if isinstance(params, dict):
            # extra connectors supplied via env arrive as plain dicts
            return ConnectorParams(**params)
        return params


class ConnectorSettings(BaseSettings):
    timeouts: ConnectorTimeouts = Field(default_factory=ConnectorTimeouts)
    retry: ConnectorRetry = Field(default_factory=ConnectorRetry)
    connectors: Connectors = Field(default_factory=Connectors)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )


connector_settings = ConnectorSettings()
