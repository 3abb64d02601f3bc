"""
Transport-facing request/response values produced and consumed by connector
integrations.

A Request is immutable once built; the transport executes it and hands back
a Response carrying the status code and the raw body bytes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


Headers = list[tuple[str, str]]

# Header names whose values carry credentials
SENSITIVE_HEADERS = frozenset({"authorization", "api-key", "x-api-key", "key", "signature"})


@dataclass(frozen=True)
class Request:
    method: Method
    url: str
    headers: tuple[tuple[str, str], ...] = field(default=(), repr=False)
    body: Optional[str] = field(default=None, repr=False)

    def masked_headers(self) -> list[tuple[str, str]]:
        return [
            (name, "*** masked ***" if name.lower() in SENSITIVE_HEADERS else value)
            for name, value in self.headers
        ]


class RequestBuilder:
    """Fluent builder for Request.

    `headers(None)` and `body(None)` are no-ops, so GET/DELETE flows and
    connectors without auth headers go through the same path.
    """

    def __init__(self) -> None:
        self._method: Method = Method.GET
        self._url: Optional[str] = None
        self._headers: Headers = []
        self._body: Optional[str] = None

    def method(self, method: Method) -> "RequestBuilder":
        self._method = method
        return self

    def url(self, url: str) -> "RequestBuilder":
        self._url = url
        return self

    def header(self, name: str, value: str) -> "RequestBuilder":
        self._headers.append((name, value))
        return self

    def headers(self, headers: Optional[Iterable[tuple[str, str]]]) -> "RequestBuilder":
        if headers:
            self._headers.extend(headers)
        return self

    def body(self, body: Optional[str]) -> "RequestBuilder":
        if body is not None:
            self._body = body
        return self

    def build(self) -> Request:
        if not self._url:
            raise ValueError("Request url is required")
        return Request(
            method=self._method,
            url=self._url,
            headers=tuple(self._headers),
            body=self._body,
        )


@dataclass(frozen=True)
class Response:
    status_code: int
    response: bytes
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300
