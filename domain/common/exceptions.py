"""Business exception base shared by the domain and infrastructure layers.

Concrete families (e.g. connector errors) subclass BusinessException and
pin their own code/error_type; callers grade severity by `code`.
"""
from __future__ import annotations

from typing import Optional


class BusinessException(Exception):
    """Business exception base"""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        super().__init__(self.message)

    def to_dict(self) -> dict:
        payload = {
            "code": int(self.code),
            "error_type": self.error_type,
            "message": self.message,
        }
        if self.details:
            payload["details"] = self.details
        if self.field:
            payload["field"] = self.field
        return payload
