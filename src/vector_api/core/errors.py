from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class VectorAPIError(Exception):
    code: str
    message: str
    status_code: int | None = None
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (status {self.status_code})"
        return self.message


class ConfigurationError(VectorAPIError):
    pass


class TransportError(VectorAPIError):
    pass


class MissingTokenError(VectorAPIError):
    pass


class PayloadDecodeError(VectorAPIError):
    pass


class PollTimeoutError(VectorAPIError):
    pass
