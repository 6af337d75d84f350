from __future__ import annotations

from typing import Optional


class GstEngineError(ValueError):
    """Base class for errors raised by the GST engine."""


class InvalidInput(GstEngineError):
    """Raised when a monetary amount, quantity or rate is negative or not a number."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class UnknownBillingMode(GstEngineError):
    """Raised in strict mode when a billing mode is not one of the recognised values."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Unknown billing mode {value!r}")
        self.value = value
