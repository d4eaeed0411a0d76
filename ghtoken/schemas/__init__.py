"""Public schema exports."""

from .auth import ErrorPayload, TokenExchangeRequest, TokenExchangeResult

__all__ = [
    "ErrorPayload",
    "TokenExchangeRequest",
    "TokenExchangeResult",
]
