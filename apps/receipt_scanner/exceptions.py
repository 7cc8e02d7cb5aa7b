"""Errors raised while talking to the receipt verification portal."""

from __future__ import annotations


class PursError(Exception):
    """Base error for the suf.purs.gov.rs client."""


class PursTransportError(PursError):
    """Raised when the request fails, times out or the portal answers with status >= 400."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PursResponseError(PursError):
    """Raised when the specifications payload cannot be parsed."""


__all__ = ["PursError", "PursTransportError", "PursResponseError"]
