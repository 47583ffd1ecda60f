"""Shared error type and the request client used by every API module."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

SUCCESS_CODE = 0
INVALID_PARAMS_CODE = -1

Transport = Callable[[str, str, dict[str, Any]], Mapping[str, Any] | None]


class ImError(Exception):
    """An error reported by the service or raised for invalid arguments."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class Client:
    """Sends commands through a transport and checks the service's status.

    The transport is a callable taking ``(service, command, payload)`` and
    returning the decoded JSON response as a mapping.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def post(self, service: str, command: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Send one command and return the response, raising ImError on failure."""
        response = dict(self._transport(service, command, dict(payload)) or {})
        code = int(response.get("ErrorCode") or SUCCESS_CODE)
        if code != SUCCESS_CODE:
            raise ImError(code, str(response.get("ErrorInfo") or ""))
        return response