"""Client-side failure classification."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import requests

NETWORK_MESSAGE = "Verkkovirhe. Yritä uudelleen."
SAVE_FAILED_MESSAGE = "Virhe tallentaessa tietoja"


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"
    NETWORK = "network"


@dataclass(frozen=True)
class ErrorInfo:
    kind: ErrorKind
    message: str


class ApiError(Exception):
    """Non-2xx response from the hedgehog API."""

    def __init__(self, status: int, message: str, details: Optional[list[dict[str, Any]]] = None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.details = details or []


def classify_error(exc: BaseException) -> ErrorInfo:
    if isinstance(exc, ApiError):
        if exc.status == 404:
            kind = ErrorKind.NOT_FOUND
        elif 400 <= exc.status < 500:
            kind = ErrorKind.VALIDATION
        else:
            kind = ErrorKind.PERSISTENCE
        return ErrorInfo(kind, exc.message or SAVE_FAILED_MESSAGE)
    if isinstance(exc, requests.RequestException):
        return ErrorInfo(ErrorKind.NETWORK, NETWORK_MESSAGE)
    return ErrorInfo(ErrorKind.PERSISTENCE, str(exc) or SAVE_FAILED_MESSAGE)
