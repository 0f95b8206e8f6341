"""
api_client.py — HTTP client for the hedgehog API

Thin wrapper over a ``requests.Session``. Non-2xx responses raise
:class:`~hedgehog_ui.errors.ApiError`; transport failures propagate as
``requests.RequestException``. Use :func:`~hedgehog_ui.errors.classify_error`
to turn either into a user-facing message.
"""
from __future__ import annotations

from typing import Any, Optional

import requests

from hedgehog_ui.errors import ApiError
from hedgehog_ui.settings import API_TIMEOUT, API_URL


class HedgehogApi:
    def __init__(
        self,
        base_url: str = API_URL,
        timeout: float = API_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("Accept", "application/json")

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _raise_for_status(self, resp: requests.Response) -> None:
        if resp.ok:
            return
        try:
            body = resp.json()
        except ValueError:
            body = {}
        message = body.get("message") if isinstance(body, dict) else None
        details = body.get("details") if isinstance(body, dict) else None
        raise ApiError(resp.status_code, message or resp.reason or "", details)

    def list_hedgehogs(self) -> list[dict[str, Any]]:
        resp = self.session.get(self._url("/hedgehog"), timeout=self.timeout)
        self._raise_for_status(resp)
        return resp.json().get("hedgehogs") or []

    def get_hedgehog(self, hedgehog_id: int) -> Optional[dict[str, Any]]:
        """Full record, or ``None`` when the id does not exist."""
        resp = self.session.get(self._url(f"/hedgehog/{hedgehog_id}"), timeout=self.timeout)
        if resp.status_code == 404:
            return None
        self._raise_for_status(resp)
        return resp.json()["hedgehog"]

    def create_hedgehog(self, payload: dict[str, Any]) -> dict[str, Any]:
        resp = self.session.post(self._url("/hedgehog"), json=payload, timeout=self.timeout)
        self._raise_for_status(resp)
        return resp.json()["hedgehog"]
