"""Thin HTTP client for the GearGuard JSON API."""

from __future__ import annotations

import os
from typing import Any
from uuid import UUID

import requests

DEFAULT_BASE_URL = "http://localhost:8000/api"
DEFAULT_TIMEOUT = 10.0


class ApiError(RuntimeError):
    """Raised for transport failures, error statuses and malformed bodies."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class GearGuardClient:
    """Issue API calls and unwrap the ``{"data": ...}`` envelope.

    ``session`` may be any object exposing ``request(method, url, **kwargs)``
    the way :class:`requests.Session` does.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        session: Any | None = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("GEARGUARD_API_URL", DEFAULT_BASE_URL)).rstrip("/")
        self.timeout = float(timeout or os.getenv("GEARGUARD_API_TIMEOUT", DEFAULT_TIMEOUT))
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise ApiError(f"{method} {url} failed: {exc}") from exc

        if resp.status_code == 204:
            return None
        if resp.status_code >= 400:
            raise ApiError(_error_detail(resp), resp.status_code)
        try:
            body = resp.json()
        except ValueError as exc:
            raise ApiError("Malformed response body", resp.status_code) from exc
        if not isinstance(body, dict) or "data" not in body:
            raise ApiError("Response is missing the data envelope", resp.status_code)
        return body["data"]

    def get(self, path: str, params: dict | None = None) -> Any:
        return self._request("GET", path, params=params)

    def post(self, path: str, payload: dict) -> Any:
        return self._request("POST", path, json=payload)

    def put(self, path: str, payload: dict) -> Any:
        return self._request("PUT", path, json=payload)

    def delete(self, path: str) -> None:
        self._request("DELETE", path)

    def list_requests(self) -> list[dict]:
        return self.get("/requests") or []

    def list_equipment(self) -> list[dict]:
        return self.get("/equipment") or []

    def list_users(self) -> list[dict]:
        return self.get("/users") or []

    def get_request(self, request_id: str | UUID) -> dict:
        return self.get(f"/requests/{request_id}")

    def update_stage(self, request_id: str | UUID, stage: str, **extra) -> dict:
        return self.put(f"/requests/{request_id}/stage", {"stage": stage, **extra})

    def delete_request(self, request_id: str | UUID) -> None:
        self.delete(f"/requests/{request_id}")

    def delete_user(self, user_id: str | UUID) -> None:
        self.delete(f"/users/{user_id}")

    def admin_stats(self) -> dict:
        return self.get("/admin/stats")

    def report_summary(self, range_key: str = "30d") -> dict:
        return self.get("/reports/summary", params={"range": range_key})


def _error_detail(resp) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict) and body.get("detail"):
        detail = body["detail"]
        return detail if isinstance(detail, str) else str(detail)
    return f"HTTP {resp.status_code}"
