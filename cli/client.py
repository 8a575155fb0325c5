from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from cli.config import CLIConfig


class ApiError(Exception):
    """Raised when the service cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ApiClient:
    """Minimal HTTP client for the sensor simulator service."""

    def __init__(self, config: CLIConfig, http_client: Optional[httpx.Client] = None) -> None:
        self._config = config
        self._client = http_client or httpx.Client(
            base_url=config.base_url, timeout=config.timeout
        )

    def close(self) -> None:
        self._client.close()

    def generate_data(self) -> Dict[str, Any]:
        response = self._request("POST", "/generate-data")
        return self._json(response)

    def get_latest(self) -> Optional[Dict[str, Any]]:
        """Return the latest reading, or ``None`` when nothing was generated yet."""
        response = self._request("GET", "/latest-data", allow_not_found=True)
        if response is None:
            return None
        return self._json(response).get("data")

    def get_all(self) -> List[Dict[str, Any]]:
        response = self._request("GET", "/all-data")
        return self._json(response).get("data") or []

    def _request(
        self, method: str, path: str, allow_not_found: bool = False
    ) -> Optional[httpx.Response]:
        try:
            response = self._client.request(method, path)
        except httpx.HTTPError as exc:
            raise ApiError(f"Request to {path} failed: {exc}") from exc

        if allow_not_found and response.status_code == 404:
            return None
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ApiError(
                f"Request failed with status {response.status_code}: "
                f"{self._error_detail(response) or 'no detail provided.'}",
                status_code=response.status_code,
            ) from exc
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            raise ApiError(
                f"Unexpected non-JSON response from {response.request.url.path}",
                status_code=response.status_code,
            ) from exc
        if not isinstance(data, dict):
            raise ApiError(
                f"Unexpected response payload from {response.request.url.path}",
                status_code=response.status_code,
            )
        return data

    @staticmethod
    def _error_detail(response: httpx.Response) -> Optional[str]:
        try:
            data = response.json()
        except ValueError:
            return response.text.strip() or None
        if isinstance(data, dict):
            return data.get("error") or data.get("detail")
        return None
