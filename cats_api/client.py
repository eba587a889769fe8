"""HTTP client for the cats REST API.

Wraps a persistent httpx.Client. Responses are parsed back into
CatResponse models; any non-2xx answer becomes a CatsClientError carrying
the server's error code and message, so callers can tell a missing cat
(404, CAT_NOT_FOUND) from an invalid one (400, CAT_INVALID).
"""

import logging
from datetime import datetime
from typing import Any

import httpx

from cats_api.schemas.cat import CatResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"


class CatsClientError(Exception):
    """Non-success response from the cats API, or a transport failure."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class CatsClient:
    """Synchronous client for /cats."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url, timeout=timeout, transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "CatsClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def list_cats(self) -> list[CatResponse]:
        data = self._request("GET", "/cats")
        return [CatResponse.model_validate(item) for item in data]

    def get_cat(self, cat_id: int) -> CatResponse:
        return CatResponse.model_validate(self._request("GET", f"/cats/{cat_id}"))

    def create_cat(
        self,
        name: str,
        breed: str,
        birth_date: datetime,
        death_date: datetime | None = None,
    ) -> CatResponse:
        payload = {
            "name": name,
            "breed": breed,
            "birthDate": _isoformat(birth_date),
        }
        if death_date is not None:
            payload["deathDate"] = _isoformat(death_date)
        return CatResponse.model_validate(
            self._request("POST", "/cats", json=payload),
        )

    def update_cat(self, cat_id: int, changes: dict[str, Any]) -> CatResponse:
        """PATCH a cat. `changes` uses wire keys (name, breed, birthDate, deathDate)."""
        payload = {
            key: _isoformat(value) if isinstance(value, datetime) else value
            for key, value in changes.items()
        }
        return CatResponse.model_validate(
            self._request("PATCH", f"/cats/{cat_id}", json=payload),
        )

    def delete_cat(self, cat_id: int) -> None:
        self._request("DELETE", f"/cats/{cat_id}")

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise CatsClientError(f"Request failed: {e}") from e

        if response.is_success:
            return response.json() if response.content else None

        code, message = _parse_error(response)
        logger.debug(
            f"{method} {path} -> {response.status_code} {code}",
            extra={"status_code": response.status_code, "error_code": code},
        )
        raise CatsClientError(message, response.status_code, code)


def _parse_error(response: httpx.Response) -> tuple[str | None, str]:
    """Pull (code, message) out of the server's error envelope."""
    fallback = f"HTTP {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return None, response.text or fallback
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return None, fallback

    message = error.get("message") or fallback
    details = error.get("details") or []
    if error.get("code") == "VALIDATION_ERROR" and details:
        message = f"{message}: " + "; ".join(
            f"{d.get('field')}: {d.get('message')}" for d in details
        )
    return error.get("code"), message
