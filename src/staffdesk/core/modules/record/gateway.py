"""Async client for the record persistence API.

Records themselves live behind ``<records_api_url>/api/<entity-type>``; this
service only forwards the caller's bearer token.
"""

from typing import Any

import httpx
import structlog

from staffdesk.core.modules.field.models import EntityType
from staffdesk.core.modules.record.models import AuthToken, RecordData, RecordId
from staffdesk.errors import NotFoundError, UpstreamError

logger = structlog.get_logger(__name__)

HTTP_NOT_FOUND = 404


def _camel(value: str) -> str:
    head, *rest = value.split("-")
    return head + "".join(part.capitalize() for part in rest)


def collection_key(entity_type: EntityType) -> str:
    """Response key for a list, e.g. 'jobSeekers'."""
    return _camel(entity_type.value)


def item_key(entity_type: EntityType) -> str:
    """Response key for a single record, e.g. 'jobSeeker'."""
    key = collection_key(entity_type)
    return key[:-1] if key.endswith("s") else key


class RecordGateway:
    """Thin wrapper around httpx.AsyncClient. One instance per application."""

    def __init__(self, base_url: str, timeout: float | None = None, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._client = httpx.AsyncClient(base_url=base_url.rstrip("/"), timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_records(
        self, auth_token: AuthToken, entity_type: EntityType, params: dict[str, str] | None = None
    ) -> list[RecordData]:
        body = await self._request("GET", auth_token, entity_type, params=params)
        return _unwrap_list(body, entity_type)

    async def find_by(self, auth_token: AuthToken, entity_type: EntityType, column: str, value: str) -> list[RecordData]:
        """Records whose column equals value, as filtered by the persistence API."""
        return await self.list_records(auth_token, entity_type, params={column: value})

    async def get_record(self, auth_token: AuthToken, entity_type: EntityType, record_id: RecordId) -> RecordData:
        body = await self._request("GET", auth_token, entity_type, record_id)
        return _unwrap_item(body, entity_type)

    async def create_record(self, auth_token: AuthToken, entity_type: EntityType, payload: dict[str, Any]) -> RecordData:
        body = await self._request("POST", auth_token, entity_type, json=payload)
        return _unwrap_item(body, entity_type)

    async def update_record(
        self, auth_token: AuthToken, entity_type: EntityType, record_id: RecordId, payload: dict[str, Any]
    ) -> RecordData:
        body = await self._request("PUT", auth_token, entity_type, record_id, json=payload)
        return _unwrap_item(body, entity_type)

    async def delete_record(self, auth_token: AuthToken, entity_type: EntityType, record_id: RecordId) -> None:
        await self._request("DELETE", auth_token, entity_type, record_id)

    async def _request(
        self,
        method: str,
        auth_token: AuthToken,
        entity_type: EntityType,
        record_id: RecordId | None = None,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        path = f"/api/{entity_type.value}"
        if record_id is not None:
            path = f"{path}/{record_id}"

        try:
            response = await self._client.request(
                method, path, params=params, json=json, headers={"Authorization": f"Bearer {auth_token}"}
            )
        except httpx.HTTPError as e:
            logger.warning("records_api_unreachable", method=method, path=path, error=str(e))
            raise UpstreamError(f"Records API unreachable: {e}") from e

        body = _decode(response)
        if response.is_success:
            return body

        message = body.get("message") if isinstance(body, dict) else None
        logger.warning("records_api_error", method=method, path=path, status_code=response.status_code, message=message)
        if response.status_code == HTTP_NOT_FOUND and record_id is not None:
            raise NotFoundError(message or f"{entity_type.record_type} '{record_id}' not found")
        raise UpstreamError(message or f"Records API returned {response.status_code}", status_code=response.status_code)


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _unwrap_list(body: Any, entity_type: EntityType) -> list[RecordData]:
    if isinstance(body, list):
        return body
    if isinstance(body, dict):
        for key in (collection_key(entity_type), entity_type.value, "data"):
            if isinstance(body.get(key), list):
                return body[key]
    return []


def _unwrap_item(body: Any, entity_type: EntityType) -> RecordData:
    if isinstance(body, dict):
        for key in (item_key(entity_type), "data"):
            if isinstance(body.get(key), dict):
                return body[key]
        return body
    return {}
