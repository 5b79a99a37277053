"""HTTP resource client — implements the ResourceClient interface.

Talks to a JSON CRUD collection (``GET /``, ``POST /``, ``PUT /{id}``,
``DELETE /{id}``) using httpx. Transport failures and non-2xx statuses become
NetworkError; bodies that are not user-shaped become MalformedResponseError.
"""

import logging
from dataclasses import replace
from enum import Enum
from typing import Any

import httpx
from pydantic import ValidationError

from user_sync.application.interfaces.resource_client import ResourceClient
from user_sync.application.schemas.user_record import (
    describe_validation_error,
    parse_user,
    parse_user_list,
)
from user_sync.domain.entities import DraftRecord, RecordId, UserRecord
from user_sync.domain.exceptions import (
    ErrorContext,
    MalformedResponseError,
    NetworkError,
    ReadOnlyResourceError,
)

logger = logging.getLogger(__name__)


class ResourceSource(str, Enum):
    """Which of the two remote collections a client talks to."""

    PRIMARY = "primary"
    READ_ONLY = "read_only"

    @property
    def list_context(self) -> ErrorContext:
        if self is ResourceSource.PRIMARY:
            return ErrorContext.LIST_PRIMARY
        return ErrorContext.LIST_READ_ONLY


class HttpResourceClient(ResourceClient):
    """Infrastructure adapter — connects to one remote user collection.

    Uses an injected httpx.AsyncClient when given (shared connection pool),
    otherwise opens a short-lived client per request.
    """

    def __init__(
        self,
        base_url: str,
        source: ResourceSource = ResourceSource.PRIMARY,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._source = source
        self._http_client = http_client
        self._timeout = timeout

    @property
    def source(self) -> ResourceSource:
        return self._source

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def read_only(self) -> bool:
        return self._source is ResourceSource.READ_ONLY

    def _record_url(self, record_id: RecordId) -> str:
        return f"{self._base_url}/{record_id}"

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def _send(
        self,
        context: ErrorContext,
        method: str,
        url: str,
        payload: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Perform exactly one request and translate failures for ``context``."""
        client = await self._get_client()
        should_close = self._http_client is None

        try:
            logger.debug("%s %s (%s)", method, url, context.value)
            try:
                response = await client.request(method, url, json=payload)
            except httpx.HTTPError as exc:
                raise NetworkError(
                    context=context,
                    message=f"{type(exc).__name__}: {exc}",
                ) from exc

            if not response.is_success:
                self._raise_network_error(context, response)
            return response

        finally:
            if should_close:
                await client.aclose()

    @staticmethod
    def _raise_network_error(context: ErrorContext, response: httpx.Response) -> None:
        """Raise NetworkError from a non-2xx httpx Response."""
        message = response.reason_phrase or "request failed"
        if response.text:
            message = f"{message} — {response.text[:200]}"
        raise NetworkError(
            context=context,
            message=message,
            status_code=response.status_code,
        )

    @staticmethod
    def _decode(context: ErrorContext, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(context, f"body is not JSON: {exc}") from exc

    def _guard_mutation(self, operation: str) -> None:
        if self.read_only:
            raise ReadOnlyResourceError(operation)

    async def list_records(self) -> list[UserRecord]:
        context = self._source.list_context
        response = await self._send(context, "GET", self._base_url)
        data = self._decode(context, response)
        try:
            records = parse_user_list(data)
        except ValidationError as exc:
            raise MalformedResponseError(context, describe_validation_error(exc)) from exc

        seen: set[RecordId] = set()
        for record in records:
            if record.id in seen:
                raise MalformedResponseError(context, f"duplicate id '{record.id}'")
            seen.add(record.id)

        logger.info("Loaded %d %s user(s)", len(records), self._source.value)
        return records

    async def create(self, payload: DraftRecord) -> UserRecord:
        self._guard_mutation("create")
        context = ErrorContext.CREATE
        response = await self._send(context, "POST", self._base_url, payload.to_payload())
        record = self._parse_single(context, response)
        logger.info("Created user id=%s", record.id)
        return record

    async def update(self, record_id: RecordId, payload: DraftRecord) -> UserRecord:
        self._guard_mutation("update")
        context = ErrorContext.UPDATE
        response = await self._send(
            context, "PUT", self._record_url(record_id), payload.to_payload()
        )
        record = self._parse_single(context, response)
        if str(record.id) != str(record_id):
            raise MalformedResponseError(
                context, f"expected id '{record_id}', server returned '{record.id}'"
            )
        logger.info("Updated user id=%s", record_id)
        # Keep the local id type; servers may echo "1" for 1.
        return replace(record, id=record_id)

    async def delete(self, record_id: RecordId) -> None:
        self._guard_mutation("delete")
        await self._send(ErrorContext.DELETE, "DELETE", self._record_url(record_id))
        logger.info("Deleted user id=%s", record_id)

    def _parse_single(self, context: ErrorContext, response: httpx.Response) -> UserRecord:
        data = self._decode(context, response)
        try:
            return parse_user(data)
        except ValidationError as exc:
            raise MalformedResponseError(context, describe_validation_error(exc)) from exc
