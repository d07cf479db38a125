"""
Remote sink adapter.

Posts passed log events as JSON to a collector. Delivery is best effort: any
failure is reported on the diagnostic channel and dropped, never retried and
never raised to the caller.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import httpx
import orjson
from pydantic import BaseModel, ConfigDict, Field, field_serializer

from .diagnostics import get_logger
from .events import LogEvent, format_stack_trace

logger = get_logger("loggerw.remote")

DEFAULT_TIMEOUT = 10.0


class RemoteLogRecord(BaseModel):
    """Wire format of one remote log post."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    level: str
    message: str
    time: Optional[datetime] = None
    error: Optional[str] = None
    stack_trace: Optional[str] = Field(default=None, alias="stackTrace")

    @field_serializer("time")
    def _serialize_time(self, value: Optional[datetime]) -> Optional[str]:
        return value.isoformat() if value is not None else None

    @classmethod
    def from_event(cls, event: LogEvent) -> "RemoteLogRecord":
        return cls(
            level=event.level.name.upper(),
            message=str(event.message),
            time=event.time if event.time_supplied else None,
            error=str(event.error).replace("\n", " ") if event.error is not None else None,
            stack_trace=format_stack_trace(event.stack_trace),
        )

    def to_json(self) -> bytes:
        return orjson.dumps(self.model_dump(by_alias=True))


class RemoteSink:
    """Best-effort HTTP POST of log events.

    Args:
        url: Collector endpoint
        timeout: Per-request timeout in seconds
        client: Optional shared ``httpx.AsyncClient``; the sink only closes
            clients it created itself.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.url = url
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def send(self, event: LogEvent) -> bool:
        """Post ``event``; returns whether the collector accepted it."""
        try:
            body = RemoteLogRecord.from_event(event).to_json()
        except Exception:
            logger.error("remote_payload_failed", url=self.url, level=event.level.name, exc_info=True)
            return False

        logger.debug("remote_post_started", url=self.url, level=event.level.name)
        try:
            response = await self._get_client().post(
                self.url,
                content=body,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            logger.warning("remote_post_failed", url=self.url, error=str(exc), error_type=type(exc).__name__)
            return False
        except Exception:
            logger.error("remote_post_failed", url=self.url, exc_info=True)
            return False

        if not response.is_success:
            logger.warning(
                "remote_post_rejected",
                url=self.url,
                status_code=response.status_code,
                body=response.text[:200],
            )
            return False

        logger.debug("remote_post_succeeded", url=self.url, status_code=response.status_code)
        return True

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
