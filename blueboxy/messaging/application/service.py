"""MessagingService — routes message operations through the Cached Retry Executor."""

import hashlib
import json
from typing import Any

from blueboxy.messaging.domain.catalogue import CATEGORIES
from blueboxy.messaging.domain.generator import CategorySource, MessageGenerator
from blueboxy.messaging.domain.message import (
    GeneratedMessage,
    MessageCategory,
    MessageRequest,
)
from blueboxy.remote.application.executor import CachedRetryExecutor
from blueboxy.remote.domain.result import RemoteCallResult, Success
from blueboxy.retry.domain.policy import RetryPolicy

GENERATE_OPERATION = "messages.generate"
CATEGORIES_OPERATION = "messages.categories"


def message_cache_key(operation: str, params: dict[str, Any] | None = None) -> str:
    """Build ``<operation>:<digest>`` from the operation name and its parameters."""
    payload = json.dumps(params or {}, sort_keys=True, separators=(",", ":"))
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()[:16]
    return f"{operation}:{digest}"


class MessagingService:
    """Caller-side facade used by the presentation layer.

    Policies and TTLs are fixed at construction by the composition root so
    every call site is explicit about how it retries and caches. Without a
    ``categories`` source the built-in catalogue is returned directly,
    bypassing the executor.
    """

    def __init__(
        self,
        executor: CachedRetryExecutor,
        generator: MessageGenerator,
        message_policy: RetryPolicy,
        categories_policy: RetryPolicy,
        message_ttl_seconds: float = 0.0,
        categories_ttl_seconds: float = 3600.0,
        categories: CategorySource | None = None,
    ) -> None:
        self._executor = executor
        self._generator = generator
        self._categories = categories
        self._message_policy = message_policy
        self._categories_policy = categories_policy
        self._message_ttl_seconds = message_ttl_seconds
        self._categories_ttl_seconds = categories_ttl_seconds

    async def generate_message(
        self, request: MessageRequest
    ) -> RemoteCallResult[GeneratedMessage]:
        key = message_cache_key(GENERATE_OPERATION, request.model_dump(mode="json"))
        return await self._executor.execute(
            key=key,
            operation=lambda: self._generator.generate(request),
            policy=self._message_policy,
            ttl_seconds=self._message_ttl_seconds,
        )

    async def load_categories(self) -> RemoteCallResult[list[MessageCategory]]:
        return await self._fetch_categories(refresh=False)

    async def refresh_categories(self) -> RemoteCallResult[list[MessageCategory]]:
        """Fetch categories bypassing the cache; a failure keeps the cached list."""
        return await self._fetch_categories(refresh=True)

    def forget_categories(self) -> None:
        self._executor.invalidate(message_cache_key(CATEGORIES_OPERATION))

    async def _fetch_categories(
        self, refresh: bool
    ) -> RemoteCallResult[list[MessageCategory]]:
        if self._categories is None:
            return Success(value=list(CATEGORIES), attempts=0)
        return await self._executor.execute(
            key=message_cache_key(CATEGORIES_OPERATION),
            operation=self._categories.list_categories,
            policy=self._categories_policy,
            ttl_seconds=self._categories_ttl_seconds,
            refresh=refresh,
        )
