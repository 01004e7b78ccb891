"""Composition root — wires executor, store, observers, and the messaging service."""

from dataclasses import dataclass

from blueboxy.cache.infrastructure.clock import MonotonicClock
from blueboxy.cache.infrastructure.memory_store import InMemoryCacheStore
from blueboxy.config.domain.config import ResilienceConfig
from blueboxy.config.infrastructure.errors import ConfigValidationError
from blueboxy.messaging.application.service import MessagingService
from blueboxy.messaging.domain.generator import CategorySource, MessageGenerator
from blueboxy.messaging.infrastructure.http_categories import HttpCategorySource
from blueboxy.messaging.infrastructure.litellm import LiteLLMMessageGenerator
from blueboxy.messaging.infrastructure.observer import StructlogGeneratorObserver
from blueboxy.remote.application.executor import CachedRetryExecutor
from blueboxy.remote.infrastructure.composite_observer import CompositeExecutorObserver
from blueboxy.remote.infrastructure.observer import StructlogExecutorObserver
from blueboxy.remote.infrastructure.statistics_observer import RetryStatisticsObserver
from blueboxy.retry.domain.policy import RetryPolicy


@dataclass(frozen=True)
class Application:
    executor: CachedRetryExecutor
    messaging: MessagingService
    statistics: RetryStatisticsObserver


def _require_policy(config: ResilienceConfig, name: str) -> RetryPolicy:
    policy = config.policy(name)
    if policy is None:
        raise ConfigValidationError(f"unknown policy '{name}'")
    return policy


def build_application(
    config: ResilienceConfig,
    generator: MessageGenerator | None = None,
    categories: CategorySource | None = None,
) -> Application:
    """Construct one Application.

    ``generator`` defaults to the LiteLLM backend. ``categories`` defaults to
    the BlueBoxy API when ``messaging.api_base_url`` is set and to the
    built-in catalogue otherwise.
    """
    statistics = RetryStatisticsObserver()
    executor = CachedRetryExecutor(
        store=InMemoryCacheStore(max_entries=config.cache.max_entries),
        clock=MonotonicClock(),
        observer=CompositeExecutorObserver(
            observers=[StructlogExecutorObserver(), statistics]
        ),
    )
    if generator is None:
        generator = LiteLLMMessageGenerator(
            config=config.messaging, observer=StructlogGeneratorObserver()
        )
    if categories is None and config.messaging.api_base_url is not None:
        categories = HttpCategorySource(
            base_url=config.messaging.api_base_url,
            timeout_seconds=config.messaging.request_timeout_seconds,
        )
    messaging = MessagingService(
        executor=executor,
        generator=generator,
        message_policy=_require_policy(config, config.messaging.message_policy),
        categories_policy=_require_policy(config, config.messaging.categories_policy),
        message_ttl_seconds=config.messaging.message_ttl_seconds,
        categories_ttl_seconds=(
            config.messaging.categories_ttl_seconds
            if config.messaging.categories_ttl_seconds is not None
            else config.cache.default_ttl_seconds
        ),
        categories=categories,
    )
    return Application(executor=executor, messaging=messaging, statistics=statistics)
