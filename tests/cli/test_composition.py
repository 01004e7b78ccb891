"""Tests for the composition root that wires the application together."""

from unittest.mock import AsyncMock, MagicMock, patch

from blueboxy.cli.composition import build_application
from blueboxy.config.domain.config import CacheConfig, MessagingConfig, ResilienceConfig
from blueboxy.config.domain.policy import PolicyConfig
from blueboxy.messaging.domain.message import (
    GeneratedMessage,
    MessageCategoryType,
    MessageRequest,
)
from blueboxy.messaging.domain.catalogue import CATEGORIES
from blueboxy.remote.domain.error_kind import ErrorKind
from blueboxy.remote.domain.errors import RemoteCallError
from blueboxy.remote.domain.result import Failure, Success
from tests.messaging.fake_generator import FakeMessageGenerator


def _config(**messaging: object) -> ResilienceConfig:
    return ResilienceConfig(
        policies={"patient": PolicyConfig(preset="default", max_attempts=4)},
        cache=CacheConfig(max_entries=10, default_ttl_seconds=120.0),
        messaging=MessagingConfig.model_validate({"model": "gpt-4o-mini", **messaging}),
    )


def _message() -> GeneratedMessage:
    return GeneratedMessage(
        content="Hello", category=MessageCategoryType.PLAYFUL, model="gpt-4o-mini"
    )


class TestBuildApplication:
    async def test_generation_is_recorded_in_statistics(self) -> None:
        generator = FakeMessageGenerator(messages=[_message()])
        application = build_application(config=_config(), generator=generator)

        result = await application.messaging.generate_message(
            MessageRequest(category=MessageCategoryType.PLAYFUL, prompt="Be silly")
        )

        assert isinstance(result, Success)
        stats = application.statistics.stats_for("messages.generate")
        assert stats is not None
        assert stats.successes == 1

    async def test_message_ttl_enables_caching(self) -> None:
        generator = FakeMessageGenerator(messages=[_message()])
        application = build_application(
            config=_config(message_ttl_seconds=60.0), generator=generator
        )
        request = MessageRequest(category=MessageCategoryType.PLAYFUL, prompt="Be silly")

        await application.messaging.generate_message(request)
        await application.messaging.generate_message(request)

        assert len(generator.generate_calls) == 1
        assert application.executor.status().total_entries == 1

    async def test_categories_are_cached_with_cache_default_ttl(self) -> None:
        generator = FakeMessageGenerator(categories=[list(CATEGORIES)])
        application = build_application(
            config=_config(), generator=generator, categories=generator
        )

        await application.messaging.load_categories()
        second = await application.messaging.load_categories()

        assert generator.list_calls == 1
        assert isinstance(second, Success)
        assert second.from_cache is True

    @patch("blueboxy.remote.application.executor.asyncio.sleep", new_callable=AsyncMock)
    async def test_configured_policy_is_used(self, mock_sleep: AsyncMock) -> None:
        generator = FakeMessageGenerator(
            categories=[RemoteCallError(kind=ErrorKind.SERVER_ERROR, reason="502")]
        )
        application = build_application(
            config=_config(categories_policy="patient"),
            generator=generator,
            categories=generator,
        )

        result = await application.messaging.load_categories()

        assert isinstance(result, Failure)
        assert result.attempts == 4
        assert generator.list_calls == 4

    def test_builds_without_explicit_generator(self) -> None:
        application = build_application(config=_config())

        assert application.executor.status().total_entries == 0

    async def test_without_api_url_serves_built_in_catalogue(self) -> None:
        application = build_application(
            config=_config(), generator=FakeMessageGenerator()
        )

        result = await application.messaging.load_categories()

        assert result == Success(value=CATEGORIES, attempts=0)
        assert application.statistics.stats_for("messages.categories") is None

    @patch("blueboxy.cli.composition.HttpCategorySource")
    async def test_api_url_selects_http_category_source(
        self, mock_source_cls: MagicMock
    ) -> None:
        mock_source_cls.return_value.list_categories = AsyncMock(
            return_value=list(CATEGORIES)
        )
        application = build_application(
            config=_config(
                api_base_url="https://api.blueboxy.test", request_timeout_seconds=7.5
            ),
            generator=FakeMessageGenerator(),
        )

        result = await application.messaging.load_categories()

        mock_source_cls.assert_called_once_with(
            base_url="https://api.blueboxy.test", timeout_seconds=7.5
        )
        assert isinstance(result, Success)
        assert result.attempts == 1
