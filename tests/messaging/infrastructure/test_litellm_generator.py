"""Tests for LiteLLMMessageGenerator infrastructure implementation."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest

from blueboxy.config.domain.config import MessagingConfig
from blueboxy.messaging.domain.message import MessageCategoryType, MessageRequest
from blueboxy.messaging.infrastructure.litellm import (
    LiteLLMMessageGenerator,
    classify_llm_error,
)
from blueboxy.remote.domain.error_kind import ErrorKind
from blueboxy.remote.domain.errors import RemoteCallError
from tests.messaging.fake_observer import FakeGeneratorObserver

_ACOMPLETION = "blueboxy.messaging.infrastructure.litellm.litellm.acompletion"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_generator(
    model: str = "gpt-4o-mini",
    temperature: float = 0.7,
) -> tuple[LiteLLMMessageGenerator, FakeGeneratorObserver]:
    observer = FakeGeneratorObserver()
    generator = LiteLLMMessageGenerator(
        config=MessagingConfig(model=model, temperature=temperature),
        observer=observer,
    )
    return generator, observer


def _request(prompt: str = "Write a good-morning text") -> MessageRequest:
    return MessageRequest(category=MessageCategoryType.GOOD_MORNING, prompt=prompt)


def _make_acompletion_response(content: str | None) -> MagicMock:
    """Build a mock litellm response object with the given message content."""
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


def _http_request() -> httpx.Request:
    return httpx.Request("POST", "https://api.example.test/v1/chat/completions")


def _status_error(
    error_type: type[openai.APIStatusError],
    status_code: int,
    headers: dict[str, str] | None = None,
) -> openai.APIStatusError:
    response = httpx.Response(
        status_code, headers=headers or {}, request=_http_request()
    )
    return error_type(f"status {status_code}", response=response, body=None)


# ---------------------------------------------------------------------------
# classify_llm_error
# ---------------------------------------------------------------------------


class TestClassifyLlmError:
    def test_connection_error_is_connectivity(self) -> None:
        exc = openai.APIConnectionError(request=_http_request())

        assert classify_llm_error(exc).kind is ErrorKind.CONNECTIVITY

    def test_timeout_is_connectivity(self) -> None:
        exc = openai.APITimeoutError(request=_http_request())

        assert classify_llm_error(exc).kind is ErrorKind.CONNECTIVITY

    @pytest.mark.parametrize(
        ("error_type", "status_code", "kind"),
        [
            (openai.BadRequestError, 400, ErrorKind.BAD_REQUEST),
            (openai.AuthenticationError, 401, ErrorKind.UNAUTHORIZED),
            (openai.PermissionDeniedError, 403, ErrorKind.FORBIDDEN),
            (openai.NotFoundError, 404, ErrorKind.NOT_FOUND),
            (openai.RateLimitError, 429, ErrorKind.RATE_LIMITED),
            (openai.InternalServerError, 503, ErrorKind.SERVER_ERROR),
        ],
    )
    def test_status_errors_map_by_status_code(
        self,
        error_type: type[openai.APIStatusError],
        status_code: int,
        kind: ErrorKind,
    ) -> None:
        error = classify_llm_error(_status_error(error_type, status_code))

        assert error.kind is kind
        assert error.status_code == status_code

    def test_rate_limit_carries_retry_after(self) -> None:
        exc = _status_error(openai.RateLimitError, 429, headers={"retry-after": "7"})

        assert classify_llm_error(exc).retry_after_seconds == 7.0

    def test_unparseable_retry_after_is_ignored(self) -> None:
        exc = _status_error(
            openai.RateLimitError,
            429,
            headers={"retry-after": "Wed, 21 Oct 2026 07:28:00 GMT"},
        )

        assert classify_llm_error(exc).retry_after_seconds is None

    def test_other_exceptions_fall_back_to_generic_classification(self) -> None:
        assert classify_llm_error(TimeoutError("slow")).kind is ErrorKind.CONNECTIVITY
        assert classify_llm_error(RuntimeError("odd")).kind is ErrorKind.UNKNOWN


# ---------------------------------------------------------------------------
# generate() — success path
# ---------------------------------------------------------------------------


class TestGenerateSuccess:
    async def test_returns_stripped_content(self) -> None:
        generator, _ = _make_generator()

        with patch(
            _ACOMPLETION,
            new=AsyncMock(return_value=_make_acompletion_response("  Morning, love!\n")),
        ):
            message = await generator.generate(_request())

        assert message.content == "Morning, love!"
        assert message.category is MessageCategoryType.GOOD_MORNING
        assert message.model == "gpt-4o-mini"

    async def test_sends_prompt_model_and_temperature(self) -> None:
        generator, _ = _make_generator(model="claude-haiku", temperature=0.3)
        mock_acompletion = AsyncMock(return_value=_make_acompletion_response("Hi"))

        with patch(_ACOMPLETION, new=mock_acompletion):
            await generator.generate(_request(prompt="Say hi"))

        mock_acompletion.assert_awaited_once_with(
            model="claude-haiku",
            temperature=0.3,
            messages=[{"role": "user", "content": "Say hi"}],
        )

    async def test_emits_started_and_completed_events(self) -> None:
        generator, observer = _make_generator()

        with patch(
            _ACOMPLETION,
            new=AsyncMock(return_value=_make_acompletion_response("Hi")),
        ):
            await generator.generate(_request())

        assert observer.started[0].category == "good_morning"
        assert observer.started[0].model == "gpt-4o-mini"
        assert observer.completed[0].duration_ms >= 0
        assert observer.failed == []


# ---------------------------------------------------------------------------
# generate() — failure path
# ---------------------------------------------------------------------------


class TestGenerateFailure:
    async def test_raises_classified_error(self) -> None:
        generator, observer = _make_generator()
        exc = _status_error(openai.RateLimitError, 429, headers={"retry-after": "2"})

        with (
            patch(_ACOMPLETION, new=AsyncMock(side_effect=exc)),
            pytest.raises(RemoteCallError) as exc_info,
        ):
            await generator.generate(_request())

        assert exc_info.value.kind is ErrorKind.RATE_LIMITED
        assert exc_info.value.retry_after_seconds == 2.0
        assert exc_info.value.__cause__ is exc
        assert len(observer.failed) == 1
        assert observer.completed == []

    @pytest.mark.parametrize("content", ["", "   ", None])
    async def test_empty_content_is_decoding_error(self, content: str | None) -> None:
        generator, observer = _make_generator()

        with (
            patch(
                _ACOMPLETION,
                new=AsyncMock(return_value=_make_acompletion_response(content)),
            ),
            pytest.raises(RemoteCallError) as exc_info,
        ):
            await generator.generate(_request())

        assert exc_info.value.kind is ErrorKind.DECODING
        assert observer.failed[0].reason == "completion returned no content"

    async def test_missing_choices_is_decoding_error(self) -> None:
        generator, _ = _make_generator()
        response = MagicMock()
        response.choices = []

        with (
            patch(_ACOMPLETION, new=AsyncMock(return_value=response)),
            pytest.raises(RemoteCallError) as exc_info,
        ):
            await generator.generate(_request())

        assert exc_info.value.kind is ErrorKind.DECODING


# ---------------------------------------------------------------------------
# generate() — partner name and tone
# ---------------------------------------------------------------------------


class TestPartnerAndTone:
    """Partner name and tone reach the model as a system instruction."""

    async def test_both_become_a_system_message(self) -> None:
        generator, _ = _make_generator()
        mock_acompletion = AsyncMock(return_value=_make_acompletion_response("Hi"))
        request = MessageRequest(
            category=MessageCategoryType.ROMANTIC,
            prompt="Say hi",
            partner_name="Sam",
            tone="warm",
        )

        with patch(_ACOMPLETION, new=mock_acompletion):
            await generator.generate(request)

        messages = mock_acompletion.await_args.kwargs["messages"]
        assert messages == [
            {
                "role": "system",
                "content": "The message is for Sam. Write it in a warm tone.",
            },
            {"role": "user", "content": "Say hi"},
        ]

    async def test_tone_alone_is_sent(self) -> None:
        generator, _ = _make_generator()
        mock_acompletion = AsyncMock(return_value=_make_acompletion_response("Hi"))
        request = MessageRequest(
            category=MessageCategoryType.PLAYFUL, prompt="Say hi", tone="silly"
        )

        with patch(_ACOMPLETION, new=mock_acompletion):
            await generator.generate(request)

        messages = mock_acompletion.await_args.kwargs["messages"]
        assert messages[0] == {"role": "system", "content": "Write it in a silly tone."}
        assert len(messages) == 2

    async def test_no_system_message_without_details(self) -> None:
        generator, _ = _make_generator()
        mock_acompletion = AsyncMock(return_value=_make_acompletion_response("Hi"))

        with patch(_ACOMPLETION, new=mock_acompletion):
            await generator.generate(_request(prompt="Say hi"))

        messages = mock_acompletion.await_args.kwargs["messages"]
        assert messages == [{"role": "user", "content": "Say hi"}]
