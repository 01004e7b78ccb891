"""LiteLLMMessageGenerator — MessageGenerator backed by LiteLLM chat completions."""

import time

import litellm
import openai

from blueboxy.config.domain.config import MessagingConfig
from blueboxy.messaging.domain.message import (
    GeneratedMessage,
    MessageRequest,
)
from blueboxy.messaging.domain.observer import GeneratorObserver
from blueboxy.remote.domain.classifier import (
    classify,
    classify_status,
    retry_after_from_headers,
)
from blueboxy.remote.domain.error_kind import ErrorKind
from blueboxy.remote.domain.errors import RemoteCallError


def _retry_after_seconds(exc: openai.APIStatusError) -> float | None:
    response = getattr(exc, "response", None)
    return retry_after_from_headers(getattr(response, "headers", None))


def _messages(request: MessageRequest) -> list[dict[str, str]]:
    details: list[str] = []
    if request.partner_name:
        details.append(f"The message is for {request.partner_name}.")
    if request.tone:
        details.append(f"Write it in a {request.tone} tone.")
    messages: list[dict[str, str]] = []
    if details:
        messages.append({"role": "system", "content": " ".join(details)})
    messages.append({"role": "user", "content": request.prompt})
    return messages


def classify_llm_error(exc: Exception) -> RemoteCallError:
    """Map an openai/litellm exception onto a RemoteCallError.

    LiteLLM's exception types subclass the openai ones, so both providers'
    failures land here.
    """
    if isinstance(exc, openai.APIConnectionError):
        return RemoteCallError(kind=ErrorKind.CONNECTIVITY, reason=str(exc))
    if isinstance(exc, openai.APIStatusError):
        return classify_status(
            status_code=exc.status_code,
            reason=str(exc),
            retry_after_seconds=_retry_after_seconds(exc),
        )
    return classify(exc)


class LiteLLMMessageGenerator:
    """MessageGenerator that sends the caller's prompt to an LLM via LiteLLM.

    Satisfies the MessageGenerator protocol structurally.
    """

    def __init__(self, config: MessagingConfig, observer: GeneratorObserver) -> None:
        litellm.suppress_debug_info = True
        self._config = config
        self._observer = observer

    async def generate(self, request: MessageRequest) -> GeneratedMessage:
        """Generate one message for request.

        Raises:
            RemoteCallError: classified failure of the completion call, or
                DECODING when the response carries no content.
        """
        category = str(request.category)
        self._observer.generation_started(category=category, model=self._config.model)

        start = time.monotonic()
        try:
            response = await litellm.acompletion(
                model=self._config.model,
                temperature=self._config.temperature,
                messages=_messages(request),
            )
        except Exception as exc:
            error = classify_llm_error(exc)
            self._observer.generation_failed(
                category=category, model=self._config.model, reason=error.reason
            )
            raise error from exc

        duration_ms = int((time.monotonic() - start) * 1000)

        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not isinstance(content, str) or not content.strip():
            error = RemoteCallError(
                kind=ErrorKind.DECODING, reason="completion returned no content"
            )
            self._observer.generation_failed(
                category=category, model=self._config.model, reason=error.reason
            )
            raise error

        self._observer.generation_completed(
            category=category, model=self._config.model, duration_ms=duration_ms
        )
        return GeneratedMessage(
            content=content.strip(),
            category=request.category,
            model=self._config.model,
        )
