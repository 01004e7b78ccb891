"""Ports for the remote collaborators behind the messaging service."""

from typing import Protocol

from blueboxy.messaging.domain.message import (
    GeneratedMessage,
    MessageCategory,
    MessageRequest,
)


class MessageGenerator(Protocol):
    """Structural interface satisfied by any message backend.

    Failures are raised, either as RemoteCallError carrying the backend's own
    classification or as arbitrary exceptions left to the executor.
    """

    async def generate(self, request: MessageRequest) -> GeneratedMessage: ...


class CategorySource(Protocol):
    """Remote source of the message category list. Failures are raised."""

    async def list_categories(self) -> list[MessageCategory]: ...
