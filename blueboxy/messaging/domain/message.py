"""Messaging value objects — requests, generated messages, and categories."""

from enum import StrEnum

from pydantic import BaseModel, Field


class MessageCategoryType(StrEnum):
    DAILY_CHECKINS = "daily_checkins"
    APPRECIATION = "appreciation"
    SUPPORT = "support"
    ROMANTIC = "romantic"
    PLAYFUL = "playful"
    ENCOURAGEMENT = "encouragement"
    GRATITUDE = "gratitude"
    FLIRTY = "flirty"
    THOUGHTFUL = "thoughtful"
    CELEBRATORY = "celebratory"
    APOLOGY = "apology"
    GOOD_MORNING = "good_morning"
    GOOD_NIGHT = "good_night"


class MessageRequest(BaseModel, frozen=True):
    """Immutable request for one generated message.

    ``prompt`` is sent as-is; ``partner_name`` and ``tone`` become a short
    system instruction when given.
    """

    category: MessageCategoryType
    prompt: str = Field(min_length=1)
    partner_name: str | None = None
    tone: str | None = None


class GeneratedMessage(BaseModel, frozen=True):
    content: str
    category: MessageCategoryType
    model: str


class MessageCategory(BaseModel, frozen=True):
    id: MessageCategoryType
    name: str
    description: str
