"""Built-in message category catalogue."""

from blueboxy.messaging.domain.message import MessageCategory, MessageCategoryType

_ENTRIES: list[tuple[MessageCategoryType, str, str]] = [
    (
        MessageCategoryType.DAILY_CHECKINS,
        "Daily Check-ins",
        "Sweet check-ins to stay connected throughout the day",
    ),
    (
        MessageCategoryType.APPRECIATION,
        "Appreciation",
        "Express gratitude and appreciation for your partner",
    ),
    (
        MessageCategoryType.SUPPORT,
        "Support",
        "Offer comfort and support during challenging times",
    ),
    (
        MessageCategoryType.ROMANTIC,
        "Romantic",
        "Romantic messages to spark intimacy and connection",
    ),
    (MessageCategoryType.PLAYFUL, "Playful", "Fun and lighthearted messages to bring joy"),
    (
        MessageCategoryType.ENCOURAGEMENT,
        "Encouragement",
        "Motivating messages to lift your partner's spirits",
    ),
    (MessageCategoryType.GRATITUDE, "Gratitude", "Express thankfulness for the little things"),
    (
        MessageCategoryType.FLIRTY,
        "Flirty",
        "Playful and flirtatious messages to keep the spark alive",
    ),
    (
        MessageCategoryType.THOUGHTFUL,
        "Thoughtful",
        "Meaningful messages that show you're thinking of them",
    ),
    (
        MessageCategoryType.CELEBRATORY,
        "Celebratory",
        "Celebrate achievements and special moments",
    ),
    (
        MessageCategoryType.APOLOGY,
        "Apology",
        "Heartfelt apologies to mend and strengthen your bond",
    ),
    (
        MessageCategoryType.GOOD_MORNING,
        "Good Morning",
        "Start the day with loving morning messages",
    ),
    (
        MessageCategoryType.GOOD_NIGHT,
        "Good Night",
        "End the day with sweet goodnight wishes",
    ),
]

CATEGORIES: list[MessageCategory] = [
    MessageCategory(id=category_id, name=name, description=description)
    for category_id, name, description in _ENTRIES
]
