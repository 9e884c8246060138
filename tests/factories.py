"""Builders for Telegram messages used across test modules."""

from link_saver.models.telegram import Message

ALLOWED_USER = "alice"
CHAT_ID = 424242


def make_message(
    text: str = "",
    entities: list[dict] | None = None,
    link_preview: dict | None = None,
    username: str | None = ALLOWED_USER,
) -> Message:
    """Build a Message the way it arrives in a webhook payload."""
    payload: dict = {
        "message_id": 1,
        "date": 1700000000,
        "chat": {"id": CHAT_ID, "type": "private"},
        "from": {"id": 7, "is_bot": False, "first_name": "A", "username": username},
        "text": text,
        "entities": entities or [],
    }
    if link_preview is not None:
        payload["link_preview_options"] = link_preview
    return Message.model_validate(payload)


def url_entity(text: str, url: str) -> dict:
    """Return a ``url`` entity spanning ``url`` inside ASCII-only ``text``."""
    return {"type": "url", "offset": text.index(url), "length": len(url)}
