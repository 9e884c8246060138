"""Telegram update models (the subset of Bot API fields the pipeline reads)."""

from pydantic import BaseModel, ConfigDict, Field

# Entity types that mark a URL in the message text
URL_ENTITY_TYPES = frozenset({"url", "text_link"})


class User(BaseModel):
    """Message sender."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    username: str | None = None  # Without the leading '@'


class Chat(BaseModel):
    """Chat the message was sent in; replies go back here."""

    model_config = ConfigDict(frozen=True)

    id: int


class MessageEntity(BaseModel):
    """An annotated span of the message text.

    ``offset`` and ``length`` are measured in UTF-16 code units, as the Bot API
    defines them. ``url`` is only set for ``text_link`` entities.
    """

    model_config = ConfigDict(frozen=True)

    type: str  # e.g., "url", "text_link", "bold", "mention"
    offset: int
    length: int
    url: str | None = None


class LinkPreviewOptions(BaseModel):
    """Link preview descriptor attached to the message."""

    model_config = ConfigDict(frozen=True)

    url: str | None = None
    is_disabled: bool = False


class Message(BaseModel):
    """An inbound text message."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    message_id: int
    chat: Chat
    from_user: User | None = Field(default=None, alias="from")
    text: str = ""
    entities: list[MessageEntity] = []
    link_preview_options: LinkPreviewOptions | None = None

    @property
    def username(self) -> str | None:
        return self.from_user.username if self.from_user else None


class TelegramUpdate(BaseModel):
    """Webhook payload. Only plain new messages are handled."""

    update_id: int
    message: Message | None = None
