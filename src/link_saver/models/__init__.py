"""Data models for the link saving pipeline."""

from link_saver.models.bookmark import BookmarkPayload, PageMetadata, SavedLink, StepTiming
from link_saver.models.telegram import (
    URL_ENTITY_TYPES,
    Chat,
    LinkPreviewOptions,
    Message,
    MessageEntity,
    TelegramUpdate,
    User,
)

__all__ = [
    "BookmarkPayload",
    "Chat",
    "LinkPreviewOptions",
    "Message",
    "MessageEntity",
    "PageMetadata",
    "SavedLink",
    "StepTiming",
    "TelegramUpdate",
    "URL_ENTITY_TYPES",
    "User",
]
