"""Tests for URL extraction from message entities and link previews."""

from factories import make_message, url_entity

from link_saver.bot.urls import (
    build_url_extractor,
    combine_extractors,
    distinct,
    extract_urls,
    slice_utf16,
    urls_from_entities,
    urls_from_link_preview,
)

# -- urls_from_entities --


def test_url_entity_sliced_from_text():
    """A plain ``url`` entity is cut out of the message text."""
    text = "check this https://example.com out"
    message = make_message(text, entities=[url_entity(text, "https://example.com")])
    assert urls_from_entities(message) == ["https://example.com"]


def test_text_link_uses_explicit_url():
    """A ``text_link`` entity returns its attached URL, not the visible text."""
    text = "read this article"
    message = make_message(
        text,
        entities=[{"type": "text_link", "offset": 10, "length": 7, "url": "https://a.com/post"}],
    )
    assert urls_from_entities(message) == ["https://a.com/post"]


def test_non_url_entities_ignored():
    """Mentions, bold text, and other entity types are skipped."""
    text = "@bob look https://a.com"
    message = make_message(
        text,
        entities=[
            {"type": "mention", "offset": 0, "length": 4},
            {"type": "bold", "offset": 5, "length": 4},
            url_entity(text, "https://a.com"),
        ],
    )
    assert urls_from_entities(message) == ["https://a.com"]


def test_entities_keep_message_order():
    """URLs are returned in the order their entities appear."""
    text = "https://b.com then https://a.com"
    message = make_message(
        text,
        entities=[url_entity(text, "https://b.com"), url_entity(text, "https://a.com")],
    )
    assert urls_from_entities(message) == ["https://b.com", "https://a.com"]


def test_entity_offsets_are_utf16_units():
    """Offsets count astral characters as two units (emoji before the link)."""
    text = "Привет 👋 https://example.com/путь"
    # "Привет " = 7 units, the emoji = 2 units, the space = 1 unit
    message = make_message(text, entities=[{"type": "url", "offset": 10, "length": 24}])
    assert urls_from_entities(message) == ["https://example.com/путь"]


def test_slice_utf16_differs_from_codepoint_slicing():
    """Codepoint indexing would be off by one after a single emoji."""
    text = "🔥https://x.io"
    assert slice_utf16(text, 2, 12) == "https://x.io"
    assert text[2:14] != "https://x.io"


def test_slice_utf16_ascii():
    """ASCII text slices the same as ordinary indexing."""
    assert slice_utf16("abc https://a.com", 4, 13) == "https://a.com"


# -- urls_from_link_preview --


def test_link_preview_url_included():
    """An enabled link preview contributes its URL."""
    message = make_message("hi", link_preview={"url": "https://preview.com"})
    assert urls_from_link_preview(message) == ["https://preview.com"]


def test_disabled_link_preview_excluded():
    """A disabled preview is ignored even when it carries a URL."""
    message = make_message(
        "hi", link_preview={"url": "https://preview.com", "is_disabled": True}
    )
    assert urls_from_link_preview(message) == []
    assert extract_urls(message) == []


def test_link_preview_without_url_excluded():
    """A preview with no URL or an empty URL contributes nothing."""
    assert urls_from_link_preview(make_message("hi", link_preview={})) == []
    assert urls_from_link_preview(make_message("hi", link_preview={"url": ""})) == []


def test_no_link_preview():
    """Messages without preview options yield no preview URL."""
    assert urls_from_link_preview(make_message("hi")) == []


# -- distinct / combine_extractors --


def test_distinct_keeps_first_occurrence():
    """Duplicates are dropped and first-seen order is preserved."""
    assert distinct(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]


def test_combine_extractors_deduplicates_in_order():
    """Outputs of later extractors follow earlier ones, without duplicates."""
    extractor = combine_extractors(
        lambda m: ["http://a.com", "http://b.com"],
        lambda m: ["http://a.com"],
    )
    assert extractor(make_message()) == ["http://a.com", "http://b.com"]


def test_no_entities_no_preview_yields_empty():
    """A message with neither entities nor an enabled preview has no URLs."""
    assert extract_urls(make_message("just some text")) == []


# -- precedence --


def _entity_and_preview_message():
    text = "see https://typed.com"
    return make_message(
        text,
        entities=[url_entity(text, "https://typed.com")],
        link_preview={"url": "https://preview.com"},
    )


def test_default_order_is_entities_first():
    """By default the typed URL comes before the preview URL."""
    assert extract_urls(_entity_and_preview_message()) == [
        "https://typed.com",
        "https://preview.com",
    ]


def test_link_preview_first_order():
    """With link_preview_first the preview URL takes precedence."""
    extractor = build_url_extractor(link_preview_first=True)
    assert extractor(_entity_and_preview_message()) == [
        "https://preview.com",
        "https://typed.com",
    ]


def test_preview_duplicate_of_entity_collapsed():
    """The same URL from both sources appears once."""
    text = "see https://same.com"
    message = make_message(
        text,
        entities=[url_entity(text, "https://same.com")],
        link_preview={"url": "https://same.com"},
    )
    assert extract_urls(message) == ["https://same.com"]
