"""Turn HTML-ish Google Calendar descriptions into plain text."""

import re
from typing import Optional

BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
BLOCK_END_RE = re.compile(r"</(?:p|div|li)\s*>", re.IGNORECASE)
ANCHOR_RE = re.compile(
    r"<a\b[^>]*?href\s*=\s*[\"']?([^\"'\s>]+)[\"']?[^>]*>(.*?)</a\s*>",
    re.IGNORECASE | re.DOTALL,
)
TAG_RE = re.compile(r"<[^>]+>")
ENTITY_RE = re.compile(r"&(?:amp|lt|gt|quot|apos|nbsp|#39);")
BLANK_RUN_RE = re.compile(r"\n{3,}")

HTML_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&apos;": "'",
    "&#39;": "'",
    "&nbsp;": " ",
}

GMAIL_HREF_RE = re.compile(r"href=[\"']?(https?://mail\.google\.com[^\"'\s<>]*)", re.IGNORECASE)
GMAIL_URL_RE = re.compile(r"(https?://mail\.google\.com[^\s<>\"']*)", re.IGNORECASE)
GMAIL_ANCHOR_RE = re.compile(
    r"<a[^>]*href=[\"']?https?://mail\.google\.com[^\"']*[\"']?[^>]*>.*?</a>",
    re.IGNORECASE | re.DOTALL,
)


def _replace_anchor(match: re.Match) -> str:
    href = match.group(1)
    text = TAG_RE.sub("", match.group(2)).strip()
    if not text or text == href:
        return href
    return f"{text} ({href})"


def decode_entities(text: str) -> str:
    """Decode the fixed entity table in a single pass (no double decoding)."""
    return ENTITY_RE.sub(lambda m: HTML_ENTITIES[m.group(0)], text)


def sanitize_description(description: Optional[str]) -> str:
    """
    Reduce a description to plain text.

    Line breaks survive as newlines and links survive as ``text (href)``;
    every other piece of markup is dropped.

    Args:
        description: Raw event description, possibly an HTML fragment

    Returns:
        Plain text with at most one blank line between paragraphs
    """
    if not description:
        return ""

    text = description.replace("\r\n", "\n").replace("\r", "\n")
    text = BR_RE.sub("\n", text)
    text = BLOCK_END_RE.sub("\n", text)
    text = ANCHOR_RE.sub(_replace_anchor, text)
    text = TAG_RE.sub("", text)
    text = decode_entities(text)

    lines = [line.rstrip() for line in text.split("\n")]
    text = BLANK_RUN_RE.sub("\n\n", "\n".join(lines))
    return text.strip()


def extract_gmail_link(description: Optional[str]) -> Optional[str]:
    """Find a Gmail message link in an href attribute or in plain text."""
    if not description:
        return None

    match = GMAIL_HREF_RE.search(description) or GMAIL_URL_RE.search(description)
    return match.group(1) if match else None


def strip_gmail_link(description: Optional[str]) -> str:
    """Remove Gmail links, including any ``<a>`` tag wrapping them."""
    if not description:
        return ""

    cleaned = GMAIL_ANCHOR_RE.sub("", description)
    cleaned = GMAIL_URL_RE.sub("", cleaned)
    lines = [line.rstrip() for line in cleaned.split("\n")]
    return BLANK_RUN_RE.sub("\n\n", "\n".join(lines)).strip()
