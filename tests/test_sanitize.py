"""Tests for description sanitizing."""

from yearglance.parsing.sanitize import (
    decode_entities,
    extract_gmail_link,
    sanitize_description,
    strip_gmail_link,
)

GMAIL_URL = "https://mail.google.com/mail/u/0/#inbox/18c2f"


def test_empty():
    assert sanitize_description(None) == ""
    assert sanitize_description("") == ""


def test_line_breaks():
    assert sanitize_description("Line 1<br>Line 2<BR/>Line 3") == "Line 1\nLine 2\nLine 3"


def test_block_tags():
    assert sanitize_description("<p>First</p><p>Second</p>") == "First\nSecond"


def test_anchor_with_text():
    html = 'See <a href="https://example.com/booking">booking</a>'
    assert sanitize_description(html) == "See booking (https://example.com/booking)"


def test_anchor_without_distinct_text():
    html = '<a href="https://example.com">https://example.com</a>'
    assert sanitize_description(html) == "https://example.com"


def test_tags_and_entities():
    assert sanitize_description("<b>Bold</b> &amp; <i>more</i>&nbsp;!") == "Bold & more !"


def test_entities_decode_once():
    assert decode_entities("&amp;lt;") == "&lt;"


def test_blank_runs_collapse():
    assert sanitize_description("a\r\n\r\n\r\n\r\nb") == "a\n\nb"


def test_extract_gmail_link_from_href():
    html = f'Booked <a href="{GMAIL_URL}">View email</a>'
    assert extract_gmail_link(html) == GMAIL_URL


def test_extract_gmail_link_from_text():
    assert extract_gmail_link(f"Email: {GMAIL_URL} thanks") == GMAIL_URL
    assert extract_gmail_link("no link here") is None


def test_strip_gmail_link_removes_anchor():
    html = f'Flight info\n<a href="{GMAIL_URL}">View email</a>'
    assert strip_gmail_link(html) == "Flight info"


def test_strip_gmail_link_keeps_paragraphs():
    text = f"Hotel: Hilton\n\nFlight: AA 1\n{GMAIL_URL}"
    assert strip_gmail_link(text) == "Hotel: Hilton\n\nFlight: AA 1"
