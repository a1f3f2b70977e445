"""
Text normalization for feed fields.

Pipeline per field: drop CDATA wrapper -> strip HTML tags (the parser decodes
HTML entities) -> decode double-escaped XML entities -> collapse whitespace ->
trim.
"""

import re

from bs4 import BeautifulSoup

CDATA_OPEN = re.compile(r'^\s*<!\[CDATA\[')
CDATA_CLOSE = re.compile(r'\]\]>\s*$')
WHITESPACE = re.compile(r'\s+')

# Order matters: &amp; first so "&amp;lt;" decodes all the way to "<"
XML_ENTITIES = [
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&#x2F;", "/"),
]


def strip_cdata(value: str) -> str:
    return CDATA_CLOSE.sub("", CDATA_OPEN.sub("", value))


def strip_html(value: str) -> str:
    """
    Replace markup with spaces, keeping only the text nodes.

    Every value goes through the parser, so HTML entities are decoded the same
    way whether or not the field carries tags. The wrapper element keeps bs4
    from reading bare URLs as file names.
    """
    soup = BeautifulSoup(f"<div>{value}</div>", "lxml")
    return soup.get_text(separator=" ")


def decode_entities(value: str) -> str:
    for entity, char in XML_ENTITIES:
        value = value.replace(entity, char)
    return value


def collapse_whitespace(value: str) -> str:
    return WHITESPACE.sub(" ", value).strip()


def clean_text(value) -> str:
    """Normalize one raw feed field to plain single-spaced text."""
    if not value:
        return ""
    return collapse_whitespace(decode_entities(strip_html(strip_cdata(str(value)))))
