# src/jot/documents/frontmatter.py

"""
YAML frontmatter codec.

A document on disk looks like:

    ---
    class: thought
    tags: []
    pending_review: false
    ---
    body text

decode_document() splits the buffer and validates the header into a typed Header record.
Nothing is applied to any object here; callers get either a complete Header or an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import yaml

from ..errors import FieldTypeMismatch, MalformedDocument

SEPARATOR = "---"

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _HeaderLoader(yaml.SafeLoader):
    """SafeLoader that leaves date-like scalars (`2024-05-01`) as plain strings."""


_HeaderLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass(slots=True, frozen=True)
class Header:
    """
    Validated header fields.

    None means the key was absent. A present-but-null `tags` decodes to ().
    """

    class_name: str | None = None
    tags: tuple[str, ...] | None = None
    pending_review: bool | None = None


@dataclass(slots=True, frozen=True)
class ParsedDocument:
    header: Header
    body: str


def split_document(data: bytes) -> tuple[str, str]:
    """Return (raw header text, raw body text). The body is not trimmed here."""
    if not data:
        raise MalformedDocument("document is empty")

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedDocument(f"document is not valid UTF-8: {exc}") from exc

    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != SEPARATOR:
        raise MalformedDocument("frontmatter missing: document must start with '---'")

    for idx in range(1, len(lines)):
        if lines[idx].rstrip("\r\n") == SEPARATOR:
            header = "".join(lines[1:idx])
            body = "".join(lines[idx + 1 :])
            return header, body

    raise MalformedDocument("frontmatter is not terminated by '---'")


def _decode_tags(raw: Any) -> tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise FieldTypeMismatch("tags", "list of strings", raw)
    for item in raw:
        if not isinstance(item, str):
            raise FieldTypeMismatch("tags", "list of strings", item)
    return tuple(raw)


def decode_header(raw_header: str) -> Header:
    try:
        fields = yaml.load(raw_header, Loader=_HeaderLoader)
    except yaml.YAMLError as exc:
        raise MalformedDocument(f"frontmatter is not valid YAML: {exc}") from exc

    if fields is None:
        fields = {}
    if not isinstance(fields, dict):
        raise MalformedDocument(f"frontmatter must be a mapping, got '{type(fields).__name__}'")

    class_name = fields.get("class")
    if "class" in fields and not isinstance(class_name, str):
        raise FieldTypeMismatch("class", "string", class_name)

    tags = _decode_tags(fields["tags"]) if "tags" in fields else None

    pending_review = fields.get("pending_review")
    if "pending_review" in fields and not isinstance(pending_review, bool):
        raise FieldTypeMismatch("pending_review", "boolean", pending_review)

    return Header(class_name=class_name, tags=tags, pending_review=pending_review)


def decode_document(data: bytes) -> ParsedDocument:
    raw_header, raw_body = split_document(data)
    header = decode_header(raw_header)
    # Bodies never keep trailing newlines; marshal adds exactly one back.
    return ParsedDocument(header=header, body=raw_body.rstrip("\n"))


def encode_document(fields: dict[str, Any], body: str) -> bytes:
    """
    Render header fields (in insertion order) and body into the canonical byte format.

    A newline is appended only when the body is non-empty: an empty body already ends with
    the separator's newline.
    """
    header = yaml.safe_dump(
        fields,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
    suffix = "\n" if body else ""
    return f"{SEPARATOR}\n{header}{SEPARATOR}\n{body}{suffix}".encode("utf-8")
