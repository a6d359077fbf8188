"""Text parsers for journal entries."""
from .text_codec import (
    EntryTextCodec,
    empty_template,
    parse,
    serialize,
    serialize_for_editing,
)

__all__ = [
    "EntryTextCodec",
    "empty_template",
    "parse",
    "serialize",
    "serialize_for_editing",
]
