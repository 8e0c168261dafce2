"""Character-class tokenizer shared by dictionary loading and text scanning."""
from __future__ import annotations

import re

from . import Token

__all__ = ["tokenize", "tokenize_phrase"]

# Letters and digits form runs; any other visible character stands alone.
_TOKEN_PATTERN = re.compile(r"[^\W\d_]+|\d+|[^\w\s]|_")


def tokenize(text: str) -> tuple[Token, ...]:
    """Split text into tokens tagged with their character offsets."""

    if not text:
        return ()
    return tuple(
        Token(text=match.group(0), start_offset=match.start(), end_offset=match.end())
        for match in _TOKEN_PATTERN.finditer(text)
    )


def tokenize_phrase(phrase: str) -> tuple[str, ...]:
    return tuple(token.text for token in tokenize(phrase))
