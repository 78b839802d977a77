"""Language-agnostic tokenizer, shingle builder and Jaccard similarity."""

from __future__ import annotations

import re
from typing import AbstractSet, List, Sequence, Set

DEFAULT_SHINGLE_SIZE = 30

_SEPARATORS = "{}()[];,.:<>+-*/%=&|!^~?"
_TOKEN_PATTERN = re.compile(
    r"\w+"
    r"|&&|\|\|"
    rf"|[{re.escape(_SEPARATORS)}]"
    rf"|[^\w\s{re.escape(_SEPARATORS)}]+"
)


def normalize_newlines(text: str) -> str:
    """Convert Windows line endings so line numbers match across platforms."""
    return text.replace("\r\n", "\n")


def tokenize(text: str) -> List[str]:
    """Split ``text`` into word runs and individual separator characters.

    ``&&`` and ``||`` stay whole so they can be counted as branch points.
    Whitespace never produces a token.
    """
    return _TOKEN_PATTERN.findall(normalize_newlines(text))


def shingles(tokens: Sequence[str], k: int = DEFAULT_SHINGLE_SIZE) -> Set[str]:
    """Return the set of space-joined ``k``-token windows.

    Files shorter than ``k`` tokens yield an empty set and therefore never
    match anything.
    """
    if k <= 0 or len(tokens) < k:
        return set()
    return {" ".join(tokens[index : index + k]) for index in range(len(tokens) - k + 1)}


def jaccard(a: AbstractSet[str], b: AbstractSet[str]) -> float:
    """Return ``|a & b| / |a | b|``; two empty sets score 0."""
    if len(a) > len(b):
        a, b = b, a
    intersection = sum(1 for item in a if item in b)
    union = len(a) + len(b) - intersection
    if union == 0:
        return 0.0
    return intersection / union


__all__ = [
    "DEFAULT_SHINGLE_SIZE",
    "jaccard",
    "normalize_newlines",
    "shingles",
    "tokenize",
]
