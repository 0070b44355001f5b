# Copyright © 2025 Ed Nutting
# SPDX-License-Identifier: MIT
# See LICENSE file for details

"""
Tokenization of phrases and speech hypotheses.

Two parallel views of the same text are produced:
1. Matching tokens - lowercased, apostrophes dropped, punctuation removed
2. Display tokens - same words with original casing, phrase capitalized

Both views split on the same boundaries so an index into one maps
directly onto the other (a spoken index highlights a display word).
"""

import re

# Apostrophe variants that recognizers and keyboards produce
APOSTROPHES_RE: re.Pattern[str] = re.compile(r"[’‘`´']")

_NON_WORD_RE: re.Pattern[str] = re.compile(r"[^A-Za-z0-9\s]")
_WHITESPACE_RE: re.Pattern[str] = re.compile(r"\s+")

DEFAULT_WINDOW_SLACK: int = 2


def _clean(text: str | None) -> list[str]:
    """Drop apostrophes, blank out other punctuation and split on whitespace."""
    cleaned: str = APOSTROPHES_RE.sub("", text or "")
    cleaned = _NON_WORD_RE.sub(" ", cleaned)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()
    if not cleaned:
        return []
    return cleaned.split(" ")


def normalize(text: str | None) -> list[str]:
    """Normalize text into matching tokens.

    Examples:
        "Don't stop!" -> ["dont", "stop"]
        "  ...  " -> []
    """
    # Lowercase after stripping: "\u0130" lowers to ASCII but is not a word character
    return [word.lower() for word in _clean(text)]


def capitalize_first(word: str) -> str:
    """Upper-case the first character of a word, leaving the rest alone."""
    return word[:1].upper() + word[1:] if word else word


def to_display(text: str | None) -> list[str]:
    """Tokenize text for rendering (original casing, phrase capitalized)."""
    parts: list[str] = _clean(text)
    if parts:
        parts[0] = capitalize_first(parts[0])
    return parts


def tail_window(
    tokens: list[str],
    target_length: int,
    slack: int = DEFAULT_WINDOW_SLACK
) -> list[str]:
    """Keep only the trailing part of a cumulative transcript.

    Many recognizers resend the whole session transcript with every
    partial result. Only the last ``target_length + slack`` tokens can
    plausibly belong to the phrase currently being spoken.

    Args:
        tokens: Normalized hypothesis tokens
        target_length: Number of tokens in the current target phrase
        slack: Extra tokens kept for fillers and false starts

    Returns:
        The trailing window, or ``tokens`` unchanged when no window applies
    """
    if target_length <= 0 or not tokens:
        return tokens
    window_size: int = target_length + slack
    if len(tokens) <= window_size:
        return tokens
    return tokens[len(tokens) - window_size:]
