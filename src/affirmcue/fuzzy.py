# Copyright © 2025 Ed Nutting
# SPDX-License-Identifier: MIT
# See LICENSE file for details

"""
Fuzzy equality between a heard token and a target token.

A heard word counts as the target word when it is identical, when both
reduce to the same stem, or (for longer words only) when they differ by
a single recognizer slip. Short function words ("a", "at", "an") must
match exactly or by stem to avoid false positives.
"""

from abc import ABC, abstractmethod

from rapidfuzz.distance import Levenshtein

DEFAULT_MAX_FUZZY_DISTANCE: int = 1
DEFAULT_MIN_FUZZY_LENGTH: int = 4
DEFAULT_MIN_STEM_LENGTH: int = 3


class Stemmer(ABC):
    """Reduces a normalized token to a comparable stem."""

    @abstractmethod
    def stem(self, word: str) -> str:
        """Return the stem of a normalized token."""


class EnglishSuffixStemmer(Stemmer):
    """
    Strips one common English inflection ("ing", then "ed", then "s").

    A suffix is only removed when the remaining stem keeps at least
    ``min_stem_length`` characters, so "sing" and "bed" stay whole.
    """

    SUFFIXES: tuple[str, ...] = ("ing", "ed", "s")

    def __init__(self, min_stem_length: int = DEFAULT_MIN_STEM_LENGTH) -> None:
        self.min_stem_length = min_stem_length

    def stem(self, word: str) -> str:
        for suffix in self.SUFFIXES:
            if word.endswith(suffix) and len(word) - len(suffix) >= self.min_stem_length:
                return word[:-len(suffix)]
        return word


def bounded_edit_distance(source: str, target: str, max_distance: int) -> int:
    """
    Levenshtein distance that gives up once ``max_distance`` is exceeded.

    Returns:
        The edit distance, or ``max_distance + 1`` if it is larger than the cap
    """
    if abs(len(source) - len(target)) > max_distance:
        return max_distance + 1
    return Levenshtein.distance(source, target, score_cutoff=max_distance)


class TokenComparer:
    """Decides whether a heard token counts as a target token."""

    stemmer: Stemmer
    max_fuzzy_distance: int
    min_fuzzy_length: int

    def __init__(
        self,
        stemmer: Stemmer | None = None,
        max_fuzzy_distance: int = DEFAULT_MAX_FUZZY_DISTANCE,
        min_fuzzy_length: int = DEFAULT_MIN_FUZZY_LENGTH
    ) -> None:
        """
        Args:
            stemmer: Inflection stripping strategy (English suffixes by default)
            max_fuzzy_distance: Largest edit distance still counted as a match
            min_fuzzy_length: Both tokens must be at least this long for
                edit-distance matching to apply
        """
        if max_fuzzy_distance < 0:
            raise ValueError(
                f"max_fuzzy_distance must be >= 0, got {max_fuzzy_distance}")
        if min_fuzzy_length < 0:
            raise ValueError(
                f"min_fuzzy_length must be >= 0, got {min_fuzzy_length}")
        self.stemmer = stemmer if stemmer is not None else EnglishSuffixStemmer()
        self.max_fuzzy_distance = max_fuzzy_distance
        self.min_fuzzy_length = min_fuzzy_length

    def tokens_equal(self, heard: str, target: str) -> bool:
        """Check if a heard token matches a target token."""
        if heard == target:
            return True

        if self.stemmer.stem(heard) == self.stemmer.stem(target):
            return True

        if len(heard) >= self.min_fuzzy_length and len(target) >= self.min_fuzzy_length:
            distance: int = bounded_edit_distance(
                heard, target, self.max_fuzzy_distance)
            return distance <= self.max_fuzzy_distance

        return False

    def index_of(self, heard_tokens: list[str], target: str, start: int) -> int:
        """Find the first heard token at or after ``start`` matching target.

        Returns:
            The index of the match, or -1 if there is none
        """
        for i in range(start, len(heard_tokens)):
            if self.tokens_equal(heard_tokens[i], target):
                return i
        return -1


_DEFAULT_COMPARER: TokenComparer = TokenComparer()


def tokens_equal(heard: str, target: str) -> bool:
    """Compare two tokens with the default English comparer."""
    return _DEFAULT_COMPARER.tokens_equal(heard, target)
