# Copyright © 2025 Ed Nutting
# SPDX-License-Identifier: MIT
# See LICENSE file for details

"""
Tests for fuzzy token equality.
"""

import pytest

from affirmcue.fuzzy import (
    EnglishSuffixStemmer,
    Stemmer,
    TokenComparer,
    bounded_edit_distance,
    tokens_equal,
)


class TestEnglishSuffixStemmer:
    """Tests for inflection stripping."""

    @pytest.mark.parametrize("word,stem", [
        ("walking", "walk"),
        ("walked", "walk"),
        ("walks", "walk"),
        ("feeling", "feel"),
        ("cats", "cat"),
        ("sing", "sing"),  # stem "s" too short
        ("bed", "bed"),
        ("is", "is"),
        ("calm", "calm"),
    ])
    def test_stem(self, word: str, stem: str) -> None:
        """One suffix is stripped only when a long enough stem remains."""
        assert EnglishSuffixStemmer().stem(word) == stem

    def test_only_one_suffix_stripped(self) -> None:
        """Stripping stops after the first applicable suffix."""
        assert EnglishSuffixStemmer().stem("things") == "thing"

    def test_min_stem_length(self) -> None:
        """Shorter stems are allowed when configured."""
        assert EnglishSuffixStemmer(min_stem_length=1).stem("sing") == "s"


class TestBoundedEditDistance:
    """Tests for the capped Levenshtein distance."""

    def test_within_cap(self) -> None:
        """Distances up to the cap are reported exactly."""
        assert bounded_edit_distance("strong", "strong", 1) == 0
        assert bounded_edit_distance("strong", "strung", 1) == 1

    def test_exceeding_cap_returns_cap_plus_one(self) -> None:
        """Anything past the cap is reported as cap + 1."""
        assert bounded_edit_distance("abcd", "wxyz", 1) == 2
        assert bounded_edit_distance("worthy", "wordy", 1) == 2

    def test_length_difference_short_circuits(self) -> None:
        """Very different lengths exceed the cap without a full comparison."""
        assert bounded_edit_distance("grateful", "great", 1) == 2


class TestTokensEqual:
    """Tests for heard/target token equality."""

    def test_exact_match(self) -> None:
        assert tokens_equal("enough", "enough")

    def test_inflection_match(self) -> None:
        """Simple English inflections count as the same word."""
        assert tokens_equal("walked", "walking")
        assert tokens_equal("loves", "love")
        assert tokens_equal("feel", "feeling")

    def test_single_substitution_on_long_word(self) -> None:
        assert tokens_equal("strung", "strong")

    def test_single_insertion_on_long_word(self) -> None:
        assert tokens_equal("gratefull", "grateful")

    def test_single_deletion_on_long_word(self) -> None:
        assert tokens_equal("gratful", "grateful")

    def test_two_edits_do_not_match(self) -> None:
        """A 2-character edit distance is too far."""
        assert not tokens_equal("wordy", "worthy")
        assert not tokens_equal("greatful", "grateful")

    def test_short_words_need_exact_match(self) -> None:
        """Edit-distance matching is not applied to short function words."""
        assert not tokens_equal("am", "an")
        assert not tokens_equal("at", "a")
        assert not tokens_equal("the", "she")
        assert not tokens_equal("is", "i")

    def test_one_long_one_short(self) -> None:
        """Both tokens must be long enough for edit-distance matching."""
        assert not tokens_equal("cam", "calm")


class TestTokenComparer:
    """Tests for comparer configuration."""

    def test_wider_distance(self) -> None:
        """A larger cap tolerates more edits."""
        comparer = TokenComparer(max_fuzzy_distance=2)
        assert comparer.tokens_equal("greatful", "grateful")

    def test_zero_distance_disables_edit_matching(self) -> None:
        comparer = TokenComparer(max_fuzzy_distance=0)
        assert not comparer.tokens_equal("strung", "strong")
        assert comparer.tokens_equal("walks", "walk")

    def test_custom_stemmer(self) -> None:
        """The inflection strategy can be replaced."""

        class PrefixStemmer(Stemmer):
            def stem(self, word: str) -> str:
                return word[:3]

        assert not tokens_equal("bravery", "brave")
        comparer = TokenComparer(stemmer=PrefixStemmer())
        assert comparer.tokens_equal("bravery", "brave")

    def test_negative_settings_rejected(self) -> None:
        with pytest.raises(ValueError):
            TokenComparer(max_fuzzy_distance=-1)
        with pytest.raises(ValueError):
            TokenComparer(min_fuzzy_length=-1)

    def test_index_of_scans_from_start(self) -> None:
        """Matches before the start index are ignored."""
        comparer = TokenComparer()
        heard = ["i", "am", "um", "i", "am"]
        assert comparer.index_of(heard, "am", 0) == 1
        assert comparer.index_of(heard, "am", 2) == 4
        assert comparer.index_of(heard, "enough", 0) == -1
        assert comparer.index_of(heard, "am", 5) == -1
