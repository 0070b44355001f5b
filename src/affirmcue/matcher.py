# Copyright © 2025 Ed Nutting
# SPDX-License-Identifier: MIT
# See LICENSE file for details

"""
Speech progress matching for a single spoken phrase.

Tracks how much of a target phrase has been spoken aloud from a stream
of revisable speech recognition hypotheses. Heard tokens are scanned
forward from a cursor, so filler words and false starts between target
words are tolerated, and progress never moves backwards.
"""

import logging
from dataclasses import dataclass, field

from . import debug_log
from .config import Config, get_matching_settings
from .differ import HypothesisDiffer
from .fuzzy import (
    DEFAULT_MAX_FUZZY_DISTANCE,
    DEFAULT_MIN_FUZZY_LENGTH,
    EnglishSuffixStemmer,
    Stemmer,
    TokenComparer,
)
from .tokenizer import DEFAULT_WINDOW_SLACK, normalize, tail_window, to_display

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchProgress:
    """Snapshot of how far through the phrase the speaker is."""
    active_token: int  # Number of target tokens confirmed so far
    total_tokens: int
    is_complete: bool
    display_tokens: list[str] = field(default_factory=list)

    @property
    def fraction(self) -> float:
        """Progress through the phrase (0.0 to 1.0)."""
        if self.total_tokens == 0:
            return 0.0
        return min(self.active_token, self.total_tokens) / self.total_tokens

    @property
    def spoken_words(self) -> list[str]:
        """Display words already confirmed as spoken."""
        return self.display_tokens[:self.active_token]


class SpeechMatcher:
    """
    Matches spoken words against a target phrase.

    Usage:
        matcher = SpeechMatcher()
        matcher.reset_for_text("I am enough")

        # On every recognizer partial or final result
        if matcher.update_with_speech(hypothesis):
            highlight(matcher.display_tokens[:matcher.active_token])
        if matcher.is_complete:
            celebrate()

    Not thread-safe: drive one instance from a single event stream.
    """

    window_slack: int

    _tokens: list[str]
    _display_tokens: list[str]
    _active_token: int
    _heard_tokens: list[str]
    _heard_index: int
    _differ: HypothesisDiffer
    _comparer: TokenComparer

    def __init__(
        self,
        max_fuzzy_distance: int = DEFAULT_MAX_FUZZY_DISTANCE,
        min_fuzzy_length: int = DEFAULT_MIN_FUZZY_LENGTH,
        window_slack: int = DEFAULT_WINDOW_SLACK,
        stemmer: Stemmer | None = None
    ) -> None:
        """
        Initialize the matcher with no target phrase.

        Args:
            max_fuzzy_distance: Largest edit distance counted as a match
            min_fuzzy_length: Minimum token length for edit-distance matching
            window_slack: Extra tokens kept beyond the phrase length when
                windowing a cumulative transcript
            stemmer: Inflection stripping strategy (English suffixes by default)
        """
        if window_slack < 0:
            raise ValueError(f"window_slack must be >= 0, got {window_slack}")

        self.window_slack = window_slack
        self._comparer = TokenComparer(
            stemmer=stemmer,
            max_fuzzy_distance=max_fuzzy_distance,
            min_fuzzy_length=min_fuzzy_length
        )
        self._differ = HypothesisDiffer()

        self._tokens = []
        self._display_tokens = []
        self._active_token = 0
        self._heard_tokens = []
        self._heard_index = 0

    @classmethod
    def from_config(cls, config: Config) -> 'SpeechMatcher':
        """Create a matcher from the ``matching`` section of a config."""
        settings = get_matching_settings(config)
        return cls(
            max_fuzzy_distance=settings["max_fuzzy_distance"],
            min_fuzzy_length=settings["min_fuzzy_length"],
            window_slack=settings["window_slack"],
            stemmer=EnglishSuffixStemmer(settings["min_stem_length"])
        )

    @property
    def tokens(self) -> list[str]:
        """Normalized target tokens."""
        return list(self._tokens)

    @property
    def display_tokens(self) -> list[str]:
        """Target words for rendering, index-aligned with tokens."""
        return list(self._display_tokens)

    @property
    def active_token(self) -> int:
        """Number of target tokens confirmed as spoken, in order."""
        return self._active_token

    @property
    def heard_tokens(self) -> list[str]:
        """Everything treated as spoken since the last reset."""
        return list(self._heard_tokens)

    @property
    def heard_index(self) -> int:
        """How far the heard tokens have been consumed by matches."""
        return self._heard_index

    @property
    def is_complete(self) -> bool:
        """Whether every target token has been spoken."""
        return bool(self._tokens) and self._active_token >= len(self._tokens)

    @property
    def current_progress(self) -> MatchProgress:
        """Get the current progress without updating."""
        return MatchProgress(
            active_token=self._active_token,
            total_tokens=len(self._tokens),
            is_complete=self.is_complete,
            display_tokens=list(self._display_tokens)
        )

    def reset_for_text(self, text: str | None) -> None:
        """Start matching a new phrase, discarding all progress."""
        self._tokens = normalize(text)
        self._display_tokens = to_display(text)
        self._active_token = 0

        self._heard_tokens = []
        self._heard_index = 0
        self._differ.reset()

        logger.debug("Reset for phrase %s", self._tokens)
        debug_log.log_phrase(self._tokens)

    def tokenize_for_matching(self, text: str | None) -> list[str]:
        """Normalize a whole independent utterance (no windowing)."""
        return normalize(text)

    def tokenize_for_current_window(self, text: str | None) -> list[str]:
        """Normalize a cumulative transcript, keeping only its tail.

        The window is the phrase length plus ``window_slack`` tokens.
        """
        return tail_window(normalize(text), len(self._tokens), self.window_slack)

    def feed(self, spoken_tokens: list[str]) -> bool:
        """
        Advance through the phrase using the latest hypothesis tokens.

        The tokens are diffed against the previous call so that a growing
        partial result only contributes its new words. Every target token
        is then looked up in the heard tokens from the cursor onwards.

        Args:
            spoken_tokens: Output of one of the tokenize methods

        Returns:
            True if the active token index or heard cursor moved
        """
        if not self._tokens or not spoken_tokens:
            return False

        new_tokens: list[str] = self._differ.diff(spoken_tokens)
        debug_log.log_hypothesis(spoken_tokens, new_tokens)
        if new_tokens:
            self._heard_tokens.extend(new_tokens)

        prev_active: int = self._active_token
        prev_heard_index: int = self._heard_index

        while self._active_token < len(self._tokens):
            target: str = self._tokens[self._active_token]
            found: int = self._comparer.index_of(
                self._heard_tokens, target, self._heard_index)
            if found == -1:
                break

            debug_log.log_token_match(
                self._active_token, target, self._heard_tokens[found])
            self._heard_index = found + 1
            self._active_token += 1

        if self._active_token != prev_active:
            logger.debug("Advanced from %d to %d of %d tokens",
                         prev_active, self._active_token, len(self._tokens))
            debug_log.log_position_update(
                prev_active,
                self._active_token,
                self._tokens[prev_active:self._active_token],
                "complete" if self.is_complete else "advance"
            )

        return (prev_active != self._active_token
                or prev_heard_index != self._heard_index)

    def update_with_speech(self, text: str | None, use_tail_window: bool = True) -> bool:
        """
        Tokenize a recognizer hypothesis and feed it.

        Args:
            text: Raw partial or final hypothesis text
            use_tail_window: Window the hypothesis as a cumulative transcript.
                Pass False when each hypothesis is an independent utterance.

        Returns:
            True if progress changed
        """
        if not text:
            return False

        if use_tail_window:
            tokens = self.tokenize_for_current_window(text)
        else:
            tokens = self.tokenize_for_matching(text)
        return self.feed(tokens)
