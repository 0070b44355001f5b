"""
Wiring between a speech recognizer's result callbacks and a SpeechMatcher.

Recognizers report partial (revisable) and final (confirmed) results.
Both kinds are fed straight into the matcher; the session only reports
progress when it actually changed and signals completion once.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .matcher import MatchProgress, SpeechMatcher

logger = logging.getLogger(__name__)


@dataclass
class RecognitionResult:
    """A hypothesis from a speech recognizer."""

    text: str
    is_partial: bool

    def __repr__(self) -> str:
        status: str = "partial" if self.is_partial else "final"
        return f"RecognitionResult({status}: '{self.text}')"


class SpeechSession:
    """
    Feeds recognizer results for one phrase into a matcher.

    Usage:
        session = SpeechSession(on_progress=update_highlight,
                                on_complete=show_celebration)
        session.start("I am enough")
        recognizer.on_partial = session.on_partial
        recognizer.on_final = session.on_final
    """

    matcher: SpeechMatcher
    use_tail_window: bool

    def __init__(
        self,
        matcher: SpeechMatcher | None = None,
        on_progress: Callable[[MatchProgress], None] | None = None,
        on_complete: Callable[[MatchProgress], None] | None = None,
        use_tail_window: bool = True
    ) -> None:
        """
        Args:
            matcher: Matcher to drive (a default one is created if None)
            on_progress: Called with the new progress whenever it changes
            on_complete: Called once when the whole phrase has been spoken
            use_tail_window: Treat hypotheses as a cumulative transcript
        """
        self.matcher = matcher if matcher is not None else SpeechMatcher()
        self.use_tail_window = use_tail_window
        self._on_progress = on_progress
        self._on_complete = on_complete
        self._completion_reported = False

    @property
    def progress(self) -> MatchProgress:
        """Current progress through the phrase."""
        return self.matcher.current_progress

    def start(self, phrase: str) -> MatchProgress:
        """Begin a new phrase, abandoning any progress on the previous one."""
        self.matcher.reset_for_text(phrase)
        self._completion_reported = False
        logger.info("Session started for %d-word phrase",
                    len(self.matcher.tokens))
        return self.progress

    def on_partial(self, text: str) -> bool:
        """Handle a partial (revisable) recognizer result."""
        return self._update(text)

    def on_final(self, text: str) -> bool:
        """Handle a final recognizer result."""
        return self._update(text)

    def handle(self, result: RecognitionResult) -> bool:
        """Handle a recognizer result of either kind."""
        if result.is_partial:
            return self.on_partial(result.text)
        return self.on_final(result.text)

    def _update(self, text: str) -> bool:
        changed: bool = self.matcher.update_with_speech(
            text, use_tail_window=self.use_tail_window)
        if not changed:
            return False

        progress: MatchProgress = self.progress
        if self._on_progress is not None:
            self._on_progress(progress)

        if progress.is_complete and not self._completion_reported:
            self._completion_reported = True
            logger.info("Phrase complete")
            if self._on_complete is not None:
                self._on_complete(progress)

        return True
