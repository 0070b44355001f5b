"""
Extracts newly spoken tokens from successive recognizer hypotheses.

Partial results usually grow one word at a time, but recognizers also
shrink or rewrite their guess before settling on a final result.
"""

import logging

logger = logging.getLogger(__name__)


def starts_with(tokens: list[str], prefix: list[str]) -> bool:
    """Check if ``prefix`` is a token-wise prefix of ``tokens``."""
    if len(prefix) > len(tokens):
        return False
    return tokens[:len(prefix)] == prefix


class HypothesisDiffer:
    """Remembers the last hypothesis and reports what is new in the next one."""

    last_tokens: list[str]

    def __init__(self) -> None:
        self.last_tokens = []

    def reset(self) -> None:
        """Forget the previous hypothesis."""
        self.last_tokens = []

    def diff(self, current: list[str]) -> list[str]:
        """
        Return the tokens in ``current`` that were not in the last hypothesis.

        - No previous hypothesis: everything is new
        - Hypothesis grew: only the appended suffix is new
        - Hypothesis shrank (recognizer retraction): nothing is new
        - Hypothesis diverged mid-utterance: the whole hypothesis is new

        The heard history is never rewound, so a retraction only stops
        tokens from being added; it does not undo earlier ones.
        """
        last: list[str] = self.last_tokens
        self.last_tokens = list(current)

        if not last:
            return list(current)

        if starts_with(current, last):
            return current[len(last):]

        if starts_with(last, current):
            logger.debug("Hypothesis shrank from %d to %d tokens",
                         len(last), len(current))
            return []

        logger.debug("Hypothesis diverged: %s -> %s", last, current)
        return list(current)
