"""
Debug trace of what the matcher heard and how far it advanced.

Writes to logs/matcher.log:
- Hypotheses fed in, with the tokens the differ treated as new
- Each target token confirmed, with the heard token that matched it
- Position changes of the active token index

Logging is disabled by default. Call enable() to turn it on.
"""

from datetime import datetime
from pathlib import Path
from typing import List

# Log files location (in project root)
LOG_DIR: Path = Path(__file__).parent.parent.parent / "logs"
MATCHER_LOG: Path = LOG_DIR / "matcher.log"

# Global flag to control whether debug logging is enabled
_ENABLED: bool = False  # pylint: disable=invalid-name


def enable() -> None:
    """Enable debug logging."""
    global _ENABLED  # pylint: disable=global-statement
    _ENABLED = True


def disable() -> None:
    """Disable debug logging."""
    global _ENABLED  # pylint: disable=global-statement
    _ENABLED = False


def is_enabled() -> bool:
    """Check if debug logging is enabled."""
    return _ENABLED


def _ensure_log_dir() -> None:
    """Create log directory if it doesn't exist."""
    LOG_DIR.mkdir(exist_ok=True)


def _timestamp() -> str:
    """Get current timestamp."""
    return datetime.now().strftime("%H:%M:%S.%f")[:-3]


def _append(text: str) -> None:
    _ensure_log_dir()
    with open(MATCHER_LOG, 'a', encoding='utf-8') as f:
        f.write(text)


def clear_logs() -> None:
    """Clear the log file for a fresh session."""
    if not _ENABLED:
        return
    _ensure_log_dir()
    with open(MATCHER_LOG, 'w', encoding='utf-8') as f:
        f.write(
            f"=== New session started at {datetime.now().isoformat()} ===\n\n")


def log_phrase(tokens: List[str]) -> None:
    """Log the target tokens after a reset."""
    if not _ENABLED:
        return
    _append(f"[{_timestamp()}] PHRASE: {tokens}\n")


def log_hypothesis(hypothesis: List[str], new_tokens: List[str]) -> None:
    """Log a hypothesis and the tokens extracted from it as newly spoken."""
    if not _ENABLED:
        return
    _append(
        f"[{_timestamp()}] hypothesis: {' '.join(hypothesis)[-60:]!r} "
        f"new_tokens={new_tokens}\n")


def log_token_match(target_index: int, target: str, heard: str) -> None:
    """
    Log a confirmed target token.

    Args:
        target_index: The position in the phrase
        target: The target token at that position
        heard: The heard token that matched it
    """
    if not _ENABLED:
        return
    _append(
        f"[{_timestamp()}] match           pos={target_index:4d} "
        f"word=\"{target}\" heard=\"{heard}\"\n")


def log_position_update(
    old_pos: int,
    new_pos: int,
    words_in_range: List[str],
    reason: str
) -> None:
    """
    Log a change of the active token index.

    Args:
        old_pos: Previous position
        new_pos: New position
        words_in_range: The target words between old and new positions
        reason: Why the position changed
    """
    if not _ENABLED:
        return
    _append(
        f"[{_timestamp()}] POSITION CHANGE: {old_pos} -> {new_pos} ({reason})\n"
        f"                 words: {words_in_range}\n")
