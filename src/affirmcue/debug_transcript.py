# Copyright © 2025 Ed Nutting
# SPDX-License-Identifier: MIT
# See LICENSE file for details

"""
Debug tool for replaying recorded recognizer results through the matcher.

This CLI tool takes an event file and a target phrase, feeds every
partial and final result to a SpeechMatcher in order, and outputs
detailed progress information to help debug matching issues.

Event file format (one result per line):
    === Recording started at 2025-12-21T00:00:00 ===
    partial: i
    partial: i am
    final: i am enough

Lines without a "partial:" or "final:" prefix are treated as finals.
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Literal, TextIO

from . import debug_log
from .config import load_config
from .matcher import SpeechMatcher
from .session import RecognitionResult

EventType = Literal["advance", "no_change", "complete"]

PARTIAL_PREFIX: str = "partial:"
FINAL_PREFIX: str = "final:"


@dataclass
class ReplayEvent:
    """A single matcher update during replay."""
    line: int
    kind: Literal["partial", "final"]
    text: str
    active_token: int
    target_word: str
    event_type: EventType


def parse_event_line(line: str) -> RecognitionResult:
    """Parse one event file line into a recognizer result."""
    lowered: str = line.lower()
    if lowered.startswith(PARTIAL_PREFIX):
        return RecognitionResult(line[len(PARTIAL_PREFIX):].strip(), is_partial=True)
    if lowered.startswith(FINAL_PREFIX):
        return RecognitionResult(line[len(FINAL_PREFIX):].strip(), is_partial=False)
    return RecognitionResult(line, is_partial=False)


def load_events(path: Path) -> list[RecognitionResult]:
    """Load an event file.

    Filters out metadata lines (starting with '===') and empty lines.
    """
    events: list[RecognitionResult] = []
    with open(path, encoding='utf-8') as f:
        for line in f:
            stripped_line: str = line.strip()
            if stripped_line.startswith('===') or not stripped_line:
                continue
            events.append(parse_event_line(stripped_line))
    return events


def replay_events(
    events: list[RecognitionResult],
    phrase: str,
    output: TextIO,
    verbose: bool = False,
    use_tail_window: bool = True,
    matcher: SpeechMatcher | None = None
) -> list[ReplayEvent]:
    """Replay recognizer results through a matcher and log progress.

    Args:
        events: Recognizer results in the order they arrived
        phrase: The target phrase
        output: File handle to write log output
        verbose: If True, log every result. If False, only log advances.
        use_tail_window: Window hypotheses as a cumulative transcript
        matcher: Matcher to use (a default one is created if None)

    Returns:
        List of all replay events
    """
    if matcher is None:
        matcher = SpeechMatcher()
    matcher.reset_for_text(phrase)
    tokens: list[str] = matcher.tokens
    replayed: list[ReplayEvent] = []

    # Write header
    output.write("=" * 80 + "\n")
    output.write("SPEECH MATCHER REPLAY LOG\n")
    output.write(f"Generated: {datetime.now().isoformat()}\n")
    output.write(f"Phrase: {' '.join(matcher.display_tokens)}\n")
    output.write(f"Target tokens: {len(tokens)}\n")
    output.write(f"Recognizer results: {len(events)}\n")
    output.write("=" * 80 + "\n\n")

    output.write("TARGET TOKENS:\n")
    output.write("-" * 40 + "\n")
    for i, token in enumerate(tokens):
        output.write(f"  [{i:4d}] {token}\n")
    output.write("\n" + "=" * 80 + "\n\n")

    output.write("MATCHING LOG:\n")
    output.write("-" * 40 + "\n")

    for line_num, result in enumerate(events, start=1):
        kind: Literal["partial", "final"] = "partial" if result.is_partial else "final"
        position_before: int = matcher.active_token

        matcher.update_with_speech(result.text, use_tail_window=use_tail_window)

        position_after: int = matcher.active_token

        event_type: EventType
        if position_after > position_before and matcher.is_complete:
            event_type = "complete"
        elif position_after > position_before:
            event_type = "advance"
        else:
            event_type = "no_change"

        target_word: str = (
            tokens[position_after] if position_after < len(tokens) else "<END>"
        )

        if event_type != "no_change" or verbose:
            marker: str = "*" if event_type != "no_change" else " "
            output.write(
                f"  {marker} {kind:7} \"{result.text[-60:]}\" "
                f"pos: {position_before} -> {position_after} "
                f"next=\"{target_word}\" ({event_type})\n"
            )

        replayed.append(ReplayEvent(
            line=line_num,
            kind=kind,
            text=result.text,
            active_token=position_after,
            target_word=target_word,
            event_type=event_type
        ))

    # Write summary
    output.write("\n" + "=" * 80 + "\n")
    output.write("SUMMARY:\n")
    output.write("-" * 40 + "\n")

    advances: list[ReplayEvent] = [
        e for e in replayed if e.event_type in ("advance", "complete")]
    partials: list[ReplayEvent] = [e for e in replayed if e.kind == "partial"]

    output.write(f"Total results processed: {len(events)}\n")
    output.write(f"Partials: {len(partials)}\n")
    output.write(f"Finals: {len(replayed) - len(partials)}\n")
    output.write(f"Final position: {matcher.active_token} / {len(tokens)}\n")
    output.write(f"Advances: {len(advances)}\n")
    output.write(f"Complete: {'yes' if matcher.is_complete else 'no'}\n")

    unmatched: list[str] = tokens[matcher.active_token:]
    if unmatched:
        output.write(f"\nNever heard: {' '.join(unmatched)}\n")
        output.write(f"Heard tokens: {' '.join(matcher.heard_tokens)}\n")

    return replayed


def main() -> None:
    """CLI entry point for the replay tool."""
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Debug phrase matching by replaying recorded recognizer results"
    )

    parser.add_argument(
        "events",
        type=Path,
        help="Path to recognizer event file"
    )

    parser.add_argument(
        "phrase",
        help="Target phrase the speaker was prompted to say"
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output log file path (default: stdout)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every result, not just advances"
    )

    parser.add_argument(
        "--full",
        action="store_true",
        help="Match whole hypotheses instead of a tail window"
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: ./.affirmcue.yaml)"
    )

    args: argparse.Namespace = parser.parse_args()

    config = load_config(args.config)
    logging.basicConfig(
        level=getattr(logging, str(config["log_level"]).upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )
    if config["debug_log"]:
        debug_log.enable()
        debug_log.clear_logs()

    if not args.events.exists():
        print(f"Error: Event file not found: {args.events}", file=sys.stderr)
        sys.exit(1)

    try:
        events: list[RecognitionResult] = load_events(args.events)
    except OSError as e:
        print(f"Error loading events: {e}", file=sys.stderr)
        sys.exit(1)

    if not events:
        print("Error: No recognizer results found", file=sys.stderr)
        sys.exit(1)

    try:
        matcher: SpeechMatcher = SpeechMatcher.from_config(config)
    except ValueError as e:
        print(f"Error in matching settings: {e}", file=sys.stderr)
        sys.exit(1)
    use_tail_window: bool = not args.full

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            replay_events(events, args.phrase, f, args.verbose,
                          use_tail_window, matcher)
        print(f"Replay log written to: {args.output}")
    else:
        replay_events(events, args.phrase, sys.stdout, args.verbose,
                      use_tail_window, matcher)


if __name__ == "__main__":
    main()
