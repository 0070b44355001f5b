"""Tests for the debug_log module enable/disable functionality."""

import tempfile
from pathlib import Path
from unittest import mock

from affirmcue import debug_log
from affirmcue.matcher import SpeechMatcher


class TestDebugLogEnableDisable:
    """Test the enable/disable functionality of debug logging."""

    def setup_method(self):
        """Reset debug log state before each test."""
        debug_log.disable()

    def teardown_method(self):
        debug_log.disable()

    def test_disabled_by_default(self):
        """Debug logging should be disabled by default."""
        assert not debug_log.is_enabled()

    def test_enable(self):
        """enable() should turn on debug logging."""
        debug_log.enable()
        assert debug_log.is_enabled()

    def test_disable(self):
        """disable() should turn off debug logging."""
        debug_log.enable()
        debug_log.disable()
        assert not debug_log.is_enabled()

    def test_clear_logs_no_op_when_disabled(self):
        """clear_logs() should do nothing when logging is disabled."""
        with mock.patch.object(debug_log, '_ensure_log_dir') as mock_ensure:
            debug_log.clear_logs()
            mock_ensure.assert_not_called()

    def test_log_functions_no_op_when_disabled(self):
        """No log function touches the filesystem when disabled."""
        with mock.patch.object(debug_log, '_ensure_log_dir') as mock_ensure:
            debug_log.log_phrase(["i", "am"])
            debug_log.log_hypothesis(["i", "am"], ["am"])
            debug_log.log_token_match(0, "i", "i")
            debug_log.log_position_update(0, 1, ["i"], "advance")
            mock_ensure.assert_not_called()

    def test_matcher_does_not_write_when_disabled(self):
        with mock.patch.object(debug_log, '_ensure_log_dir') as mock_ensure:
            matcher = SpeechMatcher()
            matcher.reset_for_text("I am enough")
            matcher.update_with_speech("I am enough")
            mock_ensure.assert_not_called()


class TestDebugLogWriting:
    """Test log output when enabled."""

    def setup_method(self):
        debug_log.enable()

    def teardown_method(self):
        debug_log.disable()

    def test_clear_logs_writes_when_enabled(self):
        """clear_logs() should start a fresh log file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_path = Path(tmpdir) / "matcher.log"
            with mock.patch.object(debug_log, 'LOG_DIR', Path(tmpdir)), \
                    mock.patch.object(debug_log, 'MATCHER_LOG', log_path):
                log_path.write_text("stale\n", encoding="utf-8")

                debug_log.clear_logs()

                content = log_path.read_text(encoding="utf-8")
                assert "New session started" in content
                assert "stale" not in content

    def test_matcher_trace_when_enabled(self):
        """A matcher run records the phrase, hypotheses, matches and moves."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_path = Path(tmpdir) / "matcher.log"
            with mock.patch.object(debug_log, 'LOG_DIR', Path(tmpdir)), \
                    mock.patch.object(debug_log, 'MATCHER_LOG', log_path):
                matcher = SpeechMatcher()
                matcher.reset_for_text("I am enough")
                matcher.update_with_speech("I am")

                content = log_path.read_text(encoding="utf-8")
                assert "PHRASE: ['i', 'am', 'enough']" in content
                assert "new_tokens=['i', 'am']" in content
                assert 'pos=   1 word="am" heard="am"' in content
                assert "POSITION CHANGE: 0 -> 2 (advance)" in content
