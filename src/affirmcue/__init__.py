"""
affirmcue - Real-time progress matching for spoken affirmations.

Follows a speech recognizer's partial and final results and reports how
much of a target phrase has been spoken aloud, tolerating filler words,
inflections and single-character transcription slips.
"""

__version__ = "0.1.0"

from .fuzzy import EnglishSuffixStemmer, Stemmer, TokenComparer, tokens_equal
from .matcher import MatchProgress, SpeechMatcher
from .session import RecognitionResult, SpeechSession
from .tokenizer import normalize, to_display

__all__ = [
    "SpeechMatcher",
    "MatchProgress",
    "SpeechSession",
    "RecognitionResult",
    "TokenComparer",
    "Stemmer",
    "EnglishSuffixStemmer",
    "tokens_equal",
    "normalize",
    "to_display",
]
