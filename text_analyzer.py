# text_analyzer.py
import re
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from segmenter import (
    DEFAULT_LOCALE,
    GraphemeSegmenter,
    SentenceSegmenter,
    WordSegmenter,
    resolve_locale,
)

# Only the unaccented Latin alphabet counts as a letter.
_LATIN_LETTER = re.compile(r"[a-zA-Z]")
# A line break, optional blank space, then another line break.
_PARAGRAPH_BREAK = re.compile(r"\n[\s\ufeff]*\n|\r\n[\s\ufeff]*\r\n")
# Whitespace and the byte order mark are blank.
_CONTENT = re.compile(r"[^\s\ufeff]")


@dataclass(frozen=True)
class AnalysisResult:
    """All text metrics for one input, as returned by TextAnalyzer.analyze_text."""
    word_count: int = 0
    letter_count: int = 0
    character_count: int = 0
    sentence_count: int = 0
    paragraph_count: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


class TextAnalyzer:
    """
    Counts characters, words, letters, sentences and paragraphs in a string.

    The analyzer is bound to one locale at construction. Its three segmenters
    are built once and hold no per-call state, so a single instance can be
    shared between concurrent callers.

    Every operation accepts any string, or None, and returns a non-negative
    integer; empty input always counts as 0.
    """

    def __init__(self, locale: str = DEFAULT_LOCALE):
        """
        Args:
            locale: A BCP 47 language tag, e.g. "en-US" or "ko-KR". Malformed
                tags fall back to the default locale.
        """
        self.locale = resolve_locale(locale)
        self._graphemes = GraphemeSegmenter(self.locale)
        self._words = WordSegmenter(self.locale)
        self._sentences = SentenceSegmenter(self.locale)

    def count_characters(self, text: Optional[str]) -> int:
        """Counts user-perceived characters (grapheme clusters)."""
        if not text:
            return 0
        return self._graphemes.count(text)

    def count_words(self, text: Optional[str]) -> int:
        """Counts word-like segments; whitespace and punctuation are skipped."""
        if not text:
            return 0
        return self._words.count_word_like(text)

    def count_letters(self, text: Optional[str]) -> int:
        """
        Counts the characters a-z and A-Z.

        Digits, punctuation, accented Latin letters and other scripts are not
        letters here: "café" has 3.
        """
        if not text:
            return 0
        return len(_LATIN_LETTER.findall(text))

    def count_paragraphs(self, text: Optional[str]) -> int:
        """Counts blocks of text separated by one or more blank lines."""
        if not text or not _CONTENT.search(text):
            return 0
        paragraphs = _PARAGRAPH_BREAK.split(text)
        return sum(1 for paragraph in paragraphs if _CONTENT.search(paragraph))

    def count_sentences(self, text: Optional[str]) -> int:
        """
        Counts sentences using the Unicode sentence-boundary rules.

        Abbreviations such as "Dr." are not special-cased and may end a
        sentence; an ellipsis is a single boundary.
        """
        if not text or not _CONTENT.search(text):
            return 0
        search = _CONTENT.search
        return sum(1 for start, end in self._sentences.spans(text) if search(text, start, end))

    def analyze_text(self, text: Optional[str]) -> AnalysisResult:
        return AnalysisResult(
            word_count=self.count_words(text),
            letter_count=self.count_letters(text),
            character_count=self.count_characters(text),
            sentence_count=self.count_sentences(text),
            paragraph_count=self.count_paragraphs(text),
        )

    def __repr__(self) -> str:
        return "TextAnalyzer(locale={!r})".format(self.locale)
