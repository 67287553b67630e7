# segmenter.py
"""
Locale-bound Unicode text segmentation.

Three strategies partition a string into grapheme clusters, word spans and
sentence spans following the Unicode default segmentation rules (UAX #29).
Character properties come from the `regex` library, which ships the Unicode
Word_Break, Sentence_Break and Extended_Pictographic tables.
"""
from functools import lru_cache
from typing import Iterator, NamedTuple, Optional, Tuple

import regex

DEFAULT_LOCALE = "en-US"

_LANGUAGE_TAG = regex.compile(r"^[A-Za-z]{2,3}(?:-[A-Za-z0-9]{1,8})*$")


class Segment(NamedTuple):
    """One span produced by a segmenter."""
    segment: str
    index: int
    is_word_like: Optional[bool] = None


def resolve_locale(tag: Optional[str]) -> str:
    """
    Normalizes a language tag such as "en_us" to "en-US".

    Anything that does not look like a BCP 47 tag resolves to DEFAULT_LOCALE.
    """
    if not isinstance(tag, str):
        return DEFAULT_LOCALE
    candidate = tag.strip().replace("_", "-")
    if not _LANGUAGE_TAG.match(candidate):
        return DEFAULT_LOCALE

    language, *subtags = candidate.split("-")
    parts = [language.lower()]
    for subtag in subtags:
        if len(subtag) == 2 and subtag.isalpha():
            parts.append(subtag.upper())  # region
        elif len(subtag) == 4 and subtag.isalpha():
            parts.append(subtag.title())  # script
        else:
            parts.append(subtag.lower())
    return "-".join(parts)


# --- Character properties ----------------------------------------------------

# Word_Break values
CR, LF, NEWLINE = "CR", "LF", "Newline"
EXTEND, ZWJ, FORMAT = "Extend", "ZWJ", "Format"
REGIONAL_INDICATOR = "Regional_Indicator"
KATAKANA, HEBREW_LETTER, ALETTER = "Katakana", "Hebrew_Letter", "ALetter"
SINGLE_QUOTE, DOUBLE_QUOTE = "Single_Quote", "Double_Quote"
MID_NUM_LET, MID_LETTER, MID_NUM = "MidNumLet", "MidLetter", "MidNum"
NUMERIC, EXTEND_NUM_LET, WSEG_SPACE = "Numeric", "ExtendNumLet", "WSegSpace"
# Scripts written without spaces between words. Their letters are kept
# together as a single word-like run instead of breaking after every character.
IDEOGRAPHIC = "Ideographic"
OTHER = "Other"

# Sentence_Break values (CR, LF, Extend, Format and Numeric are shared names)
SEP, SP = "Sep", "Sp"
LOWER, UPPER, OLETTER = "Lower", "Upper", "OLetter"
ATERM, STERM, SCONTINUE, CLOSE = "ATerm", "STerm", "SContinue", "Close"

_WORD_BREAK_VALUES = (
    CR, LF, NEWLINE, EXTEND, ZWJ, FORMAT, REGIONAL_INDICATOR, KATAKANA,
    HEBREW_LETTER, ALETTER, SINGLE_QUOTE, DOUBLE_QUOTE, MID_NUM_LET,
    MID_LETTER, MID_NUM, NUMERIC, EXTEND_NUM_LET, WSEG_SPACE,
)
_SENTENCE_BREAK_VALUES = (
    CR, LF, EXTEND, SEP, FORMAT, SP, LOWER, UPPER, OLETTER, NUMERIC,
    ATERM, SCONTINUE, STERM, CLOSE,
)
_SPACELESS_SCRIPTS = ("Han", "Hiragana", "Thai", "Lao", "Khmer", "Myanmar")

_WORD_BREAK_CLASSES = regex.compile(
    "|".join(
        r"(?P<{0}>\p{{Word_Break={0}}})".format(value)
        for value in _WORD_BREAK_VALUES
    )
    + "|(?P<{0}>[{1}])".format(
        IDEOGRAPHIC,
        "".join(r"\p{{Script={0}}}".format(script) for script in _SPACELESS_SCRIPTS),
    )
)
_SENTENCE_BREAK_CLASSES = regex.compile(
    "|".join(
        r"(?P<{0}>\p{{Sentence_Break={0}}})".format(value)
        for value in _SENTENCE_BREAK_VALUES
    )
)
_PICTOGRAPHIC = regex.compile(r"\p{Extended_Pictographic}")
_WORD_CONTENT = regex.compile(r"[\p{L}\p{N}]")
_GRAPHEME = regex.compile(r"\X")


@lru_cache(maxsize=None)
def word_break_class(char: str) -> str:
    match = _WORD_BREAK_CLASSES.match(char)
    return match.lastgroup if match else OTHER


@lru_cache(maxsize=None)
def sentence_break_class(char: str) -> str:
    match = _SENTENCE_BREAK_CLASSES.match(char)
    return match.lastgroup if match else OTHER


@lru_cache(maxsize=None)
def _is_pictographic(char: str) -> bool:
    return _PICTOGRAPHIC.match(char) is not None


# --- Class codes -------------------------------------------------------------
#
# Boundaries are found by translating the text into one code letter per
# character and matching the break rules as a regular expression over that
# string. Offsets in the code string are offsets in the text.

class _CodeTable(dict):
    """A str.translate table that classifies code points on first use."""

    def __init__(self, classify):
        super().__init__()
        self._classify = classify

    def __missing__(self, codepoint):
        code = self[codepoint] = self._classify(chr(codepoint))
        return code


_WORD_CODES = {
    CR: "r", LF: "j", NEWLINE: "l",
    EXTEND: "e", ZWJ: "z", FORMAT: "f",
    REGIONAL_INDICATOR: "i", KATAKANA: "k",
    HEBREW_LETTER: "h", ALETTER: "a",
    SINGLE_QUOTE: "q", DOUBLE_QUOTE: "w",
    MID_NUM_LET: "p", MID_LETTER: "m", MID_NUM: "u",
    NUMERIC: "d", EXTEND_NUM_LET: "b", WSEG_SPACE: "s",
    IDEOGRAPHIC: "c", OTHER: "o",
}
_PICTOGRAPH_CODE = "g"

_SENTENCE_CODES = {
    CR: "r", LF: "j", SEP: "l",
    EXTEND: "e", FORMAT: "f", SP: "s",
    LOWER: "a", UPPER: "u", OLETTER: "o", NUMERIC: "d",
    ATERM: "t", STERM: "x", SCONTINUE: "c", CLOSE: "k", OTHER: "n",
}


def _word_code(char: str) -> str:
    value = word_break_class(char)
    if value == OTHER and _is_pictographic(char):
        return _PICTOGRAPH_CODE
    return _WORD_CODES[value]


def _sentence_code(char: str) -> str:
    return _SENTENCE_CODES[sentence_break_class(char)]


_WORD_TABLE = _CodeTable(_word_code)
_SENTENCE_TABLE = _CodeTable(_sentence_code)


# --- Word boundaries ---------------------------------------------------------

# Extend, Format and ZWJ stay with the preceding character (WB4), and so does
# a pictograph right after a ZWJ (WB3c).
_W_IGNORED = r"(?:[efz]|(?<=z)g)*"
_W_BEHIND = r"[efzg]*"

_WORD_TOKEN = regex.compile(
    (
        r"rj|[rjl]"                             # WB3-WB3b
        r"|[ahdbk]{E}(?:"
        r"(?<=[ahdb]{B})[ahd]{E}"               # WB5, WB8-WB10, WB13b
        r"|(?<=[ahdkb]{B})b{E}"                 # WB13a
        r"|(?<=[kb]{B})k{E}"                    # WB13, WB13b
        r"|(?<=[ah]{B})[mpq]{E}[ah]{E}"         # WB6, WB7
        r"|(?<=d{B})[upq]{E}d{E}"               # WB11, WB12
        r"|(?<=h{B})w{E}h{E}"                   # WB7b, WB7c
        r"|(?<=h{B})q{E}"                       # WB7a
        r")*"
        r"|(?:c{E})+"
        r"|i{E}(?:i{E})?"                       # WB15, WB16
        r"|s+{E}"                               # WB3d
        r"|.{E}"                                # WB999
    ).format(E=_W_IGNORED, B=_W_BEHIND)
)


def word_spans(text: str) -> Iterator[Tuple[int, int]]:
    """Yields (start, end) offsets between default word boundaries."""
    for match in _WORD_TOKEN.finditer(text.translate(_WORD_TABLE)):
        yield match.span()


# --- Sentence boundaries -----------------------------------------------------

_S_IGNORED = r"[ef]*"
_S_PARA_SEP = r"(?:rj|[rjl])"
_S_TERM_TAIL = r"(?:k[ef]*)*+(?:s[ef]*)*+"

_SENTENCE_TOKEN = regex.compile(
    (
        r"(?:"
        r"[^txrjl]{E}"                          # SB998
        r"|t{E}(?=d)"                           # SB6
        r"|(?<=[au]{E})t{E}(?=u)"               # SB7
        r"|[tx]{E}{T}(?=[ctx])"                 # SB8a
        r"|t{E}{T}(?=[^oualrjtx]*a)"            # SB8
        r")*"
        r"(?:[tx]{E}{T}{P}?|{P})?"              # SB4, SB9-SB11
    ).format(E=_S_IGNORED, T=_S_TERM_TAIL, P=_S_PARA_SEP)
)


def sentence_spans(text: str) -> Iterator[Tuple[int, int]]:
    """Yields (start, end) offsets between default sentence boundaries."""
    for match in _SENTENCE_TOKEN.finditer(text.translate(_SENTENCE_TABLE)):
        start, end = match.span()
        if end > start:
            yield start, end


# --- Strategies --------------------------------------------------------------

class LocaleSegmenter:
    """Base class for a segmentation strategy bound to one locale."""

    def __init__(self, locale: str = DEFAULT_LOCALE):
        self._locale = resolve_locale(locale)

    @property
    def locale(self) -> str:
        return self._locale

    def segment(self, text: str) -> Iterator[Segment]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return "{}(locale={!r})".format(type(self).__name__, self._locale)


class GraphemeSegmenter(LocaleSegmenter):
    """Splits text into extended grapheme clusters (user-perceived characters)."""

    def segment(self, text: str) -> Iterator[Segment]:
        for match in _GRAPHEME.finditer(text):
            yield Segment(match.group(), match.start())

    def count(self, text: str) -> int:
        return len(_GRAPHEME.findall(text))


class WordSegmenter(LocaleSegmenter):
    """Splits text into word and non-word spans, flagging the word-like ones."""

    def segment(self, text: str) -> Iterator[Segment]:
        for start, end in word_spans(text):
            word_like = _WORD_CONTENT.search(text, start, end) is not None
            yield Segment(text[start:end], start, word_like)

    def count_word_like(self, text: str) -> int:
        """Counts word-like spans without materializing the segments."""
        search = _WORD_CONTENT.search
        return sum(1 for start, end in word_spans(text) if search(text, start, end))


class SentenceSegmenter(LocaleSegmenter):
    """
    Splits text into sentence spans.

    Each span keeps its trailing whitespace and line breaks. Abbreviations
    followed by a capitalized word ("Dr. Smith") end a sentence.
    """

    def segment(self, text: str) -> Iterator[Segment]:
        for start, end in sentence_spans(text):
            yield Segment(text[start:end], start)

    def spans(self, text: str) -> Iterator[Tuple[int, int]]:
        return sentence_spans(text)
