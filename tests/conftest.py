import random

import pytest

from text_analyzer import TextAnalyzer

# Letters of several scripts, digits, punctuation, line and paragraph
# separators, the byte order mark, combining marks, ZWJ, emoji and flags.
SAMPLE_CHARS = (
    "aZe09 .,;:'\"!?()-_\t\r\n\u00a0\u2028\u2029\ufeff\u0301\u05bc\u200d"
    "\U0001F680\U0001F468\U0001F1FA\U0001F1F8"
    "你好カひสัด한ש。"
)


def random_texts(seed, count=40, max_length=60):
    """Reproducible strings mixing SAMPLE_CHARS with arbitrary code points, lone surrogates included."""
    rng = random.Random(seed)
    texts = []
    for _ in range(count):
        chars = []
        for _ in range(rng.randrange(1, max_length)):
            if rng.random() < 0.2:
                chars.append(chr(rng.randrange(0x110000)))
            else:
                chars.append(rng.choice(SAMPLE_CHARS))
        texts.append("".join(chars))
    return texts


@pytest.fixture
def analyzer() -> TextAnalyzer:
    return TextAnalyzer()


@pytest.fixture(params=range(8))
def random_sample(request):
    return random_texts(request.param)
