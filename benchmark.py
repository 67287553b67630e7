# benchmark.py
"""
Performance benchmark for the text analyzer.

Generates a ~10,000-word document and times every counting operation against
a per-operation threshold. Prints a summary followed by a JSON report and
exits with status 1 if any operation fails or is too slow.

    python benchmark.py [--words N] [--threshold MS] [--locale TAG]
"""
import argparse
import json
import random
import sys
import time
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from text_analyzer import TextAnalyzer

DEFAULT_WORD_COUNT = 10_000
DEFAULT_THRESHOLD_MS = 100.0

LOREM_WORDS = (
    "lorem ipsum dolor sit amet consectetur adipiscing elit sed do eiusmod "
    "tempor incididunt ut labore et dolore magna aliqua enim ad minim veniam "
    "quis nostrud exercitation ullamco laboris nisi aliquip ex ea commodo "
    "consequat duis aute irure in reprehenderit voluptate velit esse cillum "
    "fugiat nulla pariatur excepteur sint occaecat cupidatat non proident "
    "sunt culpa qui officia deserunt mollit anim id est laborum"
).split()


@dataclass
class BenchmarkResult:
    method: str
    words: int
    elapsed_ms: float
    passed: bool
    threshold_ms: float


def generate_test_text(word_count: int, seed: Optional[int] = None) -> str:
    """
    Builds lorem-ipsum text with exactly `word_count` words.

    Sentences are at least 8 words long, and roughly every fourth sentence
    may be followed by a paragraph break.
    """
    rng = random.Random(seed)
    paragraphs = []
    sentences = []
    current = []

    for _ in range(word_count):
        current.append(rng.choice(LOREM_WORDS))
        # End sentence every 8-15 words
        if len(current) >= 8 and rng.random() < 0.3:
            sentences.append(" ".join(current).capitalize() + ".")
            current = []
            if len(sentences) % 4 == 0 and rng.random() < 0.6:
                paragraphs.append(" ".join(sentences))
                sentences = []

    if current:
        sentences.append(" ".join(current).capitalize() + ".")
    if sentences:
        paragraphs.append(" ".join(sentences))
    return "\n\n".join(paragraphs)


def benchmark_method(
    name: str,
    method: Callable[[str], int],
    text: str,
    threshold_ms: float = DEFAULT_THRESHOLD_MS,
) -> BenchmarkResult:
    """Times one call of `method` after a warm-up call."""
    method(text)

    start = time.perf_counter()
    method(text)
    elapsed_ms = (time.perf_counter() - start) * 1000

    return BenchmarkResult(
        method=name,
        words=len(text.split()),
        elapsed_ms=round(elapsed_ms, 2),
        passed=elapsed_ms < threshold_ms,
        threshold_ms=threshold_ms,
    )


def run_benchmarks(
    word_count: int = DEFAULT_WORD_COUNT,
    threshold_ms: float = DEFAULT_THRESHOLD_MS,
    locale: str = "en-US",
    seed: Optional[int] = None,
    verbose: bool = False,
) -> Dict[str, Any]:
    """Benchmarks all five counting operations and returns a JSON-ready report."""
    text = generate_test_text(word_count, seed)
    actual_words = len(text.split())
    analyzer = TextAnalyzer(locale)
    methods = {
        "count_words": analyzer.count_words,
        "count_letters": analyzer.count_letters,
        "count_characters": analyzer.count_characters,
        "count_sentences": analyzer.count_sentences,
        "count_paragraphs": analyzer.count_paragraphs,
    }

    if verbose:
        print(f"📝 Generated test text: {actual_words} words, {len(text)} characters")
        print(f"📊 Performance threshold: <{threshold_ms:g}ms per operation\n")

    results = []
    errors = []
    for name, method in methods.items():
        try:
            result = benchmark_method(name, method, text, threshold_ms)
        except Exception as e:
            errors.append(name)
            if verbose:
                print(f"❌ {name}: ERROR - {e}", file=sys.stderr)
            continue
        results.append(result)
        if verbose:
            status = "✅" if result.passed else "❌"
            print(f"{status} {result.method}: {result.elapsed_ms}ms (threshold: {threshold_ms:g}ms)")

    times = [r.elapsed_ms for r in results]
    all_passed = not errors and all(r.passed for r in results)
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "text_length": len(text),
        "word_count": actual_words,
        "results": [asdict(r) for r in results],
        "errors": errors,
        "summary": {
            "all_passed": all_passed,
            "avg_time": round(sum(times) / len(times), 2) if times else 0.0,
            "max_time": max(times) if times else 0.0,
        },
    }


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Benchmark the wordcount-mcp text analyzer.")
    parser.add_argument("--words", type=int, default=DEFAULT_WORD_COUNT, help="size of the generated document")
    parser.add_argument("--threshold", type=float, default=DEFAULT_THRESHOLD_MS, help="per-operation limit in ms")
    parser.add_argument("--locale", default="en-US", help="analyzer locale")
    parser.add_argument("--seed", type=int, default=None, help="random seed for the generated text")
    args = parser.parse_args(argv)

    print("🚀 Starting wordcount-mcp performance benchmarks...\n")
    report = run_benchmarks(args.words, args.threshold, args.locale, args.seed, verbose=True)
    summary = report["summary"]

    print("\n📈 Performance Summary:")
    print(f"   Average time: {summary['avg_time']}ms")
    print(f"   Maximum time: {summary['max_time']}ms")
    print(f"   All tests passed: {'✅' if summary['all_passed'] else '❌'}")

    print("\n📋 JSON Results:")
    print(json.dumps(report, indent=2))

    if not summary["all_passed"]:
        print("\n❌ Some performance tests failed - see results above", file=sys.stderr)
        return 1
    print("\n✅ All performance benchmarks passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
