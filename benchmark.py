"""
Benchmark: intraline on synthetic diff hunks.

Measures how infer_edits scales with:
    1. line length (tokens per line), one alignment per pair
    2. hunk height (lines per side), quadratic candidate scan
and compares the DP aligner with the difflib-backed one on both cost
and the distances they report.
"""

import sys
import os
import random
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from intraline.core import Alignment, SequenceMatcherAlignment
from intraline.edits import EditOperation, annotate, infer_edits
from intraline.tokens import tokenize

LABELS = tuple(EditOperation)

WORDS = [
    "self", "return", "value", "index", "items", "len", "range", "None",
    "config", "path", "result", "append", "key", "data", "x", "y", "0", "1",
]
SEPS = [" ", ", ", ".", "(", ")", "[", "]", ": "]


# ═══════════════════════════════════════════════════════════════════
#  TEST DATA
# ═══════════════════════════════════════════════════════════════════

def make_line(rng, n_tokens):
    parts = []
    for _ in range(n_tokens // 2):
        parts.append(rng.choice(WORDS))
        parts.append(rng.choice(SEPS))
    return "".join(parts)


def edit_line(rng, line, n_edits=2):
    tokens = tokenize(line)
    for _ in range(n_edits):
        if tokens:
            tokens[rng.randrange(len(tokens))] = rng.choice(WORDS)
    return "".join(tokens)


def make_hunk(rng, height, n_tokens):
    minus = [make_line(rng, n_tokens) for _ in range(height)]
    plus = []
    for line in minus:
        if rng.random() < 0.3:
            plus.append(make_line(rng, n_tokens))  # unrelated insertion
        plus.append(edit_line(rng, line))
    return minus, plus


# ═══════════════════════════════════════════════════════════════════
#  BENCHMARKS
# ═══════════════════════════════════════════════════════════════════

def benchmark_line_length():
    print("=" * 70)
    print("  §1  LINE LENGTH (single pair)")
    print("=" * 70)
    print()

    rng = random.Random(1)
    for n in [10, 50, 100, 200, 400]:
        minus_line = make_line(rng, n)
        plus_line = edit_line(rng, minus_line, n_edits=max(1, n // 20))
        for strategy in (Alignment, SequenceMatcherAlignment):
            t0 = time.perf_counter()
            *_, d = annotate(
                strategy(tokenize(minus_line), tokenize(plus_line)),
                minus_line, plus_line, *LABELS,
            )
            dt = time.perf_counter() - t0
            print(f"  {strategy.__name__:<26} tokens={n:>4}  d={d:.3f}  time={dt*1000:>8.2f}ms")
    print()


def benchmark_hunk_height():
    print("=" * 70)
    print("  §2  HUNK HEIGHT (lines per side, 20 tokens per line)")
    print("=" * 70)
    print()

    rng = random.Random(2)
    for height in [1, 5, 10, 25, 50]:
        minus, plus = make_hunk(rng, height, 20)
        for strategy in (Alignment, SequenceMatcherAlignment):
            t0 = time.perf_counter()
            a_minus, a_plus = infer_edits(minus, plus, *LABELS, 0.6, aligner=strategy)
            dt = time.perf_counter() - t0
            changed = sum(
                1 for line in a_minus
                if any(label == EditOperation.DELETION for label, _ in line)
            )
            print(f"  {strategy.__name__:<26} minus={len(minus):>3} plus={len(plus):>3}  "
                  f"edited pairs={changed:>3}  time={dt*1000:>8.2f}ms")
    print()


def benchmark_distance_agreement():
    print("=" * 70)
    print("  §3  DISTANCE AGREEMENT (DP vs difflib)")
    print("=" * 70)
    print()

    rng = random.Random(3)
    diffs = []
    for _ in range(500):
        minus_line = make_line(rng, 20)
        plus_line = edit_line(rng, minus_line, n_edits=rng.randint(0, 5))
        x, y = tokenize(minus_line), tokenize(plus_line)
        *_, d_dp = annotate(Alignment(x, y), minus_line, plus_line, *LABELS)
        *_, d_sm = annotate(SequenceMatcherAlignment(x, y), minus_line, plus_line, *LABELS)
        diffs.append(abs(d_dp - d_sm))

    print(f"  Pairs:              {len(diffs)}")
    print(f"  Identical distance: {sum(1 for d in diffs if d < 1e-9)}")
    print(f"  Mean |Δd|:          {sum(diffs) / len(diffs):.4f}")
    print(f"  Max |Δd|:           {max(diffs):.4f}")
    print()


def main():
    print()
    benchmark_line_length()
    benchmark_hunk_height()
    benchmark_distance_agreement()


if __name__ == "__main__":
    main()
